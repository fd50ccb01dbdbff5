"""External collaborators: asset transfers, authorization and time.

The pool only depends on the protocols below. The in-memory implementations
back tests and offline simulation.
"""

import time
from typing import Dict, Hashable, Iterable, Optional, Protocol

from .errors import TransferFailed


class AssetLedger(Protocol):
    """Fungible-asset transfer mechanism holding the pool's collateral."""

    def debit(self, account: Hashable, amount: int) -> None:
        """Move amount from account into the pool. Raises on failure."""

    def credit(self, account: Hashable, amount: int) -> None:
        """Move amount from the pool to account. Raises on failure."""

    def available_balance(self) -> int:
        """Collateral currently held by the pool."""


class Authorizer(Protocol):
    def is_privileged(self, caller: Hashable) -> bool:
        ...


class Clock(Protocol):
    def now(self) -> int:
        ...


class InMemoryAssetLedger:
    """Wallet balances plus a pool reserve, all integers."""

    def __init__(self, balances: Optional[Dict[Hashable, int]] = None, reserve: int = 0):
        """
        Initialize ledger.

        Args:
            balances: Starting wallet balance per account
            reserve: Starting collateral held by the pool
        """
        self.balances: Dict[Hashable, int] = dict(balances or {})
        self.reserve = reserve

    def balance_of(self, account: Hashable) -> int:
        return self.balances.get(account, 0)

    def fund_pool(self, amount: int) -> None:
        """Top up pool collateral from outside (e.g. yield funding)."""
        self.reserve += amount

    def debit(self, account: Hashable, amount: int) -> None:
        balance = self.balance_of(account)
        if amount < 0 or balance < amount:
            raise TransferFailed(account, amount, balance)
        self.balances[account] = balance - amount
        self.reserve += amount

    def credit(self, account: Hashable, amount: int) -> None:
        if amount < 0 or self.reserve < amount:
            raise TransferFailed(account, amount, self.reserve)
        self.reserve -= amount
        self.balances[account] = self.balance_of(account) + amount

    def available_balance(self) -> int:
        return self.reserve


class StaticAuthorizer:
    """Fixed set of privileged callers."""

    def __init__(self, admins: Iterable[Hashable] = ()):
        self.admins = set(admins)

    def is_privileged(self, caller: Hashable) -> bool:
        return caller in self.admins


class SystemClock:
    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Settable clock for tests and simulation."""

    def __init__(self, start: int = 0):
        self.current = start

    def now(self) -> int:
        return self.current

    def set(self, t: int) -> None:
        self.current = t

    def advance(self, seconds: int) -> int:
        self.current += seconds
        return self.current
