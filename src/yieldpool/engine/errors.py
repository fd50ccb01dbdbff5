"""Exception taxonomy for pool operations.

Every error aborts the single operation it was raised from; the pool is left
exactly as it was before the call.
"""

from typing import Any


class LedgerError(Exception):
    """Base class for all pool errors."""


class DepositsClosed(LedgerError):
    """Deposit gate is paused."""

    def __init__(self):
        super().__init__("Deposits are closed")


class ClaimsClosed(LedgerError):
    """Claim gate is paused."""

    def __init__(self):
        super().__init__("Claims are closed")


class CompoundClosed(LedgerError):
    """Compound gate is paused."""

    def __init__(self):
        super().__init__("Compounding is closed")


class AlreadyHasStake(LedgerError):
    """Account already holds a live stake."""

    def __init__(self, account: Any):
        self.account = account
        super().__init__(f"Account {account!r} already has a live stake")


class NothingToClaim(LedgerError):
    def __init__(self, account: Any = None):
        self.account = account
        super().__init__(f"Account {account!r} has nothing to claim")


class NothingToDeposit(LedgerError):
    def __init__(self, account: Any = None):
        self.account = account
        super().__init__(f"Account {account!r} has nothing to deposit")


class InsufficientLedgerBalance(LedgerError):
    """Claim payout exceeds the collateral held by the pool."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Pool balance too low: requested {requested}, available {available}"
        )


class InvalidStartTime(LedgerError):
    def __init__(self, start_time: int, now: int):
        self.start_time = start_time
        self.now = now
        super().__init__(f"Start time {start_time} is before current time {now}")


class StartTimeNotIncreasing(LedgerError):
    def __init__(self, start_time: int, last_start_time: int):
        self.start_time = start_time
        self.last_start_time = last_start_time
        super().__init__(
            f"Start time {start_time} must be after last scheduled start {last_start_time}"
        )


class Unauthorized(LedgerError):
    def __init__(self, caller: Any):
        self.caller = caller
        super().__init__(f"Caller {caller!r} is not privileged")


class ArithmeticOverflow(LedgerError):
    """An integer result left the unsigned 256-bit range."""

    def __init__(self, op: str, value: int):
        self.op = op
        self.value = value
        super().__init__(f"Arithmetic overflow in {op}")


class TransferFailed(LedgerError):
    """Raised by the in-memory asset ledger when a transfer cannot be made."""

    def __init__(self, account: Any, amount: int, balance: int):
        self.account = account
        self.amount = amount
        self.balance = balance
        super().__init__(
            f"Transfer of {amount} for {account!r} failed: balance {balance}"
        )
