"""Yield pool: deposit, compound and claim over a shared interest-bearing pool.

Every operation runs under a per-pool lock and stages its changes: the new
stake and the new LedgerState are computed first, the external asset transfer
is attempted, and only then are both committed. A failed transfer leaves the
pool untouched and its exception propagates unchanged.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

from .collaborators import AssetLedger, Authorizer, Clock, SystemClock
from .errors import (
    AlreadyHasStake,
    ArithmeticOverflow,
    ClaimsClosed,
    CompoundClosed,
    DepositsClosed,
    InsufficientLedgerBalance,
    NothingToClaim,
    NothingToDeposit,
    Unauthorized,
)
from .events import (
    AddressChanged,
    Claimed,
    Compounded,
    DepositMade,
    EventLog,
    GateChanged,
    TokensRemoved,
    YieldChangeAdded,
    YieldChangeRemoved,
)
from .fixed_point import SCALE, SECONDS_PER_YEAR, checked_add
from .integrator import YieldIntegrator
from .schedule import RateChangeEntry, RateSchedule
from .solvency import LedgerState, SolvencyLedger
from .stakes import AccountStake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent read of the pool at one instant."""
    time: int
    total_principal: int
    weighted_anchor: int
    total_liabilities: int
    available_balance: int
    stakes: Dict[Hashable, AccountStake] = field(default_factory=dict)
    gates: Dict[str, bool] = field(default_factory=dict)
    schedule: List[RateChangeEntry] = field(default_factory=list)

    @property
    def net_owed(self) -> int:
        return max(self.total_liabilities - self.available_balance, 0)


class YieldPool:
    """Single-position-per-account simple-interest pool with O(1) liabilities."""

    def __init__(
        self,
        asset: AssetLedger,
        authorizer: Authorizer,
        clock: Optional[Clock] = None,
        base_rate_per_year: int = 0,
        seconds_per_year: int = SECONDS_PER_YEAR,
        scale: int = SCALE,
        deposits_open: bool = True,
        claims_open: bool = True,
        compound_open: bool = True,
        event_history: Optional[int] = None,
    ):
        """
        Initialize pool.

        Args:
            asset: Asset ledger holding the pool's collateral
            authorizer: Predicate gating administrative operations
            clock: Time source in integer seconds (defaults to wall clock)
            base_rate_per_year: Annual base rate scaled by 1e18
            seconds_per_year: Divisor for annual to per-second conversion
            scale: Fixed-point scale of rates and the yield integral
            deposits_open: Initial deposit gate
            claims_open: Initial claim gate
            compound_open: Initial compound gate
            event_history: Number of recent events retained (unbounded if None)
        """
        self.asset = asset
        self.authorizer = authorizer
        self.clock = clock or SystemClock()
        self.schedule = RateSchedule(base_rate_per_year, seconds_per_year)
        self.integrator = YieldIntegrator(self.schedule, scale)
        self.solvency = SolvencyLedger(self.integrator)
        self.state = LedgerState()
        self.event_log = EventLog(maxlen=event_history)
        self._stakes: Dict[Hashable, AccountStake] = {}
        self._gates = {
            "deposit": deposits_open,
            "claim": claims_open,
            "compound": compound_open,
        }
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config,
        asset: AssetLedger,
        authorizer: Authorizer,
        clock: Optional[Clock] = None,
    ) -> 'YieldPool':
        """Build a pool from a PoolConfig."""
        pool = cls(
            asset=asset,
            authorizer=authorizer,
            clock=clock,
            base_rate_per_year=config.rates.base_rate_per_year,
            seconds_per_year=config.rates.seconds_per_year,
            scale=config.rates.scale,
            deposits_open=config.gates.deposits_open,
            claims_open=config.gates.claims_open,
            compound_open=config.gates.compound_open,
        )
        # No stakes exist yet, so historical entries cannot disturb the aggregates
        for entry in config.rates.schedule:
            pool.schedule.add_rate(entry.rate_per_year, entry.start_time, now=0)
        return pool

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def deposit(self, account: Hashable, amount: int) -> AccountStake:
        """
        Open a new stake for account.

        Raises:
            DepositsClosed: Deposit gate is paused
            AlreadyHasStake: Account already holds a live stake
            NothingToDeposit: amount is not positive
        """
        with self._lock:
            if not self._gates["deposit"]:
                raise DepositsClosed()
            if account in self._stakes:
                raise AlreadyHasStake(account)
            if amount <= 0:
                raise NothingToDeposit(account)

            now = self.clock.now()
            stake = AccountStake(principal=amount, t0=now)
            new_state = self.solvency.open_position(self.state, amount, now)

            self.asset.debit(account, amount)

            self._stakes[account] = stake
            self.state = new_state
            logger.info("Deposit: account=%r amount=%d t=%d", account, amount, now)
            self.event_log.emit(DepositMade(account=account, amount=amount, timestamp=now))
            return stake

    def compound_and_deposit(self, account: Hashable, extra: int = 0) -> AccountStake:
        """
        Roll accrued interest (plus an optional top-up) into a fresh stake.

        The existing position is closed at its original anchor and reopened
        at now with principal + interest + extra.

        Raises:
            CompoundClosed: Compound gate is paused
            NothingToDeposit: No live stake and extra is zero
            DepositsClosed: extra > 0 while the deposit gate is paused
        """
        if extra < 0:
            raise ValueError(f"extra must be non-negative, got {extra}")
        with self._lock:
            if not self._gates["compound"]:
                raise CompoundClosed()
            existing = self._stakes.get(account)
            principal = existing.principal if existing is not None else 0
            if principal == 0 and extra == 0:
                raise NothingToDeposit(account)
            if extra > 0 and not self._gates["deposit"]:
                raise DepositsClosed()

            now = self.clock.now()
            new_state = self.state
            interest = 0
            if principal > 0:
                interest = existing.interest(self.integrator, now)
                new_state = self.solvency.close_position(new_state, principal, existing.t0)

            new_principal = checked_add(checked_add(principal, interest), extra)
            stake = AccountStake(principal=new_principal, t0=now)
            new_state = self.solvency.open_position(new_state, new_principal, now)

            if extra > 0:
                self.asset.debit(account, extra)

            self._stakes[account] = stake
            self.state = new_state
            logger.info(
                "Compound: account=%r principal=%d interest=%d extra=%d t=%d",
                account, new_principal, interest, extra, now,
            )
            self.event_log.emit(Compounded(
                account=account,
                new_principal=new_principal,
                interest=interest,
                timestamp=now,
            ))
            return stake

    def claim(self, account: Hashable) -> int:
        """
        Close the account's stake and pay out principal plus interest.

        Returns:
            Amount credited to the account

        Raises:
            ClaimsClosed: Claim gate is paused
            NothingToClaim: No live stake
            InsufficientLedgerBalance: Pool collateral below the payout
        """
        with self._lock:
            if not self._gates["claim"]:
                raise ClaimsClosed()
            stake = self._stakes.get(account)
            if stake is None:
                raise NothingToClaim(account)

            now = self.clock.now()
            interest = stake.interest(self.integrator, now)
            payout = checked_add(stake.principal, interest)
            new_state = self.solvency.close_position(self.state, stake.principal, stake.t0)

            available = self.asset.available_balance()
            if available < payout:
                raise InsufficientLedgerBalance(payout, available)
            self.asset.credit(account, payout)

            del self._stakes[account]
            self.state = new_state
            logger.info(
                "Claim: account=%r principal=%d interest=%d t=%d",
                account, stake.principal, interest, now,
            )
            self.event_log.emit(Claimed(
                account=account,
                principal=stake.principal,
                interest=interest,
                timestamp=now,
            ))
            return payout

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_current_yield_rate(self) -> Tuple[int, int]:
        """Active (rate_per_second, start_time) at now."""
        with self._lock:
            return self.schedule.active_rate(self.clock.now())

    def get_withdrawable_user_balance(self, account: Hashable) -> int:
        with self._lock:
            stake = self._stakes.get(account)
            if stake is None:
                return 0
            return stake.value(self.integrator, self.clock.now())

    def get_total_funds_needed(self) -> int:
        with self._lock:
            return self.solvency.total_liabilities(self.state, self.clock.now())

    def get_net_owed(self) -> int:
        with self._lock:
            return self.solvency.net_owed(
                self.state, self.clock.now(), self.asset.available_balance()
            )

    def get_stake(self, account: Hashable) -> Optional[AccountStake]:
        with self._lock:
            return self._stakes.get(account)

    def is_open(self, gate: str) -> bool:
        with self._lock:
            return self._gates[gate]

    @property
    def events(self) -> List[Any]:
        """Copy of the retained committed events, oldest first."""
        with self._lock:
            return list(self.event_log.events)

    def subscribe(self, callback) -> None:
        """Register a callback invoked with each committed event."""
        with self._lock:
            self.event_log.subscribe(callback)

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            now = self.clock.now()
            return LedgerSnapshot(
                time=now,
                total_principal=self.state.total_principal,
                weighted_anchor=self.state.weighted_anchor,
                total_liabilities=self.solvency.total_liabilities(self.state, now),
                available_balance=self.asset.available_balance(),
                stakes=dict(self._stakes),
                gates=dict(self._gates),
                schedule=self.schedule.entries,
            )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def _require_privileged(self, caller: Hashable) -> None:
        if not self.authorizer.is_privileged(caller):
            raise Unauthorized(caller)

    def add_yield_change(self, caller: Hashable, rate_per_year: int, start_time: int) -> RateChangeEntry:
        """Schedule a new annual rate (scaled by 1e18) from start_time onward."""
        with self._lock:
            self._require_privileged(caller)
            now = self.clock.now()
            entry = self.schedule.add_rate(rate_per_year, start_time, now)
            logger.info(
                "Yield change added: rate_per_year=%d start=%d rate_per_second=%d",
                rate_per_year, start_time, entry.rate_per_second,
            )
            self.event_log.emit(YieldChangeAdded(
                rate_per_year=rate_per_year, start_time=start_time, timestamp=now
            ))
            return entry

    def remove_yield_change(self, caller: Hashable, start_time: int) -> Optional[RateChangeEntry]:
        """
        Remove the scheduled change at start_time; unknown keys are a no-op.

        Removing a change that already took effect alters C(t) for past
        instants, so B is rebuilt from the live stakes.
        """
        with self._lock:
            self._require_privileged(caller)
            now = self.clock.now()
            removed = self.schedule.remove_rate(start_time)
            if removed is None:
                return None

            if removed.start_time < now:
                try:
                    new_state = self.solvency.rebuild(self._stakes.values())
                except ArithmeticOverflow:
                    self.schedule.restore(removed)
                    raise
                logger.warning(
                    "Removed yield change at %d after it took effect; "
                    "rebuilt aggregates over %d stakes",
                    start_time, len(self._stakes),
                )
                self.state = new_state

            logger.info("Yield change removed: start=%d", start_time)
            self.event_log.emit(YieldChangeRemoved(start_time=start_time, timestamp=now))
            return removed

    def _set_gate(self, caller: Hashable, gate: str, is_open: bool) -> None:
        with self._lock:
            self._require_privileged(caller)
            self._gates[gate] = is_open
            logger.info("Gate %s %s", gate, "opened" if is_open else "paused")
            self.event_log.emit(GateChanged(gate=gate, open=is_open, timestamp=self.clock.now()))

    def pause_deposit(self, caller: Hashable) -> None:
        self._set_gate(caller, "deposit", False)

    def unpause_deposit(self, caller: Hashable) -> None:
        self._set_gate(caller, "deposit", True)

    def pause_claim(self, caller: Hashable) -> None:
        self._set_gate(caller, "claim", False)

    def unpause_claim(self, caller: Hashable) -> None:
        self._set_gate(caller, "claim", True)

    def pause_compound(self, caller: Hashable) -> None:
        self._set_gate(caller, "compound", False)

    def unpause_compound(self, caller: Hashable) -> None:
        self._set_gate(caller, "compound", True)

    def remove_tokens(self, caller: Hashable, token: AssetLedger, to: Hashable, amount: int) -> None:
        """Unconditionally move amount of token out to `to`."""
        with self._lock:
            self._require_privileged(caller)
            token.credit(to, amount)
            logger.info("Rescued %d tokens to %r", amount, to)
            self.event_log.emit(TokensRemoved(to=to, amount=amount, timestamp=self.clock.now()))

    def change_user_address(self, caller: Hashable, old: Hashable, new: Hashable) -> None:
        """
        Move the stake at old verbatim to new.

        Any stake already at new is overwritten; its position is closed so the
        aggregates keep matching the live stakes. If old holds no stake, new
        ends up without one.
        """
        with self._lock:
            self._require_privileged(caller)
            if old == new:
                return
            moving = self._stakes.get(old)
            displaced = self._stakes.get(new)

            new_state = self.state
            if displaced is not None:
                new_state = self.solvency.close_position(
                    new_state, displaced.principal, displaced.t0
                )
                logger.warning(
                    "Address change %r -> %r overwrote stake of %d", old, new, displaced.principal
                )

            self._stakes.pop(old, None)
            if moving is not None:
                self._stakes[new] = moving
            else:
                self._stakes.pop(new, None)
            self.state = new_state
            now = self.clock.now()
            logger.info("Address changed: %r -> %r", old, new)
            self.event_log.emit(AddressChanged(old=old, new=new, timestamp=now))
