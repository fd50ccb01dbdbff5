"""Sanity checks for pool configuration and ledger invariants."""

from dataclasses import dataclass
from typing import List, Optional

from ..config.schema import PoolConfig
from ..engine.fixed_point import SCALE
from ..engine.pool import LedgerSnapshot, YieldPool

# Beyond this an annual rate is almost certainly a scaling mistake
MAX_PLAUSIBLE_RATE = SCALE
# Schedules spanning longer than ten years are flagged
MAX_SCHEDULE_SPAN = 10 * 31_536_000


@dataclass
class ValidationWarning:
    """A validation warning with severity and message."""
    severity: str  # "warning" or "error"
    category: str  # e.g., "input", "invariant", "solvency"
    message: str
    details: Optional[str] = None


class SanityChecker:
    """Run sanity checks on configuration and pool state."""

    def __init__(self, config: Optional[PoolConfig] = None):
        """Initialize with (optional) configuration."""
        self.config = config

    def check_config_inputs(self) -> List[ValidationWarning]:
        """
        Check configuration inputs for implausible values.

        Returns:
            List of validation warnings
        """
        warnings = []
        if self.config is None:
            return warnings

        rates = self.config.rates
        if rates.base_rate_per_year > MAX_PLAUSIBLE_RATE:
            warnings.append(ValidationWarning(
                severity="warning",
                category="bounds",
                message="Base rate above 100% per year",
                details=f"Scaled value: {rates.base_rate_per_year}"
            ))

        if 0 < rates.base_rate_per_year < rates.seconds_per_year:
            warnings.append(ValidationWarning(
                severity="error",
                category="input",
                message="Base rate rounds to zero per second",
                details="Annual rates must be scaled by 1e18"
            ))

        for entry in rates.schedule:
            if entry.rate_per_year > MAX_PLAUSIBLE_RATE:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="bounds",
                    message=f"Scheduled rate at {entry.start_time} above 100% per year",
                    details=f"Scaled value: {entry.rate_per_year}"
                ))

        if len(rates.schedule) > 1:
            first, last = rates.schedule[0].start_time, rates.schedule[-1].start_time
            if last - first > MAX_SCHEDULE_SPAN:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="input",
                    message="Rate schedule spans more than ten years",
                    details=f"From {first} to {last}"
                ))

        gates = self.config.gates
        if not (gates.deposits_open or gates.claims_open or gates.compound_open):
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="All feature gates start closed",
                details="Pool will reject every lifecycle operation until unpaused"
            ))

        return warnings

    def check_pool(self, pool: YieldPool) -> List[ValidationWarning]:
        """
        Check a pool's aggregates against its live stakes.

        Rebuilds A and B from every stake (O(n)) and compares the O(1)
        liabilities with the sum of per-account balances.
        """
        snapshot = pool.snapshot()
        return self.check_snapshot(pool, snapshot)

    def check_snapshot(self, pool: YieldPool, snapshot: LedgerSnapshot) -> List[ValidationWarning]:
        warnings = []
        rebuilt = pool.solvency.rebuild(snapshot.stakes.values())

        if rebuilt.total_principal != snapshot.total_principal:
            warnings.append(ValidationWarning(
                severity="error",
                category="invariant",
                message="Total principal does not match live stakes",
                details=f"A={snapshot.total_principal}, sum={rebuilt.total_principal}"
            ))

        if rebuilt.weighted_anchor != snapshot.weighted_anchor:
            warnings.append(ValidationWarning(
                severity="error",
                category="invariant",
                message="Weighted anchor does not match live stakes",
                details=f"B={snapshot.weighted_anchor}, sum={rebuilt.weighted_anchor}"
            ))

        balances = sum(
            stake.value(pool.integrator, snapshot.time) for stake in snapshot.stakes.values()
        )
        drift = snapshot.total_liabilities - balances
        # Each stake floors its own interest, losing at most one unit
        if drift < 0 or drift > len(snapshot.stakes):
            warnings.append(ValidationWarning(
                severity="error",
                category="invariant",
                message="Liabilities disagree with summed account balances",
                details=f"Liabilities={snapshot.total_liabilities}, balances={balances}, stakes={len(snapshot.stakes)}"
            ))

        if snapshot.net_owed > 0:
            warnings.append(ValidationWarning(
                severity="warning",
                category="solvency",
                message="Pool collateral below total liabilities",
                details=f"Shortfall: {snapshot.net_owed}"
            ))

        return warnings


def validate_pool(pool: YieldPool, config: Optional[PoolConfig] = None) -> List[ValidationWarning]:
    """
    Validate configuration and current pool state.

    Args:
        pool: Pool to inspect
        config: Configuration the pool was built from (optional)

    Returns:
        List of all validation warnings
    """
    checker = SanityChecker(config)
    warnings = []
    warnings.extend(checker.check_config_inputs())
    warnings.extend(checker.check_pool(pool))
    return warnings
