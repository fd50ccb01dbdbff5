"""Core ledger engine: rate schedule, yield integral, solvency aggregates and pool."""

from .integrator import YieldIntegrator
from .pool import LedgerSnapshot, YieldPool
from .schedule import RateChangeEntry, RateSchedule
from .solvency import LedgerState, SolvencyLedger
from .stakes import AccountStake

__all__ = [
    "AccountStake",
    "LedgerSnapshot",
    "LedgerState",
    "RateChangeEntry",
    "RateSchedule",
    "SolvencyLedger",
    "YieldIntegrator",
    "YieldPool",
]
