"""Perpetual simple-interest yield pool with O(1) aggregate liabilities."""

from .engine import (
    AccountStake,
    LedgerState,
    RateSchedule,
    SolvencyLedger,
    YieldIntegrator,
    YieldPool,
)

__version__ = "0.3.0"

__all__ = [
    "AccountStake",
    "LedgerState",
    "RateSchedule",
    "SolvencyLedger",
    "YieldIntegrator",
    "YieldPool",
]
