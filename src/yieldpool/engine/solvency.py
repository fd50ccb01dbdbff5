"""Aggregate solvency tracking in O(1).

Two aggregates are kept over all live stakes:
- A = Σ principal_i
- B = Σ principal_i * C(t0_i)

Since each stake is owed p_i * (1 + C(t) - C(t0_i)), summing gives the total
liabilities without touching individual accounts:

    S(t) = A + (A * C(t) - B) / SCALE
"""

from dataclasses import dataclass
from typing import Iterable

from .fixed_point import checked_add, checked_mul, checked_sub, mul_sub_div
from .integrator import YieldIntegrator
from .stakes import AccountStake


@dataclass(frozen=True)
class LedgerState:
    """Aggregate ledger state."""
    total_principal: int = 0  # A
    weighted_anchor: int = 0  # B, scaled by 1e18


class SolvencyLedger:
    """Pure operations over LedgerState; callers own and commit the state."""

    def __init__(self, integrator: YieldIntegrator):
        self.integrator = integrator

    def open_position(self, state: LedgerState, amount: int, t0: int) -> LedgerState:
        anchor = checked_mul(amount, self.integrator.cumulative(t0))
        return LedgerState(
            total_principal=checked_add(state.total_principal, amount),
            weighted_anchor=checked_add(state.weighted_anchor, anchor),
        )

    def close_position(self, state: LedgerState, amount: int, t0: int) -> LedgerState:
        anchor = checked_mul(amount, self.integrator.cumulative(t0))
        return LedgerState(
            total_principal=checked_sub(state.total_principal, amount),
            weighted_anchor=checked_sub(state.weighted_anchor, anchor),
        )

    def total_liabilities(self, state: LedgerState, t: int) -> int:
        """
        Total owed to all depositors at time t.

        The A * C(t) product is taken at double width before subtracting B and
        dividing by the scale.
        """
        a = state.total_principal
        accrued = mul_sub_div(
            a,
            self.integrator.cumulative(t),
            state.weighted_anchor,
            self.integrator.scale,
        )
        return checked_add(a, accrued)

    def net_owed(self, state: LedgerState, t: int, assets: int) -> int:
        """Shortfall of assets against liabilities, floored at zero."""
        return max(self.total_liabilities(state, t) - assets, 0)

    def rebuild(self, stakes: Iterable[AccountStake]) -> LedgerState:
        """Recompute both aggregates from every live stake."""
        state = LedgerState()
        for stake in stakes:
            state = self.open_position(state, stake.principal, stake.t0)
        return state
