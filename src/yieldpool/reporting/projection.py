"""Forward projection of pool liabilities under the current schedule."""

import numpy as np
import pandas as pd

from ..engine.pool import YieldPool
from ..engine.solvency import LedgerState

SECONDS_PER_DAY = 86_400


def liability_projection(
    pool: YieldPool,
    horizon_seconds: int,
    n_points: int = 50
) -> pd.DataFrame:
    """
    Project total liabilities forward assuming no further deposits or claims.

    Uses the aggregates at the time of the call; the pool is not mutated.

    Args:
        pool: Pool to project
        horizon_seconds: Projection length from now
        n_points: Number of evaluation instants (inclusive of both ends)

    Returns:
        DataFrame with columns: time, days, cumulative_yield, rate_per_second,
        total_liabilities, available_balance, net_owed
    """
    snapshot = pool.snapshot()
    state = LedgerState(
        total_principal=snapshot.total_principal,
        weighted_anchor=snapshot.weighted_anchor,
    )
    start = snapshot.time
    times = np.linspace(start, start + horizon_seconds, n_points)
    # Dedupe after flooring to whole seconds
    instants = sorted({int(t) for t in times})

    rows = []
    for t in instants:
        liabilities = pool.solvency.total_liabilities(state, t)
        rate, _ = pool.schedule.active_rate(t)
        rows.append({
            "time": t,
            "days": (t - start) / SECONDS_PER_DAY,
            "cumulative_yield": pool.integrator.cumulative(t),
            "rate_per_second": rate,
            "total_liabilities": liabilities,
            "available_balance": snapshot.available_balance,
            "net_owed": max(liabilities - snapshot.available_balance, 0),
        })

    return pd.DataFrame(rows)
