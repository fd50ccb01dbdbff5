"""Export functionality for CSV and JSON."""

import json
from typing import Optional

import pandas as pd

from ..config.schema import PoolConfig
from ..engine.pool import YieldPool


def positions_frame(pool: YieldPool) -> pd.DataFrame:
    """One row per live stake with its current withdrawable balance."""
    snapshot = pool.snapshot()
    data = []
    for account, stake in snapshot.stakes.items():
        interest = stake.interest(pool.integrator, snapshot.time)
        data.append({
            'account': str(account),
            'principal': stake.principal,
            't0': stake.t0,
            'interest': interest,
            'withdrawable': stake.principal + interest,
        })
    return pd.DataFrame(data, columns=['account', 'principal', 't0', 'interest', 'withdrawable'])


def export_positions_csv(pool: YieldPool, filepath: str):
    """Export live stakes to CSV."""
    df = positions_frame(pool)
    df.to_csv(filepath, index=False)


def export_json(pool: YieldPool, filepath: str, config: Optional[PoolConfig] = None):
    """Export a pool snapshot to JSON. Integers are written as strings to keep precision."""
    snapshot = pool.snapshot()
    export_data = {
        'time': snapshot.time,
        'total_principal': str(snapshot.total_principal),
        'weighted_anchor': str(snapshot.weighted_anchor),
        'total_liabilities': str(snapshot.total_liabilities),
        'available_balance': str(snapshot.available_balance),
        'net_owed': str(snapshot.net_owed),
        'gates': snapshot.gates,
        'schedule': [
            {
                'start_time': entry.start_time,
                'rate_per_second': str(entry.rate_per_second),
            }
            for entry in snapshot.schedule
        ],
        'stakes': {
            str(account): {'principal': str(stake.principal), 't0': stake.t0}
            for account, stake in snapshot.stakes.items()
        },
    }
    if config is not None:
        export_data['config_hash'] = config.compute_hash()

    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2)
