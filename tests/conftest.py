"""Shared fixtures for yield pool tests."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from yieldpool.engine.collaborators import InMemoryAssetLedger, ManualClock, StaticAuthorizer
from yieldpool.engine.pool import YieldPool

RATE_15 = 150_000_000_000_000_000  # 15% per year, scaled by 1e18
ADMIN = "admin"
WALLET = 10 ** 24


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=1000)


@pytest.fixture
def asset() -> InMemoryAssetLedger:
    return InMemoryAssetLedger(
        balances={"alice": WALLET, "bob": WALLET, "carol": WALLET},
        reserve=WALLET,
    )


@pytest.fixture
def authorizer() -> StaticAuthorizer:
    return StaticAuthorizer([ADMIN])


@pytest.fixture
def pool(asset, authorizer, clock) -> YieldPool:
    return YieldPool(asset, authorizer, clock, base_rate_per_year=RATE_15)
