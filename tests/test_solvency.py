"""Tests for the O(1) solvency aggregates."""

import pytest

from yieldpool.engine.errors import ArithmeticOverflow
from yieldpool.engine.fixed_point import MAX_WORD
from yieldpool.engine.integrator import YieldIntegrator
from yieldpool.engine.schedule import RateSchedule
from yieldpool.engine.solvency import LedgerState, SolvencyLedger
from yieldpool.engine.stakes import AccountStake


@pytest.fixture
def ledger() -> SolvencyLedger:
    schedule = RateSchedule(base_rate_per_year=10, seconds_per_year=1)
    return SolvencyLedger(YieldIntegrator(schedule, scale=100))


class TestPositions:
    def test_open_position(self, ledger):
        state = ledger.open_position(LedgerState(), 1000, 3)
        assert state == LedgerState(total_principal=1000, weighted_anchor=1000 * 30)

    def test_close_restores(self, ledger):
        state = ledger.open_position(LedgerState(), 1000, 3)
        state = ledger.open_position(state, 500, 7)
        state = ledger.close_position(state, 1000, 3)
        assert state == LedgerState(total_principal=500, weighted_anchor=500 * 70)

    def test_open_does_not_mutate_input(self, ledger):
        start = LedgerState()
        ledger.open_position(start, 10, 0)
        assert start == LedgerState()

    def test_overflow_raises(self, ledger):
        state = LedgerState(total_principal=MAX_WORD, weighted_anchor=0)
        with pytest.raises(ArithmeticOverflow):
            ledger.open_position(state, 1, 0)

    def test_close_more_than_open_raises(self, ledger):
        with pytest.raises(ArithmeticOverflow):
            ledger.close_position(LedgerState(), 1, 0)


class TestLiabilities:
    def test_total_liabilities(self, ledger):
        state = ledger.open_position(LedgerState(), 1000, 0)
        # 1000 + 1000 * (10 * 5) / 100
        assert ledger.total_liabilities(state, 5) == 1500

    def test_matches_sum_of_balances(self, ledger):
        stakes = [AccountStake(7, 1), AccountStake(13, 4), AccountStake(101, 9)]
        state = ledger.rebuild(stakes)
        t = 17
        balances = sum(s.value(ledger.integrator, t) for s in stakes)
        liabilities = ledger.total_liabilities(state, t)
        assert 0 <= liabilities - balances <= len(stakes)

    def test_net_owed(self, ledger):
        state = ledger.open_position(LedgerState(), 1000, 0)
        assert ledger.net_owed(state, 5, 2000) == 0
        assert ledger.net_owed(state, 5, 1500) == 0
        assert ledger.net_owed(state, 5, 1200) == 300

    def test_rebuild_empty(self, ledger):
        assert ledger.rebuild([]) == LedgerState()
