"""Tests for the rate schedule and the yield integral."""

import pytest

from yieldpool.engine.errors import InvalidStartTime, StartTimeNotIncreasing
from yieldpool.engine.integrator import YieldIntegrator
from yieldpool.engine.schedule import RateChangeEntry, RateSchedule


@pytest.fixture
def schedule() -> RateSchedule:
    # seconds_per_year=1 keeps per-second rates equal to the inputs
    return RateSchedule(base_rate_per_year=10, seconds_per_year=1)


class TestAddRate:
    def test_start_in_past_rejected(self, schedule):
        with pytest.raises(InvalidStartTime):
            schedule.add_rate(20, 99, now=100)

    def test_start_equal_to_now_accepted(self, schedule):
        entry = schedule.add_rate(20, 100, now=100)
        assert entry == RateChangeEntry(start_time=100, rate_per_second=20)

    def test_start_must_increase(self, schedule):
        schedule.add_rate(20, 100, now=0)
        with pytest.raises(StartTimeNotIncreasing):
            schedule.add_rate(30, 100, now=0)
        with pytest.raises(StartTimeNotIncreasing):
            schedule.add_rate(30, 50, now=0)

    def test_rate_converted_with_floor(self):
        schedule = RateSchedule(base_rate_per_year=0, seconds_per_year=7)
        entry = schedule.add_rate(20, 10, now=0)
        assert entry.rate_per_second == 2

    def test_entries_ordered(self, schedule):
        for start in (100, 200, 300):
            schedule.add_rate(start, start, now=0)
        assert [e.start_time for e in schedule] == [100, 200, 300]


class TestRemoveRate:
    def test_remove_present(self, schedule):
        schedule.add_rate(20, 100, now=0)
        removed = schedule.remove_rate(100)
        assert removed.start_time == 100
        assert len(schedule) == 0

    def test_remove_absent_is_noop(self, schedule):
        schedule.add_rate(20, 100, now=0)
        assert schedule.remove_rate(150) is None
        assert len(schedule) == 1

    def test_remove_last_allows_earlier_add(self, schedule):
        schedule.add_rate(20, 100, now=0)
        schedule.add_rate(30, 200, now=0)
        schedule.remove_rate(200)
        schedule.add_rate(40, 150, now=0)
        assert schedule.last_start_time == 150

    def test_restore(self, schedule):
        schedule.add_rate(20, 100, now=0)
        schedule.add_rate(30, 200, now=0)
        removed = schedule.remove_rate(100)
        schedule.restore(removed)
        assert [e.start_time for e in schedule] == [100, 200]


class TestActiveRate:
    def test_empty_schedule_uses_base(self, schedule):
        assert schedule.active_rate(10 ** 9) == (10, 0)

    def test_switch_inclusive_of_start(self, schedule):
        schedule.add_rate(20, 100, now=0)
        schedule.add_rate(30, 200, now=0)
        assert schedule.active_rate(99) == (10, 0)
        assert schedule.active_rate(100) == (20, 100)
        assert schedule.active_rate(199) == (20, 100)
        assert schedule.active_rate(200) == (30, 200)
        assert schedule.active_rate(10 ** 6) == (30, 200)


class TestCumulative:
    def test_empty_schedule_linear(self, schedule):
        integrator = YieldIntegrator(schedule)
        assert integrator.cumulative(0) == 0
        assert integrator.cumulative(123) == 1230

    def test_piecewise_exact(self, schedule):
        schedule.add_rate(20, 100, now=0)
        schedule.add_rate(30, 200, now=0)
        integrator = YieldIntegrator(schedule)

        assert integrator.cumulative(50) == 10 * 50
        assert integrator.cumulative(100) == 10 * 100
        assert integrator.cumulative(150) == 10 * 100 + 20 * 50
        assert integrator.cumulative(200) == 10 * 100 + 20 * 100
        assert integrator.cumulative(250) == 10 * 100 + 20 * 100 + 30 * 50

    def test_non_decreasing(self, schedule):
        schedule.add_rate(0, 100, now=0)
        schedule.add_rate(5, 200, now=0)
        integrator = YieldIntegrator(schedule)
        prev = -1
        for t in range(0, 400, 7):
            value = integrator.cumulative(t)
            assert value >= prev
            prev = value

    def test_difference_is_interval_integral(self, schedule):
        """C(t2) - C(t1) integrates only the rates inside [t1, t2]."""
        schedule.add_rate(20, 100, now=0)
        schedule.add_rate(30, 200, now=0)
        integrator = YieldIntegrator(schedule)
        assert integrator.cumulative(230) - integrator.cumulative(80) == 10 * 20 + 20 * 100 + 30 * 30

    def test_interest_floors(self, schedule):
        integrator = YieldIntegrator(schedule, scale=100)
        # 7 * (10 * 15) / 100 = 10.5
        assert integrator.interest(7, 0, 15) == 10
        assert integrator.accrued_value(7, 0, 15) == 17
