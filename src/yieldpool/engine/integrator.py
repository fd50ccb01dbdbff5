"""Cumulative yield integral C(t) over a piecewise rate schedule.

Formula: C(t) = ∫_0^t rate(s) ds, with rate(s) the per-second rate in force at s.
An account holding principal p since t0 is owed p * (1 + C(t) - C(t0)).
"""

from .fixed_point import SCALE, checked_add, checked_mul, checked_sub, mul_div
from .schedule import RateSchedule


class YieldIntegrator:
    """Integrates a RateSchedule."""

    def __init__(self, schedule: RateSchedule, scale: int = SCALE):
        self.schedule = schedule
        self.scale = scale

    def cumulative(self, t: int) -> int:
        """
        Compute C(t), scaled like the rates.

        Args:
            t: Time in seconds (>= 0)

        Returns:
            Integral of the active rate over [0, t]
        """
        if len(self.schedule) == 0:
            return checked_mul(self.schedule.base_rate, t)

        total = 0
        prev_start = 0
        prev_rate = self.schedule.base_rate
        for entry in self.schedule:
            if entry.start_time >= t:
                return checked_add(total, checked_mul(prev_rate, t - prev_start))
            total = checked_add(
                total, checked_mul(prev_rate, entry.start_time - prev_start)
            )
            prev_start = entry.start_time
            prev_rate = entry.rate_per_second

        return checked_add(total, checked_mul(prev_rate, t - prev_start))

    def interest(self, principal: int, t0: int, t: int) -> int:
        """Simple interest on principal accrued between t0 and t (floor)."""
        delta = checked_sub(self.cumulative(t), self.cumulative(t0))
        return mul_div(principal, delta, self.scale)

    def accrued_value(self, principal: int, t0: int, t: int) -> int:
        return checked_add(principal, self.interest(principal, t0, t))
