"""Piecewise-constant yield rate schedule.

A base per-second rate applies from time zero. Scheduled entries switch the
rate at their start instant (inclusive) and stay in force until the next one.
"""

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidStartTime, StartTimeNotIncreasing
from .fixed_point import SECONDS_PER_YEAR, annual_to_per_second

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateChangeEntry:
    """A scheduled rate change."""
    start_time: int  # Seconds
    rate_per_second: int  # Scaled by 1e18


class RateSchedule:
    """Sorted rate-change entries keyed by start time."""

    def __init__(self, base_rate_per_year: int = 0, seconds_per_year: int = SECONDS_PER_YEAR):
        """
        Initialize schedule.

        Args:
            base_rate_per_year: Annual base rate scaled by 1e18
            seconds_per_year: Divisor used to derive per-second rates
        """
        self.seconds_per_year = seconds_per_year
        self.base_rate = annual_to_per_second(base_rate_per_year, seconds_per_year)
        self._starts: List[int] = []
        self._entries: List[RateChangeEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RateChangeEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> List[RateChangeEntry]:
        return list(self._entries)

    @property
    def last_start_time(self) -> Optional[int]:
        return self._starts[-1] if self._starts else None

    def add_rate(self, rate_per_year: int, start_time: int, now: int) -> RateChangeEntry:
        """
        Schedule a rate change.

        Args:
            rate_per_year: Annual rate scaled by 1e18
            start_time: Instant the rate takes effect (may equal now)
            now: Current time

        Returns:
            The inserted entry

        Raises:
            InvalidStartTime: start_time is before now
            StartTimeNotIncreasing: start_time does not follow the last entry
        """
        if start_time < now:
            raise InvalidStartTime(start_time, now)
        last = self.last_start_time
        if last is not None and start_time <= last:
            raise StartTimeNotIncreasing(start_time, last)

        entry = RateChangeEntry(
            start_time=start_time,
            rate_per_second=annual_to_per_second(rate_per_year, self.seconds_per_year),
        )
        idx = bisect_left(self._starts, start_time)
        self._starts.insert(idx, start_time)
        self._entries.insert(idx, entry)
        return entry

    def remove_rate(self, start_time: int) -> Optional[RateChangeEntry]:
        """Remove the entry at exactly start_time. Unknown keys are ignored."""
        idx = bisect_left(self._starts, start_time)
        if idx == len(self._starts) or self._starts[idx] != start_time:
            return None
        del self._starts[idx]
        return self._entries.pop(idx)

    def active_rate(self, t: int) -> Tuple[int, int]:
        """
        Rate in force at time t.

        Returns:
            (rate_per_second, start_time); (base_rate, 0) before the first entry
        """
        idx = bisect_right(self._starts, t)
        if idx == 0:
            logger.debug("t=%d before first scheduled change, base rate applies", t)
            return self.base_rate, 0
        entry = self._entries[idx - 1]
        return entry.rate_per_second, entry.start_time

    def restore(self, entry: RateChangeEntry) -> None:
        """Reinsert a previously removed entry, bypassing the add-time checks."""
        idx = bisect_left(self._starts, entry.start_time)
        self._starts.insert(idx, entry.start_time)
        self._entries.insert(idx, entry)
