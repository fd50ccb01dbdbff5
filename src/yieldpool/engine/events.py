"""Notifications emitted after a pool operation commits."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepositMade:
    account: Any
    amount: int
    timestamp: int


@dataclass(frozen=True)
class Claimed:
    account: Any
    principal: int
    interest: int
    timestamp: int


@dataclass(frozen=True)
class Compounded:
    account: Any
    new_principal: int
    interest: int
    timestamp: int


@dataclass(frozen=True)
class YieldChangeAdded:
    rate_per_year: int
    start_time: int
    timestamp: int


@dataclass(frozen=True)
class YieldChangeRemoved:
    start_time: int
    timestamp: int


@dataclass(frozen=True)
class GateChanged:
    gate: str  # "deposit", "claim" or "compound"
    open: bool
    timestamp: int


@dataclass(frozen=True)
class AddressChanged:
    old: Any
    new: Any
    timestamp: int


@dataclass(frozen=True)
class TokensRemoved:
    to: Any
    amount: int
    timestamp: int


class EventLog:
    """Record of committed events with synchronous subscribers.

    With maxlen set only the most recent events are retained. A subscriber
    that raises is logged and skipped; the event has already been committed.
    """

    def __init__(self, maxlen: Optional[int] = None):
        self.events: Deque[Any] = deque(maxlen=maxlen)
        self._subscribers: List[Callable[[Any], None]] = []

    def subscribe(self, callback: Callable[[Any], None]) -> None:
        self._subscribers.append(callback)

    def emit(self, event: Any) -> None:
        self.events.append(event)
        for callback in self._subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception("Subscriber %r failed on %r", callback, event)
