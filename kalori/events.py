# -*- coding: utf-8 -*-
"""Explicit observer registration for cross-component signals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    def __init__(self) -> None:
        self._subscribers: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback``; the returned function unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def publish(self, value: T) -> None:
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                # One broken listener must not stop the others.
                logger.exception("Subscriber %r failed", callback)

    def __len__(self) -> int:
        return len(self._subscribers)


@dataclass(frozen=True)
class Notice:
    """Toast-level message for the admin UI."""
    level: str  # info | success | warning | error
    message: str
