"""Observable values used for reactive store listings and screen state."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

T = TypeVar("T")


class LiveValue(Generic[T]):
    """Holds a current value and broadcasts every replacement to subscribers.

    ``subscribe()`` yields the current value immediately and then each new
    value. Delivery is conflated: a subscriber that falls behind receives the
    latest value, not every intermediate one. Each call to ``subscribe()``
    starts an independent subscription; closing the iterator ends it.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._version = 0
        self._changed = asyncio.Event()

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        return self._version

    def set(self, value: T) -> None:
        self._value = value
        self._version += 1
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    async def subscribe(self) -> AsyncIterator[T]:
        seen = -1
        while True:
            if seen != self._version:
                seen = self._version
                yield self._value
                continue
            await self._changed.wait()
