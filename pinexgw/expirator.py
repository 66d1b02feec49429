"""Slot-based expiry tracker driven by a periodic tick."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)

ExpiryHandler = Callable[[Any, Any], None]


def _to_ns(seconds: float) -> int:
    return round(seconds * 1_000_000_000)


class Expirator(Generic[K]):
    """Tracks keys that expire after a number of periods.

    Each call to :meth:`tick` advances the clock by one period and reports
    every key whose slot was reached to the expiry handler.
    """

    def __init__(self, period: float, handler: ExpiryHandler) -> None:
        period_ns = _to_ns(period)
        if period_ns <= 0:
            raise ValueError("period must be positive")
        self._period = period
        self._period_ns = period_ns
        self._handler = handler
        self._index = 0
        self._entries: dict[K, tuple[int, Any]] = {}
        self._slots: dict[int, list[K]] = {}
        self._task: asyncio.Task | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def start(self) -> None:
        """Begin ticking once per period on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Stop the periodic tick."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._period)
            self.tick()

    def add(self, key: K, expiration: float, info: Any = None) -> bool:
        """Schedule ``key`` to expire after ``expiration`` seconds.

        A key that is already tracked is left untouched and False is returned.
        """
        if key in self._entries:
            return False
        slot = self._index + _to_ns(expiration) // self._period_ns
        self._entries[key] = (slot, info)
        self._slots.setdefault(slot, []).append(key)
        return True

    def get_info(self, key: K) -> Any:
        """Return the info stored with ``key``, or None if it is not tracked."""
        entry = self._entries.get(key)
        return None if entry is None else entry[1]

    def remove(self, key: K) -> bool:
        """Forget ``key``; return whether it was tracked."""
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        slot = entry[0]
        keys = self._slots.get(slot)
        if keys is not None:
            keys.remove(key)
            if not keys:
                del self._slots[slot]
        return True

    def tick(self) -> None:
        """Expire every key in the current slot and advance one period."""
        due = self._slots.pop(self._index, [])
        expired = [(key, self._entries.pop(key)[1]) for key in due if key in self._entries]
        self._index += 1
        for key, info in expired:
            self._handler(key, info)