"""Keyed asyncio locks."""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Iterable


class KeyedLock:
    """A family of asyncio locks addressed by string key.

    Locks are created on first use and dropped once no task holds or waits
    on them, so the table only grows with concurrent activity. Only valid
    within a single event loop and process.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for one key."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]

    @asynccontextmanager
    async def acquire_many(self, keys: Iterable[str]) -> AsyncIterator[None]:
        """Hold the locks for several keys.

        Keys are deduplicated and taken in sorted order so that two holders
        of overlapping key sets cannot deadlock.
        """
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.acquire(key))
            yield
