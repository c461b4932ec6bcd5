# gatekeeper/utils/keyed_lock.py
"""
Блокировки по ключу для сериализации событий одного отправителя.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class KeyedLock:
    """
    Набор asyncio.Lock, по одному на ключ.

    Замок создается при первом обращении и удаляется, когда его больше
    никто не держит и не ждет, поэтому число замков ограничено числом
    одновременно обрабатываемых отправителей.
    """

    def __init__(self) -> None:
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._waiters: Dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def is_locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return bool(lock and lock.locked())

    def __len__(self) -> int:
        return len(self._locks)
