"""Per-provider serialization point for check-then-write sequences."""

import asyncio
import logging
import threading
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator

logger = logging.getLogger(__name__)


class ProviderLockRegistry:
    """One ``asyncio.Lock`` per provider id and event loop.

    An ``asyncio.Lock`` belongs to the loop that first contends for it,
    so locks are kept per running loop. A registry shared by sequential
    loops (``asyncio.run`` per request, per-test loops) keeps working.
    Mutual exclusion holds only among coroutines on the same loop:
    several loops running at once (one per thread or per worker process)
    against one store need an injected registry backed by a shared lock.

    Locks are held weakly and disappear once no coroutine holds or waits
    on them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # loop -> provider_id -> lock
        self._by_loop: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    def lock_for(self, provider_id: str) -> asyncio.Lock:
        """Lock for ``provider_id`` on the running loop.

        Raises:
            RuntimeError: called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        with self._guard:
            locks = self._by_loop.get(loop)
            if locks is None:
                locks = weakref.WeakValueDictionary()
                self._by_loop[loop] = locks
            lock = locks.get(provider_id)
            if lock is None:
                lock = asyncio.Lock()
                locks[provider_id] = lock
            return lock

    def __len__(self) -> int:
        with self._guard:
            return sum(len(locks) for locks in self._by_loop.values())

    @asynccontextmanager
    async def hold(self, provider_id: str) -> AsyncIterator[None]:
        lock = self.lock_for(provider_id)
        if lock.locked():
            logger.debug("Waiting for provider lock %s", provider_id)
        async with lock:
            yield
