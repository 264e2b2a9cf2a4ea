"""
Per-idempotency-token locks.

Serializes concurrent runs that share a token, so a duplicate arriving while
the first attempt is still at the bank waits and then replays instead of
charging twice. Runs with different tokens (or none) never wait on each other.
Locks are process-local.
"""

import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional


class TokenLocks:
    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: Counter[str] = Counter()

    @asynccontextmanager
    async def hold(self, token: Optional[str]) -> AsyncIterator[None]:
        if token is None:
            yield
            return

        lock = self._locks.setdefault(token, asyncio.Lock())
        self._holders[token] += 1
        try:
            async with lock:
                yield
        finally:
            self._holders[token] -= 1
            if self._holders[token] <= 0:
                del self._holders[token]
                self._locks.pop(token, None)

    def __len__(self) -> int:
        return len(self._locks)
