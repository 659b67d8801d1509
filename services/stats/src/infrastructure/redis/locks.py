import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict


class NamespaceLocks:
    """One asyncio.Lock per site namespace.

    At most one mutation per namespace is in flight. Multi-site holders take
    their locks in sorted order so two merges over the same sites cannot
    deadlock.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def get(self, site: str) -> asyncio.Lock:
        lock = self._locks.get(site)
        if lock is None:
            lock = self._locks[site] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, *sites: str) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for site in sorted(set(sites)):
                await stack.enter_async_context(self.get(site))
            yield
