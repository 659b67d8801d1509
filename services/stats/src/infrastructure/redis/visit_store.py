import json
from typing import Any, Dict, List, Mapping, Sequence

from redis.asyncio import Redis
from src.core.logger import get_logger
from src.domain.errors import NotFoundError
from src.domain.models import VisitEvent

from shared.constants import RedisKeys

from .locks import NamespaceLocks

logger = get_logger("stats.visit_store")


def _encode(event: VisitEvent) -> str:
    # The namespace key already names the site
    return event.model_dump_json(by_alias=True, exclude={"site"})


def _decode(site: str, raw: str) -> VisitEvent:
    return VisitEvent.model_validate({**json.loads(raw), "site": site})


def _by_timestamp(events: Sequence[VisitEvent]) -> List[VisitEvent]:
    # sorted() is stable: equal timestamps keep their relative order
    return sorted(events, key=lambda e: e.timestamp)


class VisitStore:
    """Raw visit events, one Redis list per site namespace.

    Notes:
        - Namespaces exist only while their list is non-empty; a set index
          tracks which sites are known.
        - Every mutation runs under the namespace lock and writes through a
          MULTI transaction, so readers see whole pre- or post-states.
    """

    def __init__(self, redis: Redis, locks: NamespaceLocks | None = None):
        self.r = redis
        self.locks = locks or NamespaceLocks()

    async def append(self, site: str, fields: Mapping[str, Any]) -> VisitEvent:
        event = VisitEvent.model_validate({**fields, "site": site})
        async with self.locks.hold(site):
            pipe = self.r.pipeline(transaction=True)
            pipe.rpush(RedisKeys.visits_key(site), _encode(event))
            pipe.sadd(RedisKeys.VISITS_SITE_INDEX, site)
            await pipe.execute()
        return event

    async def all(self, site: str) -> List[VisitEvent]:
        raw = await self.r.lrange(RedisKeys.visits_key(site), 0, -1)
        return [_decode(site, item) for item in raw]

    async def exists(self, site: str) -> bool:
        return bool(await self.r.exists(RedisKeys.visits_key(site)))

    async def sites(self) -> List[str]:
        return sorted(await self.r.smembers(RedisKeys.VISITS_SITE_INDEX))

    async def snapshot(self) -> Dict[str, List[VisitEvent]]:
        """Read every namespace in one transaction."""
        sites = await self.sites()
        if not sites:
            return {}
        pipe = self.r.pipeline(transaction=True)
        for site in sites:
            pipe.lrange(RedisKeys.visits_key(site), 0, -1)
        lists = await pipe.execute()
        return {
            site: [_decode(site, item) for item in raw]
            for site, raw in zip(sites, lists)
            if raw
        }

    async def merge(self, into: str, from_sites: Sequence[str]) -> List[VisitEvent]:
        """Replace ``into`` with its own events plus those of ``from_sites``.

        Source events are concatenated in the given order and stable-sorted by
        timestamp, then concatenated after the events ``into`` already holds
        and stable-sorted again. Sources other than ``into`` are deleted.
        Raises NotFoundError before writing anything if a source is missing.
        """
        async with self.locks.hold(into, *from_sites):
            pipe = self.r.pipeline(transaction=True)
            for site in from_sites:
                pipe.lrange(RedisKeys.visits_key(site), 0, -1)
            pipe.lrange(RedisKeys.visits_key(into), 0, -1)
            *source_lists, existing_raw = await pipe.execute()

            missing = [s for s, raw in zip(from_sites, source_lists) if not raw]
            if missing:
                raise NotFoundError("One or both source sites not found")

            incoming: List[VisitEvent] = []
            for site, raw in zip(from_sites, source_lists):
                incoming.extend(_decode(site, item) for item in raw)
            existing = [_decode(into, item) for item in existing_raw]
            merged = _by_timestamp(existing + _by_timestamp(incoming))
            merged = [e.model_copy(update={"site": into}) for e in merged]

            into_key = RedisKeys.visits_key(into)
            pipe = self.r.pipeline(transaction=True)
            pipe.delete(into_key)
            pipe.rpush(into_key, *[_encode(e) for e in merged])
            pipe.sadd(RedisKeys.VISITS_SITE_INDEX, into)
            for site in from_sites:
                if site != into:
                    pipe.delete(RedisKeys.visits_key(site))
                    pipe.srem(RedisKeys.VISITS_SITE_INDEX, site)
            await pipe.execute()

        logger.info(
            "namespaces_merged",
            extra={"into": into, "sources": list(from_sites), "total": len(merged)},
        )
        return merged

    async def clear(self) -> int:
        """Drop every namespace. Returns how many were removed.

        Holds the locks of every indexed namespace, so an in-flight merge
        finishes before the reset or starts after it. The site index is also
        WATCHed: a namespace created between reading the index and deleting
        restarts the transaction instead of being orphaned.
        """

        async def _clear(pipe) -> int:
            sites = await pipe.smembers(RedisKeys.VISITS_SITE_INDEX)
            pipe.multi()
            for site in sites:
                pipe.delete(RedisKeys.visits_key(site))
            pipe.delete(RedisKeys.VISITS_SITE_INDEX)
            return len(sites)

        async with self.locks.hold(*await self.sites()):
            return await self.r.transaction(
                _clear, RedisKeys.VISITS_SITE_INDEX, value_from_callable=True
            )
