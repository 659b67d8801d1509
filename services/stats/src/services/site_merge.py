from src.core.logger import get_logger
from src.core.metrics import SITE_MERGES_TOTAL
from src.domain.errors import NotFoundError, ValidationError
from src.domain.models import MergeResult
from src.infrastructure.redis.visit_store import VisitStore

logger = get_logger("stats.site_merge")


class SiteMergeOperator:
    """Fold two site namespaces into a destination namespace.

    Only raw visits move. Rollup counters of the merged sites stay where they
    were recorded; they are an independent history and are not rebuilt.
    """

    def __init__(self, store: VisitStore):
        self.store = store

    async def merge(self, a: str | None, b: str | None, into: str | None) -> MergeResult:
        if not a or not b or not into:
            SITE_MERGES_TOTAL.labels(outcome="invalid").inc()
            raise ValidationError("Missing fields: a, b, into")
        if a == b:
            SITE_MERGES_TOTAL.labels(outcome="invalid").inc()
            raise ValidationError("Fields a and b must be different")

        try:
            merged = await self.store.merge(into, [a, b])
        except NotFoundError:
            SITE_MERGES_TOTAL.labels(outcome="not_found").inc()
            logger.info("site_merge_not_found", extra={"a": a, "b": b, "into": into})
            raise

        SITE_MERGES_TOTAL.labels(outcome="ok").inc()
        return MergeResult(site=into, total=len(merged))
