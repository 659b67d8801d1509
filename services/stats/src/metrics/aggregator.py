"""Live per-site statistics recomputed from stored visits on every read.

Nothing here keeps state: results depend only on the events passed in and
the ``now_ms`` reference instant.
"""

from typing import Dict, Iterable, List, Mapping, Sequence

from src.domain.models import SiteSummary, VisitEvent

ACTIVE_WINDOW_MS = 5 * 60 * 1000
RECENT_WINDOW_MS = 7 * 24 * 60 * 60 * 1000


def is_active(event: VisitEvent, now_ms: int, window_ms: int = ACTIVE_WINDOW_MS) -> bool:
    # Inclusive: a visit exactly window_ms old still counts
    return now_ms - event.timestamp <= window_ms


def summarize_site(
    site: str,
    visits: Sequence[VisitEvent],
    now_ms: int,
    window_ms: int = ACTIVE_WINDOW_MS,
) -> SiteSummary:
    return SiteSummary(
        site=site,
        total_visitors=len(visits),
        active_visitors=sum(1 for v in visits if is_active(v, now_ms, window_ms)),
        # Visits are appended in arrival order, so the last one is the latest
        last_visit=visits[-1].timestamp if visits else None,
    )


def summarize(
    namespaces: Mapping[str, Sequence[VisitEvent]],
    now_ms: int,
    window_ms: int = ACTIVE_WINDOW_MS,
) -> List[SiteSummary]:
    """One summary per non-empty namespace, ordered by site name."""
    return [
        summarize_site(site, namespaces[site], now_ms, window_ms)
        for site in sorted(namespaces)
        if namespaces[site]
    ]


def total_active(summaries: Iterable[SiteSummary]) -> int:
    return sum(s.active_visitors for s in summaries)


def count_recent(
    namespaces: Mapping[str, Sequence[VisitEvent]],
    now_ms: int,
    window_ms: int = RECENT_WINDOW_MS,
) -> Dict[str, int]:
    """Visits per site inside the trailing window; every site is listed."""
    return {
        site: sum(1 for v in namespaces[site] if now_ms - v.timestamp <= window_ms)
        for site in sorted(namespaces)
    }
