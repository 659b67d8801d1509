from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BeaconPayload(BaseModel):
    """Whatever the browser snippet managed to send.

    Every field is optional and untyped; ingestion must accept anything.
    Unknown keys (language, timezone, screen, ...) are kept as extras.
    """

    site: Any = None
    page: Any = None
    referrer: Any = None
    user_agent: Any = Field(None, alias="userAgent")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class VisitEvent(BaseModel):
    """A stored page visit. ``timestamp`` is epoch milliseconds."""

    site: str
    page: Any = None
    referrer: Any = None
    user_agent: Any = Field(None, alias="userAgent")
    ip: Optional[str] = None
    timestamp: int

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class SiteSummary(BaseModel):
    """Live view of one site namespace, computed on read."""

    site: str
    total_visitors: int = Field(alias="totalVisitors")
    active_visitors: int = Field(alias="activeVisitors")
    last_visit: Optional[int] = Field(None, alias="lastVisit")

    model_config = ConfigDict(populate_by_name=True)


class RollupCounters(BaseModel):
    """Calendar bucket counters for one site, keyed ``YYYY-MM-DD``/``YYYY-MM``/``YYYY``."""

    daily: Dict[str, int] = Field(default_factory=dict)
    monthly: Dict[str, int] = Field(default_factory=dict)
    yearly: Dict[str, int] = Field(default_factory=dict)


class TimeSeriesSample(BaseModel):
    label: str
    value: int


class TimeSeries(BaseModel):
    """Co-indexed chart series: ``labels[i]`` belongs to ``values[i]``."""

    labels: List[str] = Field(default_factory=list)
    values: List[int] = Field(default_factory=list)


class MergeRequest(BaseModel):
    a: Optional[str] = None
    b: Optional[str] = None
    into: Optional[str] = None


class MergeResult(BaseModel):
    status: str = "ok"
    site: str
    total: int
