from fastapi import Request
from src.services.stats_service import StatsService


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats  # type: ignore[return-value]


def client_ip(request: Request) -> str | None:
    """Forwarded-for header as sent, else the socket peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    return request.client.host if request.client else None
