"""Shared configuration base classes.

Provides common configuration patterns used by the stats service and its
tooling so every entrypoint reads the same environment variables.
"""

from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "authorization",
        "cookie",
    ]
    app_environment: str = "production"


class BaseRedisConfig(BaseSettings):
    """Common Redis connection settings."""

    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0


class BaseServiceConfig(BaseLoggingConfig, BaseRedisConfig):
    """Base configuration combining logging and Redis settings.

    Services inherit from this and add their own specific settings.
    The otel_service_name should be overridden by each service.
    """

    otel_service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseRedisConfig", "BaseServiceConfig"]
