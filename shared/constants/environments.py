from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    PRODUCTION = "production"
    STAGING = "staging"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def parse(cls, env: str) -> "Environment":
        """Map a free-form environment string to a member, defaulting to production."""
        try:
            return cls(env.strip().lower())
        except ValueError:
            return cls.PRODUCTION

    @classmethod
    def is_production(cls, env: str) -> bool:
        return cls.parse(env) is cls.PRODUCTION

    @classmethod
    def is_testing(cls, env: str) -> bool:
        return cls.parse(env) is cls.TESTING

    @classmethod
    def is_development(cls, env: str) -> bool:
        return cls.parse(env) is cls.DEVELOPMENT
