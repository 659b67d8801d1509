from src.core.config import Settings


class TestSettings:
    """Settings defaults and environment overrides."""

    def test_default_values(self):
        config = Settings()

        assert config.redis_host == "redis"
        assert config.redis_port == 6379
        assert config.active_window_seconds == 300
        assert config.recent_window_days == 7
        assert config.timeseries_capacity == 144
        assert config.timeseries_sample_interval_seconds == 600
        assert config.unknown_site == "unknown"
        assert config.otel_service_name == "stats"
        assert "password" in config.app_log_redaction_patterns

    def test_capacity_covers_a_day_at_sampling_cadence(self):
        config = Settings()
        covered = config.timeseries_capacity * config.timeseries_sample_interval_seconds
        assert covered == 24 * 60 * 60

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TIMESERIES_CAPACITY", "12")
        monkeypatch.setenv("REDIS_HOST", "localhost")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["https://dash.example"]')

        config = Settings()

        assert config.timeseries_capacity == 12
        assert config.redis_host == "localhost"
        assert config.cors_allow_origins == ["https://dash.example"]
