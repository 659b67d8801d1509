from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Live aggregation
    active_window_seconds: int = 300  # visit counts as active for 5 minutes
    recent_window_days: int = 7  # weekly dashboard panel

    # Time series
    timeseries_capacity: int = 144  # 24h @ 10m sampling
    timeseries_sample_interval_seconds: int = 600
    timeseries_label_format: str = "%H:%M"

    # Background jobs
    sampler_enabled: bool = True
    retention_enabled: bool = True

    # Ingestion
    unknown_site: str = "unknown"  # namespace for beacons without a site

    # HTTP
    cors_allow_origins: list[str] = ["*"]

    otel_service_name: str = "stats"


settings = Settings()
