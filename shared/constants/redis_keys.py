class RedisKeys:
    """Centralised Redis key pattern definitions"""

    # Raw visit namespaces
    # Site lists live under their own prefix so no site can name the index
    VISITS_LIST = "visits:site:{site}"
    VISITS_SITE_INDEX = "visits:sites"

    # Calendar rollups
    ROLLUP_HASH = "rollup:{site}:{period}"
    ROLLUP_SITE_INDEX = "rollup:sites"
    ROLLUP_PERIODS = ("daily", "monthly", "yearly")

    # Time series
    TIMESERIES_ACTIVE_LIST = "timeseries:active_visitors"

    @classmethod
    def visits_key(cls, site: str) -> str:
        """Generate the raw visit list key for a site."""
        return cls.VISITS_LIST.format(site=site)

    @classmethod
    def rollup_key(cls, site: str, period: str) -> str:
        """Generate the rollup hash key for a site and period."""
        if period not in cls.ROLLUP_PERIODS:
            raise ValueError(f"Unknown rollup period: {period}")
        return cls.ROLLUP_HASH.format(site=site, period=period)
