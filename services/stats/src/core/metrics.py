from shared.metrics import get_counter, get_gauge, get_histogram

SERVICE = "stats"

# Ingestion
VISITS_INGESTED_TOTAL = get_counter(
    "visits_ingested_total", "Beacons stored in the visit store.", SERVICE
)
INGEST_LATENCY_SECONDS = get_histogram(
    "ingest_latency_seconds", "Latency of storing a beacon and its rollups.", SERVICE
)

# Merge
SITE_MERGES_TOTAL = get_counter(
    "site_merges_total", "Site merge attempts by outcome.", SERVICE, ("outcome",)
)

# Background jobs
RETENTION_RESETS_TOTAL = get_counter(
    "retention_resets_total", "Completed raw visit retention resets.", SERVICE
)
TIMESERIES_SAMPLES_TOTAL = get_counter(
    "timeseries_samples_total", "Samples appended to the active visitor series.", SERVICE
)
ACTIVE_VISITORS = get_gauge(
    "active_visitors", "Active visitors across all sites at the last sample.", SERVICE
)
