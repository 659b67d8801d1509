from datetime import datetime, timedelta, timezone

from src.metrics.bucketing import calendar_buckets, day_bucket, to_utc


def test_calendar_buckets_are_zero_padded():
    at = datetime(2024, 3, 5, 8, 0, tzinfo=timezone.utc)
    assert calendar_buckets(at) == {
        "daily": "2024-03-05",
        "monthly": "2024-03",
        "yearly": "2024",
    }


def test_naive_datetimes_are_treated_as_utc():
    assert to_utc(datetime(2024, 1, 1, 0, 30)).tzinfo is timezone.utc
    assert day_bucket(datetime(2024, 1, 1, 0, 30)) == "2024-01-01"


def test_aware_datetimes_are_truncated_in_utc():
    tokyo = timezone(timedelta(hours=9))
    assert day_bucket(datetime(2024, 6, 1, 3, 0, tzinfo=tokyo)) == "2024-05-31"


def test_string_order_matches_chronological_order():
    instants = [
        datetime(2023, 12, 31, tzinfo=timezone.utc),
        datetime(2024, 1, 9, tzinfo=timezone.utc),
        datetime(2024, 1, 10, tzinfo=timezone.utc),
        datetime(2024, 10, 1, tzinfo=timezone.utc),
    ]
    keys = [day_bucket(i) for i in instants]
    assert keys == sorted(keys)
