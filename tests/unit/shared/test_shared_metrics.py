import pytest

from shared.metrics import get_counter, get_gauge, get_histogram


def test_service_prefix_is_applied_once():
    counter = get_counter("shared_test_hits_total", "doc", service="unit")
    assert counter._name == "unit_shared_test_hits"

    already = get_gauge("unit_shared_test_depth", "doc", service="unit")
    assert already._name == "unit_shared_test_depth"


def test_labelled_counter():
    counter = get_counter(
        "shared_test_outcomes_total", "doc", service="unit", labelnames=("outcome",)
    )
    counter.labels(outcome="ok").inc()
    assert counter.labels(outcome="ok")._value.get() == 1


def test_histogram_custom_buckets():
    hist = get_histogram("shared_test_latency_seconds", "doc", "unit", [0.1, 1.0])
    assert hist._upper_bounds == [0.1, 1.0, float("inf")]


def test_invalid_names_are_rejected():
    with pytest.raises(ValueError):
        get_counter("Bad-Name", "doc")
