"""Tests for path metric aggregation."""

from __future__ import annotations

import pytest
from pathlayer.paths.metrics import calculate_path_metrics
from pathlayer.paths.models import PathMetrics


@pytest.fixture
def topology(service_factory):
    return [
        service_factory("gw", calls=1000, error_rate=0.01, avg_latency=20, p99_latency=100),
        service_factory("api", calls=800, error_rate=0.07, avg_latency=50, p99_latency=400),
        service_factory("db", calls=700, error_rate=0.002, avg_latency=5, p99_latency=40),
    ]


def test_aggregates_along_path(topology):
    metrics = calculate_path_metrics(["gw", "api", "db"], topology)

    assert metrics.request_count == 1000
    assert metrics.avg_latency == 75
    assert metrics.error_rate == 0.07
    assert metrics.p99_latency == 540


def test_request_count_uses_first_resolved_service(topology):
    metrics = calculate_path_metrics(["cdn", "api", "db"], topology)

    assert metrics.request_count == 800
    assert metrics.avg_latency == 55


def test_unresolved_names_are_ignored(topology):
    with_unknown = calculate_path_metrics(["gw", "mystery", "db"], topology)
    without_unknown = calculate_path_metrics(["gw", "db"], topology)

    assert with_unknown == without_unknown


def test_no_resolved_services_gives_zero_metrics(topology):
    assert calculate_path_metrics(["x", "y"], topology) == PathMetrics()
    assert calculate_path_metrics([], topology) == PathMetrics()
    assert calculate_path_metrics(["gw"], []) == PathMetrics()


def test_error_rate_is_max_and_bounded(topology):
    metrics = calculate_path_metrics(["db", "gw"], topology)

    assert metrics.error_rate == max(0.002, 0.01)
    assert 0.0 <= metrics.error_rate <= 1.0


def test_duplicate_service_names_resolve_to_first_entry(service_factory):
    topology = [
        service_factory("svc", calls=10, avg_latency=1),
        service_factory("svc", calls=99, avg_latency=9),
    ]
    metrics = calculate_path_metrics(["svc"], topology)

    assert metrics.request_count == 10
    assert metrics.avg_latency == 1


def test_to_dict_uses_wire_keys():
    metrics = PathMetrics(request_count=5, avg_latency=1.5, error_rate=0.1, p99_latency=9)
    assert metrics.to_dict() == {
        "requestCount": 5,
        "avgLatency": 1.5,
        "errorRate": 0.1,
        "p99Latency": 9,
    }
