"""Tests for severity and priority classification."""

from __future__ import annotations

import itertools

import pytest
from pathlayer.paths.models import PathMetrics, Priority
from pathlayer.paths.severity import classify_priority, classify_severity


class TestClassifySeverity:
    @pytest.mark.parametrize(
        ("priority", "expected"),
        [
            (Priority.CRITICAL, 0.9),
            (Priority.HIGH, 0.7),
            (Priority.MEDIUM, 0.5),
            (Priority.LOW, 0.3),
        ],
    )
    def test_base_from_priority(self, priority, expected):
        assert classify_severity(PathMetrics(), priority) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("error_rate", "bump"),
        [(0.05, 0.0), (0.06, 0.05), (0.1, 0.05), (0.11, 0.1)],
    )
    def test_error_rate_adjustment(self, error_rate, bump):
        metrics = PathMetrics(error_rate=error_rate)
        assert classify_severity(metrics, Priority.LOW) == pytest.approx(0.3 + bump)

    @pytest.mark.parametrize(
        ("p99", "bump"),
        [(2000, 0.0), (2001, 0.05), (5000, 0.05), (5001, 0.1)],
    )
    def test_p99_adjustment(self, p99, bump):
        metrics = PathMetrics(p99_latency=p99)
        assert classify_severity(metrics, Priority.LOW) == pytest.approx(0.3 + bump)

    def test_volume_adjustment(self):
        assert classify_severity(PathMetrics(request_count=10000), Priority.LOW) == pytest.approx(0.3)
        assert classify_severity(PathMetrics(request_count=10001), Priority.LOW) == pytest.approx(0.35)

    def test_adjustments_accumulate(self):
        metrics = PathMetrics(request_count=20000, error_rate=0.2, p99_latency=6000)
        assert classify_severity(metrics, Priority.LOW) == pytest.approx(0.55)

    def test_clamped_to_one(self):
        metrics = PathMetrics(request_count=20000, error_rate=0.2, p99_latency=6000)
        assert classify_severity(metrics, Priority.CRITICAL) == 1.0

    def test_monotonic_and_bounded(self):
        error_rates = [0.0, 0.05, 0.051, 0.1, 0.11, 1.0]
        p99s = [0, 2000, 2001, 5000, 5001, 60000]
        volumes = [0, 10000, 10001, 1e6]

        for priority in Priority:
            for err, p99, vol in itertools.product(error_rates, p99s, volumes):
                score = classify_severity(
                    PathMetrics(request_count=vol, error_rate=err, p99_latency=p99), priority
                )
                assert 0.0 <= score <= 1.0

            for p99, vol in itertools.product(p99s, volumes):
                scores = [
                    classify_severity(
                        PathMetrics(request_count=vol, error_rate=err, p99_latency=p99), priority
                    )
                    for err in error_rates
                ]
                assert scores == sorted(scores)

            for err, vol in itertools.product(error_rates, volumes):
                scores = [
                    classify_severity(
                        PathMetrics(request_count=vol, error_rate=err, p99_latency=p99), priority
                    )
                    for p99 in p99s
                ]
                assert scores == sorted(scores)

            for err, p99 in itertools.product(error_rates, p99s):
                scores = [
                    classify_severity(
                        PathMetrics(request_count=vol, error_rate=err, p99_latency=p99), priority
                    )
                    for vol in volumes
                ]
                assert scores == sorted(scores)


class TestClassifyPriority:
    @pytest.mark.parametrize(
        ("metrics", "expected"),
        [
            (PathMetrics(request_count=10001, error_rate=0.06), Priority.CRITICAL),
            (PathMetrics(p99_latency=5001), Priority.CRITICAL),
            (PathMetrics(request_count=10001, error_rate=0.05), Priority.HIGH),
            (PathMetrics(request_count=5001), Priority.HIGH),
            (PathMetrics(error_rate=0.06), Priority.HIGH),
            (PathMetrics(p99_latency=2001), Priority.HIGH),
            (PathMetrics(request_count=1001), Priority.MEDIUM),
            (PathMetrics(avg_latency=501), Priority.MEDIUM),
            (PathMetrics(request_count=1000, avg_latency=500), Priority.LOW),
            (PathMetrics(), Priority.LOW),
        ],
    )
    def test_first_matching_branch_wins(self, metrics, expected):
        assert classify_priority(metrics) == expected
