"""
Severity and priority classification for critical paths.

Severity is a composite score in [0, 1]: a base from business priority,
nudged up by error rate, tail latency and request volume.
"""

from __future__ import annotations

from pathlayer.paths.models import PathMetrics, Priority

PRIORITY_BASE_SEVERITY: dict[Priority, float] = {
    Priority.CRITICAL: 0.9,
    Priority.HIGH: 0.7,
    Priority.MEDIUM: 0.5,
    Priority.LOW: 0.3,
}


def classify_severity(metrics: PathMetrics, priority: Priority) -> float:
    """
    Calculate severity score (0-1) from metrics and priority.

    Adjustments are cumulative:
    - error rate >10%: +0.1, >5%: +0.05
    - p99 latency >5s: +0.1, >2s: +0.05
    - request count >10k: +0.05
    """
    severity = PRIORITY_BASE_SEVERITY[priority]

    if metrics.error_rate > 0.1:
        severity += 0.1
    elif metrics.error_rate > 0.05:
        severity += 0.05

    if metrics.p99_latency > 5000:
        severity += 0.1
    elif metrics.p99_latency > 2000:
        severity += 0.05

    if metrics.request_count > 10000:
        severity += 0.05

    return max(0.0, min(1.0, severity))


def classify_priority(metrics: PathMetrics) -> Priority:
    """
    Derive priority from metrics when none was declared.

    Levels:
    - critical: high volume with errors, or p99 above 5s
    - high: moderate volume, error rate above 5%, or p99 above 2s
    - medium: some traffic or average latency above 500ms
    - low: everything else
    """
    if (metrics.request_count > 10000 and metrics.error_rate > 0.05) or metrics.p99_latency > 5000:
        return Priority.CRITICAL
    if metrics.request_count > 5000 or metrics.error_rate > 0.05 or metrics.p99_latency > 2000:
        return Priority.HIGH
    if metrics.request_count > 1000 or metrics.avg_latency > 500:
        return Priority.MEDIUM
    return Priority.LOW
