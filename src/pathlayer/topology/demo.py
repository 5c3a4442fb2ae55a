"""
Sample topology for demos and smoke tests.
"""

from __future__ import annotations

from pathlayer.topology.models import ServiceDependency, ServiceMetrics


def _dep(target: str, calls: int, error_rate: float, latency: float) -> ServiceDependency:
    return ServiceDependency(
        target_service=target,
        call_count=calls,
        error_rate=error_rate,
        avg_latency=latency,
    )


def create_demo_topology() -> list[ServiceMetrics]:
    """
    Create a small e-commerce topology.

    Entry points are ``frontend``, ``mobile-gateway``, ``batch-scheduler``
    and ``admin-portal``; ``postgresql`` and ``redis`` are leaf datastores.
    """
    return [
        ServiceMetrics(
            service_name="frontend",
            call_count=15000,
            error_rate=0.004,
            avg_latency=45,
            p99_latency=320,
            dependencies=(
                _dep("api-gateway", 14800, 0.003, 40),
                _dep("search-service", 3100, 0.002, 85),
            ),
        ),
        ServiceMetrics(
            service_name="mobile-gateway",
            call_count=4200,
            error_rate=0.012,
            avg_latency=60,
            p99_latency=410,
            dependencies=(_dep("api-gateway", 4100, 0.01, 55),),
        ),
        ServiceMetrics(
            service_name="api-gateway",
            call_count=19000,
            error_rate=0.006,
            avg_latency=30,
            p99_latency=250,
            dependencies=(
                _dep("cart-service", 7200, 0.004, 65),
                _dep("checkout-service", 5400, 0.02, 180),
                _dep("user-service", 9100, 0.001, 25),
            ),
        ),
        ServiceMetrics(
            service_name="search-service",
            call_count=3100,
            error_rate=0.002,
            avg_latency=85,
            p99_latency=900,
            dependencies=(_dep("catalog-service", 3000, 0.001, 40),),
        ),
        ServiceMetrics(
            service_name="cart-service",
            call_count=7200,
            error_rate=0.004,
            avg_latency=65,
            p99_latency=480,
            dependencies=(_dep("redis", 7000, 0.0, 2),),
        ),
        ServiceMetrics(
            service_name="checkout-service",
            call_count=5400,
            error_rate=0.021,
            avg_latency=180,
            p99_latency=1900,
            dependencies=(
                _dep("payment-service", 5200, 0.03, 420),
                _dep("order-service", 5100, 0.005, 95),
            ),
        ),
        ServiceMetrics(
            service_name="payment-service",
            call_count=5200,
            error_rate=0.031,
            avg_latency=420,
            p99_latency=2600,
            dependencies=(_dep("postgresql", 5200, 0.001, 12),),
        ),
        ServiceMetrics(
            service_name="order-service",
            call_count=5100,
            error_rate=0.005,
            avg_latency=95,
            p99_latency=700,
            dependencies=(
                _dep("postgresql", 5000, 0.001, 12),
                _dep("notification-service", 4900, 0.002, 30),
            ),
        ),
        ServiceMetrics(
            service_name="user-service",
            call_count=9100,
            error_rate=0.001,
            avg_latency=25,
            p99_latency=140,
            dependencies=(_dep("postgresql", 9000, 0.001, 10),),
        ),
        ServiceMetrics(
            service_name="catalog-service",
            call_count=3000,
            error_rate=0.001,
            avg_latency=40,
            p99_latency=260,
            dependencies=(_dep("postgresql", 2900, 0.001, 11),),
        ),
        ServiceMetrics(
            service_name="notification-service",
            call_count=5300,
            error_rate=0.002,
            avg_latency=30,
            p99_latency=210,
        ),
        ServiceMetrics(
            service_name="batch-scheduler",
            call_count=600,
            error_rate=0.0,
            avg_latency=1500,
            p99_latency=4200,
            dependencies=(_dep("order-service", 400, 0.0, 110),),
        ),
        ServiceMetrics(
            service_name="admin-portal",
            call_count=250,
            error_rate=0.0,
            avg_latency=120,
            p99_latency=600,
            dependencies=(_dep("user-service", 240, 0.0, 30),),
        ),
        ServiceMetrics(
            service_name="postgresql",
            call_count=22100,
            error_rate=0.001,
            avg_latency=11,
            p99_latency=95,
        ),
        ServiceMetrics(
            service_name="redis",
            call_count=7000,
            error_rate=0.0,
            avg_latency=2,
            p99_latency=8,
        ),
    ]
