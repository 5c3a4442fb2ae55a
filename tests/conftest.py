"""Root test configuration."""

import logging

import pytest
import structlog
from pathlayer.config import get_settings
from pathlayer.topology.models import ServiceDependency, ServiceMetrics


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep PATHLAYER_* variables from the host out of cached settings."""
    import os

    for key in list(os.environ):
        if key.startswith("PATHLAYER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_service(
    name: str,
    calls: float = 0,
    error_rate: float = 0.0,
    avg_latency: float = 0.0,
    p99_latency: float = 0.0,
    deps: tuple[str, ...] = (),
) -> ServiceMetrics:
    """Build ServiceMetrics with bare dependency edges."""
    return ServiceMetrics(
        service_name=name,
        call_count=calls,
        error_rate=error_rate,
        avg_latency=avg_latency,
        p99_latency=p99_latency,
        dependencies=tuple(ServiceDependency(target_service=d) for d in deps),
    )


@pytest.fixture
def two_service_topology():
    """A (entry) -> B, busy enough to classify as critical."""
    return [
        make_service("A", calls=20000, error_rate=0.02, avg_latency=100, p99_latency=400, deps=("B",)),
        make_service("B", calls=18000, error_rate=0.01, avg_latency=50, p99_latency=200),
    ]


@pytest.fixture
def checkout_topology():
    """Topology matching the sample generated response below."""
    return [
        make_service(
            "frontend", calls=12000, error_rate=0.01, avg_latency=40, p99_latency=300,
            deps=("api-gateway",),
        ),
        make_service(
            "api-gateway", calls=11500, error_rate=0.005, avg_latency=20, p99_latency=150,
            deps=("cart-service", "search-service"),
        ),
        make_service(
            "cart-service", calls=6000, error_rate=0.02, avg_latency=60, p99_latency=500,
            deps=("payment-service",),
        ),
        make_service(
            "payment-service", calls=5500, error_rate=0.08, avg_latency=300, p99_latency=2500,
        ),
        make_service(
            "search-service", calls=4000, error_rate=0.001, avg_latency=80, p99_latency=700,
        ),
    ]


@pytest.fixture
def generated_paths_payload():
    return {
        "paths": [
            {
                "name": "User Checkout Flow",
                "description": "Complete purchase from cart to payment",
                "services": ["frontend", "api-gateway", "cart-service", "payment-service"],
                "priority": "critical",
                "severity": 0.95,
            },
            {
                "name": "Product Search",
                "description": "Search the catalog",
                "services": ["frontend", "api-gateway", "search-service"],
                "priority": "high",
                "severity": 0.75,
            },
        ]
    }


@pytest.fixture
def service_factory():
    """Factory for ServiceMetrics test fixtures."""
    return make_service
