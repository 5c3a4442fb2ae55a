"""Tests for topology models, loading and sources."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone

import pytest
import yaml
from pathlayer.core.errors import TopologyLoadError
from pathlayer.paths.statistical import find_entry_points
from pathlayer.topology import (
    FileTopologySource,
    ServiceDependency,
    ServiceMetrics,
    StaticTopologySource,
    TimeRange,
    create_demo_topology,
    index_topology,
    load_topology,
    parse_topology,
    service_metrics_from_topology,
)

WIRE_RECORDS = [
    {
        "serviceName": "frontend",
        "callCount": 1000,
        "errorRate": 0.01,
        "avgLatency": 40,
        "p99Latency": 300,
        "dependencies": [
            {"targetService": "api", "callCount": 990, "errorRate": 0.0, "avgLatency": 20}
        ],
    },
    {"serviceName": "api", "callCount": 990, "errorRate": 0.02, "avgLatency": 20, "p99Latency": 120},
]

ANALYZER_RECORDS = [
    {
        "service": "frontend",
        "metadata": {
            "totalSpans": 1000,
            "errorRate": 0.01,
            "avgLatencyMs": 40,
            "p95LatencyMs": 250,
        },
        "dependencies": [{"service": "api", "callCount": 990, "errorRate": 0.0, "avgLatencyMs": 20}],
    },
    {"service": "api", "metadata": {"totalSpans": 990}},
]


@pytest.fixture
def time_range():
    return TimeRange(
        start_time=datetime(2025, 1, 19, 9, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 1, 19, 10, 0, tzinfo=timezone.utc),
    )


class TestModels:
    def test_from_dict(self):
        service = ServiceMetrics.from_dict(WIRE_RECORDS[0])

        assert service.service_name == "frontend"
        assert service.call_count == 1000
        assert service.p99_latency == 300
        assert service.dependencies == (
            ServiceDependency(target_service="api", call_count=990, error_rate=0.0, avg_latency=20),
        )
        assert service.dependency_names == ["api"]

    def test_from_dict_defaults(self):
        service = ServiceMetrics.from_dict({"serviceName": "lonely"})

        assert service.call_count == 0
        assert service.error_rate == 0.0
        assert service.dependencies == ()

    def test_to_dict_matches_wire_format(self):
        service = ServiceMetrics.from_dict(WIRE_RECORDS[0])
        assert service.to_dict() == WIRE_RECORDS[0]

    def test_index_first_entry_wins(self, service_factory):
        first = service_factory("svc", calls=1)
        index = index_topology([first, service_factory("svc", calls=2)])

        assert index["svc"] is first

    def test_time_range_to_dict(self, time_range):
        assert time_range.to_dict() == {
            "startTime": "2025-01-19T09:00:00+00:00",
            "endTime": "2025-01-19T10:00:00+00:00",
        }


class TestParseTopology:
    def test_wire_records(self):
        services = parse_topology(WIRE_RECORDS)
        assert [s.service_name for s in services] == ["frontend", "api"]

    def test_services_mapping(self):
        services = parse_topology({"services": WIRE_RECORDS})
        assert len(services) == 2

    def test_analyzer_records(self):
        services = parse_topology(ANALYZER_RECORDS)

        assert services[0].call_count == 1000
        assert services[0].p99_latency == 250
        assert services[0].dependency_names == ["api"]
        assert services[1].error_rate == 0

    def test_empty_list(self):
        assert parse_topology([]) == []

    @pytest.mark.parametrize(
        "data",
        [
            None,
            "frontend",
            {"nodes": []},
            [{"name": "frontend"}],
            [{"serviceName": "a"}, {"service": "b"}],
            [{"serviceName": "a", "dependencies": [{"callCount": 1}]}],
            [{"serviceName": "a", "callCount": "lots"}],
            [{"serviceName": 7}],
            [{"serviceName": "a", "dependencies": [{"targetService": "b", "avgLatency": "slow"}]}],
            [{"service": "a", "metadata": {"errorRate": "high"}}],
            [{"service": "a", "dependencies": [{"callCount": 3}]}],
        ],
    )
    def test_invalid_shapes(self, data):
        with pytest.raises(TopologyLoadError):
            parse_topology(data)


def test_service_metrics_from_topology_handles_missing_metadata():
    services = service_metrics_from_topology([{"service": "bare", "metadata": None}])

    assert services == [ServiceMetrics(service_name="bare")]


def test_service_metrics_from_topology_accepts_quoted_numbers():
    records = [
        {
            "service": "api",
            "metadata": {"totalSpans": "1200", "errorRate": "0.01"},
            "dependencies": [{"service": "db", "callCount": "300"}],
        }
    ]

    (service,) = service_metrics_from_topology(records)

    assert service.call_count == 1200
    assert service.error_rate == 0.01
    assert service.dependencies[0].call_count == 300


def test_wire_records_reject_quoted_numbers():
    with pytest.raises(TopologyLoadError) as exc_info:
        parse_topology([{"serviceName": "a", "callCount": "1200"}])

    assert exc_info.value.details["field"].startswith("callCount")


class TestLoadTopology:
    def test_load_json(self, tmp_path):
        path = tmp_path / "topology.json"
        path.write_text(json.dumps(WIRE_RECORDS))

        assert [s.service_name for s in load_topology(path)] == ["frontend", "api"]

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "topology.yaml"
        path.write_text(yaml.safe_dump({"services": ANALYZER_RECORDS}))

        services = load_topology(str(path))
        assert services[0].dependency_names == ["api"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(TopologyLoadError) as exc_info:
            load_topology(tmp_path / "missing.json")

        assert exc_info.value.details["path"].endswith("missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(TopologyLoadError, match="Invalid topology file"):
            load_topology(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("services: [unclosed")

        with pytest.raises(TopologyLoadError):
            load_topology(path)


class TestSources:
    @pytest.mark.asyncio
    async def test_static_source(self, two_service_topology, time_range):
        source = StaticTopologySource(two_service_topology)

        services = await source.get_service_metrics(time_range)

        assert source.name == "static"
        assert services == two_service_topology
        assert services is not two_service_topology

    @pytest.mark.asyncio
    async def test_file_source_rereads(self, tmp_path, time_range):
        path = tmp_path / "topology.json"
        path.write_text(json.dumps(WIRE_RECORDS))
        source = FileTopologySource(path)

        assert len(await source.get_service_metrics(time_range)) == 2

        path.write_text(json.dumps(WIRE_RECORDS[:1]))
        assert len(await source.get_service_metrics(time_range)) == 1
        assert source.name == f"file:{path}"

    @pytest.mark.asyncio
    async def test_file_source_reads_off_the_event_loop(self, monkeypatch, time_range):
        loop_thread = threading.get_ident()
        reader_threads = []

        def fake_load(path):
            reader_threads.append(threading.get_ident())
            return []

        monkeypatch.setattr("pathlayer.topology.source.load_topology", fake_load)

        assert await FileTopologySource("topology.json").get_service_metrics(time_range) == []
        assert reader_threads and reader_threads[0] != loop_thread


def test_demo_topology_shape():
    topology = create_demo_topology()
    names = {s.service_name for s in topology}

    assert len(topology) == 15
    assert len(names) == len(topology)
    assert [s.service_name for s in find_entry_points(topology)] == [
        "frontend",
        "mobile-gateway",
        "batch-scheduler",
        "admin-portal",
    ]
