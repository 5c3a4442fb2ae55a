"""Tests for critical path serializers."""

from __future__ import annotations

import json

import pytest
from pathlayer.paths import CriticalPathAnalyzer
from pathlayer.paths.assembler import assemble_path
from pathlayer.paths.models import CandidatePath, DiscoveryMethod, PathMetrics, Priority
from pathlayer.paths.serializers import serialize_json, serialize_mermaid


@pytest.fixture
def paths():
    checkout = assemble_path(
        CandidatePath(
            name="User Checkout Flow",
            description="Buy things",
            services=("frontend", "api-gateway", "payment-service"),
        ),
        path_id="path-1",
        metrics=PathMetrics(request_count=12000, error_rate=0.08),
        priority=Priority.CRITICAL,
        severity=0.95,
        discovered_by=DiscoveryMethod.LLM,
        model="gpt-test",
    )
    search = assemble_path(
        CandidatePath(
            name="Search",
            description="Find things",
            services=("frontend", "search.v2"),
        ),
        path_id="path-2",
        metrics=PathMetrics(),
        priority=Priority.LOW,
        severity=0.3,
        discovered_by=DiscoveryMethod.LLM,
        model="gpt-test",
    )
    return [checkout, search]


class TestJsonSerializer:
    def test_valid_json(self, paths):
        document = json.loads(serialize_json(paths))

        assert list(document) == ["paths"]
        assert [p["id"] for p in document["paths"]] == ["path-1", "path-2"]
        assert document["paths"][0]["metadata"]["model"] == "gpt-test"

    def test_metadata_included_when_given(self, paths):
        document = json.loads(serialize_json(paths, metadata={"pathsDiscovered": 2}))
        assert document["metadata"] == {"pathsDiscovered": 2}

    def test_empty(self):
        assert json.loads(serialize_json([])) == {"paths": []}


class TestMermaidSerializer:
    def test_has_graph_lr(self, paths):
        assert serialize_mermaid(paths).startswith("graph LR")

    def test_subgraph_per_path(self, paths):
        output = serialize_mermaid(paths)

        assert 'subgraph path_1["User Checkout Flow (0.95)"]' in output
        assert 'subgraph path_2["Search (0.30)"]' in output
        assert output.count("    end") == 2

    def test_nodes_scoped_by_path(self, paths):
        output = serialize_mermaid(paths)

        assert "path_1_frontend[frontend]" in output
        assert "path_2_frontend[frontend]" in output
        assert "path_2_search_v2[search.v2]" in output

    def test_edges(self, paths):
        output = serialize_mermaid(paths)

        assert "path_1_frontend --> path_1_api_gateway" in output
        assert "path_1_api_gateway --> path_1_payment_service" in output

    def test_priority_classes(self, paths):
        output = serialize_mermaid(paths)

        for priority in ("critical", "high", "medium", "low"):
            assert f"classDef {priority} " in output
        assert "class path_1 critical" in output
        assert "class path_2 low" in output

    def test_custom_path(self):
        output = serialize_mermaid([CriticalPathAnalyzer().analyze_path(["a", "b"])])

        assert "custom_a --> custom_b" in output
        assert "class custom medium" in output
