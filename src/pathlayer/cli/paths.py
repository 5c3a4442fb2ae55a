"""
CLI commands for critical path discovery.

Commands:
    pathlayer discover <topology>                  - Discover paths (table output)
    pathlayer discover <topology> --format json    - Dashboard JSON document
    pathlayer discover <topology> --format mermaid - Mermaid flowchart
    pathlayer discover --demo                      - Discover on sample topology
    pathlayer discover <topology> --statistical    - Skip generation entirely
    pathlayer analyze <service> [<service> ...]    - Build an ad hoc path
"""

from __future__ import annotations

import argparse
import asyncio
import json
from datetime import datetime, timedelta, timezone
from typing import Optional

from pathlayer.cli.ux import error, header, print_table, spinner, success, warning
from pathlayer.config import get_settings
from pathlayer.core.errors import ValidationError, main_with_error_handling
from pathlayer.paths import CriticalPath, CriticalPathAnalyzer, create_analyzer
from pathlayer.paths.serializers import serialize_json, serialize_mermaid
from pathlayer.topology import TimeRange, create_demo_topology, load_topology

DEFAULT_WINDOW = timedelta(hours=1)


def _parse_time(value: str, flag: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"{flag} must be an ISO 8601 timestamp", details={flag: value}) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_time_range(start: str | None, end: str | None) -> TimeRange:
    """Build the discovery window; defaults to the hour ending now (or at ``end``)."""
    end_time = _parse_time(end, "--end") if end else datetime.now(timezone.utc)
    start_time = _parse_time(start, "--start") if start else end_time - DEFAULT_WINDOW

    if start_time >= end_time:
        raise ValidationError("--start must be before --end")
    return TimeRange(start_time=start_time, end_time=end_time)


@main_with_error_handling()
def discover_command(
    topology_file: str | None = None,
    output_format: str = "table",
    output_file: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    demo: bool = False,
    statistical: bool = False,
) -> int:
    """
    Discover critical paths in a topology snapshot.

    Args:
        topology_file: JSON or YAML topology snapshot
        output_format: Output format (table, json, mermaid)
        output_file: Optional file path for json/mermaid output
        start: Window start (ISO 8601)
        end: Window end (ISO 8601)
        demo: If True, use the sample topology
        statistical: If True, skip generation and use statistical discovery

    Returns:
        Exit code (0 on success)
    """
    if not demo and topology_file is None:
        error("Topology file is required (or use --demo)")
        return 2

    time_range = resolve_time_range(start, end)
    topology = create_demo_topology() if demo else load_topology(topology_file)  # type: ignore[arg-type]

    settings = get_settings()
    analyzer = CriticalPathAnalyzer() if statistical else create_analyzer(settings)

    with spinner(f"Discovering critical paths across {len(topology)} services"):
        paths = asyncio.run(analyzer.discover_critical_paths(topology, time_range))

    return _output_paths(paths, output_format, output_file, time_range)


@main_with_error_handling()
def analyze_command(services: list[str], output_format: str = "table") -> int:
    """Build an ad hoc path from an ordered service list."""
    path = CriticalPathAnalyzer().analyze_path(services)

    if output_format == "json":
        print(json.dumps(path.to_dict(), indent=2))
        return 0

    _print_paths([path], title="Custom Path")
    return 0


def _output_paths(
    paths: list[CriticalPath],
    output_format: str,
    output_file: Optional[str],
    time_range: TimeRange,
) -> int:
    if output_format == "table":
        if output_file:
            error("--output requires --format json or mermaid")
            return 2
        discovered_by = paths[0].discovered_by if paths else "statistical"
        _print_paths(paths, title=f"Critical Paths ({discovered_by})")
        return 0

    if output_format == "json":
        output = serialize_json(
            paths,
            metadata={
                "timeRange": time_range.to_dict(),
                "pathsDiscovered": len(paths),
            },
        )
    elif output_format == "mermaid":
        output = serialize_mermaid(paths)
    else:
        error(f"Unknown format: {output_format}")
        return 2

    if output_file:
        with open(output_file, "w") as f:
            f.write(output)
            f.write("\n")
        success(f"Wrote {output_format} output to {output_file}")
    else:
        # Use print() not console.print(); output is machine-readable
        print(output)

    return 0


def _print_paths(paths: list[CriticalPath], title: str) -> None:
    header(title)
    if not paths:
        warning("No entry points found; no paths discovered")
        return

    rows = [
        [
            path.id,
            path.name,
            f"[{path.priority.value}]{path.priority.value}[/{path.priority.value}]",
            f"{path.severity:.2f}",
            f"{path.metrics.request_count:g}",
            f"{path.metrics.error_rate:.2%}",
            f"{path.metrics.p99_latency:g}ms",
            " → ".join(path.services),
        ]
        for path in paths
    ]
    print_table(
        title,
        ["ID", "Name", "Priority", "Severity", "Requests", "Errors", "p99", "Services"],
        rows,
    )


def register_discover_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the discover subcommand parser."""
    parser = subparsers.add_parser("discover", help="Discover critical paths in a topology")
    parser.add_argument(
        "topology_file",
        nargs="?",
        help="Path to topology snapshot (JSON or YAML)",
    )
    parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=["table", "json", "mermaid"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--output",
        "-o",
        dest="output_file",
        help="Write output to file instead of stdout",
    )
    parser.add_argument("--start", help="Window start, ISO 8601 (default: end - 1h)")
    parser.add_argument("--end", help="Window end, ISO 8601 (default: now)")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use demo topology for sample output",
    )
    parser.add_argument(
        "--statistical",
        action="store_true",
        help="Skip text generation and use statistical discovery only",
    )


def register_analyze_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the analyze subcommand parser."""
    parser = subparsers.add_parser("analyze", help="Build an ad hoc path from services")
    parser.add_argument("services", nargs="+", help="Ordered service names")
    parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )


def handle_discover_command(args: argparse.Namespace) -> int:
    """Handle discover command from CLI args."""
    return discover_command(
        topology_file=getattr(args, "topology_file", None),
        output_format=getattr(args, "output_format", "table"),
        output_file=getattr(args, "output_file", None),
        start=getattr(args, "start", None),
        end=getattr(args, "end", None),
        demo=getattr(args, "demo", False),
        statistical=getattr(args, "statistical", False),
    )


def handle_analyze_command(args: argparse.Namespace) -> int:
    """Handle analyze command from CLI args."""
    return analyze_command(
        services=list(args.services),
        output_format=getattr(args, "output_format", "table"),
    )
