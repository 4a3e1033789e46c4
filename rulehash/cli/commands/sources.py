"""Sources command for CLI."""

from __future__ import annotations

from rulehash.cli.formatting import write_json
from rulehash.query import load_query_result
from rulehash.report import compute_sources_report


def sources_command(query_file: str, output_file: str | None = None) -> None:
    """Write the local inputs of every local rule as JSON."""
    report = compute_sources_report(load_query_result(query_file))
    write_json(report.to_dict(), output_file)
