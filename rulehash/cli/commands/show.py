"""Show command for CLI."""

from __future__ import annotations

from collections import Counter

from rich.console import Console
from rich.table import Table

from rulehash.cli.formatting import format_kind, short_digest
from rulehash.graph import build_graph
from rulehash.query import load_query_result
from rulehash.report import compute_digest_report


def show_command(
    query_file: str,
    limit: int | None = None,
    full_digests: bool = False,
    include_external: bool = False,
) -> None:
    """Print rule digests and a diagnostics summary as tables."""
    graph = build_graph(load_query_result(query_file))
    report = compute_digest_report(graph, include_external=include_external)

    if not report.targets:
        print("No rules found")
        return

    console = Console()
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Label", style="cyan")
    table.add_column("Rule class", style="green")
    table.add_column("Digest", style="dim", no_wrap=True)

    entries = report.targets if limit is None else report.targets[:limit]
    for entry in entries:
        table.add_row(
            entry.label, entry.rule_class, short_digest(entry.digest, full_digests)
        )
    console.print(table)

    if len(entries) < len(report.targets):
        console.print(f"... {len(report.targets) - len(entries)} more rules")

    if not report.diagnostics:
        return

    counts = Counter(d.kind for d in report.diagnostics)
    summary = Table(show_header=True, header_style="bold")
    summary.add_column("Diagnostic")
    summary.add_column("Count", justify="right")
    for kind, count in sorted(counts.items(), key=lambda item: item[0].value):
        summary.add_row(format_kind(kind), str(count))
    console.print(summary)
