"""Hash command for CLI."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from rulehash.cli.formatting import write_json
from rulehash.graph import build_graph
from rulehash.query import load_query_result
from rulehash.report import compute_digest_report
from rulehash._internal.digest.canonical import IGNORED_ATTRIBUTES
from rulehash._internal.digest.engine import DigestEngine

logger = logging.getLogger("rulehash.cli")


def hash_command(
    query_file: str,
    output_file: str | None = None,
    include_external: bool = False,
    extra_ignored: Iterable[str] = (),
    strict: bool = False,
) -> int:
    """Digest every rule in a query result and write the JSON report.

    Returns the process exit status: 1 in strict mode when any diagnostic
    was produced, 0 otherwise.
    """
    graph = build_graph(load_query_result(query_file))
    engine = DigestEngine(
        graph, ignored_attributes=IGNORED_ATTRIBUTES | frozenset(extra_ignored)
    )
    report = compute_digest_report(graph, engine, include_external=include_external)
    write_json(report.to_dict(), output_file)

    logger.info(
        "Digested %d rules from %d targets (%d diagnostics)",
        len(report.targets),
        len(graph),
        len(report.diagnostics),
    )
    if output_file is not None:
        print(f"Report written to: {output_file}", file=sys.stderr)

    if strict and report.diagnostics:
        print(
            f"Strict mode: {len(report.diagnostics)} diagnostics produced",
            file=sys.stderr,
        )
        return 1
    return 0
