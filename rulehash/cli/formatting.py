"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

import json
from typing import Any

from rulehash.types import DiagnosticKind

_KIND_COLORS = {
    DiagnosticKind.DANGLING_REFERENCE: "yellow",
    DiagnosticKind.MISSING_SOURCE: "cyan",
    DiagnosticKind.UNREADABLE_SOURCE: "red",
    DiagnosticKind.UNSUPPORTED_KIND: "dim",
}


def format_kind(kind: DiagnosticKind) -> str:
    """Format a diagnostic kind with rich markup color."""
    color = _KIND_COLORS.get(kind)
    if color:
        return f"[{color}]{kind.value}[/{color}]"
    return kind.value


def short_digest(digest: str, full: bool = False) -> str:
    """Shorten a hex digest for display."""
    if full:
        return digest
    return digest[:12] + "..."


def write_json(data: dict[str, Any], output_file: str | None) -> None:
    """Write a report as JSON to ``output_file``, or stdout when None."""
    content = json.dumps(data, indent=2)
    if output_file is None:
        print(content)
        return
    with open(output_file, "w") as f:
        f.write(content)
        f.write("\n")
