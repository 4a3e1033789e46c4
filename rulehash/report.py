"""Reports assembled from a target graph: per-rule digests and per-rule inputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from rulehash.graph import TargetGraph
from rulehash.types import Diagnostic, Label, Rule, Target
from rulehash._internal.digest.engine import DigestEngine
from rulehash._internal.shared.utils import is_external_label

logger = logging.getLogger("rulehash.report")


@dataclass
class DigestEntry:
    label: Label
    rule_class: str
    digest: str


@dataclass
class DigestReport:
    """Digests of all rules in a graph plus the problems met computing them."""

    targets: list[DigestEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "targets": [
                {
                    "label": entry.label,
                    "rule_class": entry.rule_class,
                    "digest": entry.digest,
                }
                for entry in self.targets
            ],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


@dataclass
class SourcesEntry:
    label: Label
    inputs: list[Label] = field(default_factory=list)


@dataclass
class SourcesReport:
    targets: list[SourcesEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "targets": [
                {"label": entry.label, "inputs": list(entry.inputs)}
                for entry in self.targets
            ]
        }


def compute_digest_report(
    graph: TargetGraph,
    engine: DigestEngine | None = None,
    include_external: bool = False,
) -> DigestReport:
    """Digest every rule of ``graph``, sorted by label.

    External workspace rules (``@...`` and ``//external...``) are skipped
    unless ``include_external`` is set; they may still be digested as inputs
    of local rules.
    """
    engine = engine or DigestEngine(graph)
    report = DigestReport()

    for rule in sorted(graph.rules(), key=lambda r: r.name):
        if not include_external and is_external_label(rule.name):
            logger.debug("Skipping external rule %s", rule.name)
            continue
        digest = engine.hexdigest(rule.name)
        if digest is None:
            continue
        report.targets.append(DigestEntry(rule.name, rule.rule_class, digest))

    report.diagnostics = list(engine.diagnostics)
    return report


def compute_sources_report(targets: Iterable[Target]) -> SourcesReport:
    """List the local inputs of each local rule, in query order. No hashing."""
    report = SourcesReport()
    for target in targets:
        if not isinstance(target, Rule) or is_external_label(target.name):
            continue
        inputs = [label for label in target.rule_inputs if not label.startswith("@")]
        report.targets.append(SourcesEntry(target.name, inputs))
    return report
