from .graph import TargetGraph, build_graph, label_of
from .query import decode_query_result, load_query_result
from .report import (
    DigestReport,
    SourcesReport,
    compute_digest_report,
    compute_sources_report,
)
from .types import (
    Attribute,
    CycleError,
    Diagnostic,
    DiagnosticKind,
    GeneratedFile,
    PackageGroup,
    QueryDecodeError,
    Rule,
    RuleHashError,
    SourceFile,
    Target,
    TargetKind,
    UnknownLabelError,
    UnknownTargetKindError,
)
from ._internal.digest.canonical import EMPTY_DIGEST, IGNORED_ATTRIBUTES
from ._internal.digest.engine import DigestEngine
from ._internal.digest.source_locations import SourceLocationResolver

__all__ = [
    "TargetGraph",
    "build_graph",
    "label_of",
    "DigestEngine",
    "SourceLocationResolver",
    "EMPTY_DIGEST",
    "IGNORED_ATTRIBUTES",
    "decode_query_result",
    "load_query_result",
    "DigestReport",
    "SourcesReport",
    "compute_digest_report",
    "compute_sources_report",
    "Target",
    "TargetKind",
    "Rule",
    "SourceFile",
    "GeneratedFile",
    "PackageGroup",
    "Attribute",
    "Diagnostic",
    "DiagnosticKind",
    "RuleHashError",
    "CycleError",
    "QueryDecodeError",
    "UnknownLabelError",
    "UnknownTargetKindError",
]
