"""Decoding of build system query output into targets.

Supports the JSON renderings of a query result::

    bazel query --output=jsonproto "deps(//...)" > query.json
    bazel query --output=streamed_jsonproto "deps(//...)" > query.ndjson

The first is one ``QueryResult`` object with a ``target`` list; the second
is one target object per line.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rulehash.types import (
    Attribute,
    GeneratedFile,
    PackageGroup,
    QueryDecodeError,
    Rule,
    SourceFile,
    Target,
    TargetKind,
    UnknownTargetKindError,
)

logger = logging.getLogger("rulehash.query")

_PAYLOAD_KEYS: dict[TargetKind, tuple[str, str]] = {
    TargetKind.RULE: ("rule", "rule"),
    TargetKind.SOURCE_FILE: ("sourceFile", "source_file"),
    TargetKind.GENERATED_FILE: ("generatedFile", "generated_file"),
    TargetKind.PACKAGE_GROUP: ("packageGroup", "package_group"),
}


def _field(data: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _target_kind(raw: Any) -> TargetKind:
    try:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return TargetKind(raw)
        if isinstance(raw, str):
            return TargetKind[raw.upper()]
    except (KeyError, ValueError):
        pass
    raise UnknownTargetKindError(f"Invalid target type: {raw!r}")


def _decode_attribute(raw: dict[str, Any]) -> Attribute:
    if "name" not in raw:
        raise QueryDecodeError(f"Attribute without a name: {raw!r}")
    value = {key: item for key, item in raw.items() if key != "name"}
    return Attribute(name=raw["name"], value=value)


def _require_name(payload: dict[str, Any], kind: TargetKind) -> str:
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        raise QueryDecodeError(f"{kind.name} target without a name: {payload!r}")
    return name


def decode_target(data: dict[str, Any]) -> Target:
    """Decode one target object of a query result.

    Raises:
        UnknownTargetKindError: if the target type is not supported.
        QueryDecodeError: if the target is malformed.
    """
    if not isinstance(data, dict):
        raise QueryDecodeError(f"Expected a target object, got {type(data).__name__}")

    kind = _target_kind(data.get("type"))
    camel, snake = _PAYLOAD_KEYS[kind]
    payload = _field(data, camel, snake)
    if not isinstance(payload, dict):
        raise QueryDecodeError(f"{kind.name} target without a '{camel}' payload")

    name = _require_name(payload, kind)

    if kind is TargetKind.RULE:
        attributes = tuple(
            _decode_attribute(raw) for raw in payload.get("attribute", [])
        )
        return Rule(
            name=name,
            rule_class=_field(payload, "ruleClass", "rule_class", ""),
            attributes=attributes,
            rule_inputs=tuple(_field(payload, "ruleInput", "rule_input", [])),
        )
    if kind is TargetKind.SOURCE_FILE:
        return SourceFile(name=name, location=payload.get("location", ""))
    if kind is TargetKind.GENERATED_FILE:
        generating_rule = _field(payload, "generatingRule", "generating_rule")
        if not generating_rule:
            raise QueryDecodeError(f"Generated file {name} without a generating rule")
        return GeneratedFile(name=name, generating_rule=generating_rule)
    return PackageGroup(name=name)


def _decode_document(document: Any) -> list[Target]:
    if isinstance(document, dict) and "type" not in document:
        if document and "target" not in document:
            raise QueryDecodeError(
                f"Expected a query result or a target object, got keys {sorted(document)}"
            )
        targets = document.get("target", [])
        if not isinstance(targets, list):
            raise QueryDecodeError("Query result 'target' must be a list")
        return [decode_target(item) for item in targets]
    if isinstance(document, list):
        return [decode_target(item) for item in document]
    return [decode_target(document)]


def decode_query_result(text: str) -> list[Target]:
    """Decode a JSON or newline-delimited JSON query result.

    Target order is preserved.
    """
    if not text.strip():
        return []

    try:
        document = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        targets = _decode_document(document)
        logger.debug("Decoded %d targets from query result", len(targets))
        return targets

    targets: list[Target] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as e:
            raise QueryDecodeError(
                f"Failed to parse query result at line {lineno}: {e}"
            ) from e
        targets.append(decode_target(item))
    logger.debug("Decoded %d streamed targets from query result", len(targets))
    return targets


def load_query_result(path: str | Path) -> list[Target]:
    """Read and decode a query result file; ``-`` reads stdin."""
    try:
        if str(path) == "-":
            text = sys.stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise QueryDecodeError(f"Failed to read file {path}: {e}") from e
    return decode_query_result(text)
