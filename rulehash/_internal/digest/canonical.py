"""Canonical byte encodings fed into target digests."""

from __future__ import annotations

import hashlib
import json

from rulehash.types import Attribute

# Build metadata that depends on where the workspace lives, not on what the
# rule declares.
IGNORED_ATTRIBUTES = frozenset({"build_file", "generator_location", "path"})

DIGEST_SIZE = hashlib.sha256().digest_size

EMPTY_DIGEST = hashlib.sha256(b"").digest()


def new_hasher():
    return hashlib.sha256()


def serialize_attribute(attribute: Attribute) -> bytes:
    """Encode an attribute as compact JSON with sorted keys.

    Equal attributes always produce equal bytes, independent of the key
    order of the decoded record.
    """
    content = json.dumps(
        {"name": attribute.name, "value": attribute.value},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return content.encode("utf-8")
