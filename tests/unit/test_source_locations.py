"""Unit tests for source file path resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from rulehash._internal.digest.source_locations import (
    SourceLocationResolver,
    source_file_path,
)
from tests.factories import make_source, write_source


@pytest.mark.parametrize(
    "name, location, expected",
    [
        pytest.param("//pkg:x.go", "pkg/BUILD:3:10", "pkg/x.go", id="package_file"),
        pytest.param("//pkg:sub/x.go", "pkg/BUILD:3:10", "pkg/sub/x.go", id="nested_file"),
        pytest.param("//:x.go", "BUILD:1:1", "x.go", id="root_package"),
        pytest.param(
            "//pkg:x.go",
            "/home/dev/ws/pkg/BUILD.bazel:1:1",
            "/home/dev/ws/pkg/x.go",
            id="absolute_location",
        ),
        pytest.param("@repo//pkg:x.go", "ext/pkg/BUILD:1:1", "ext/pkg/x.go", id="external"),
    ],
)
def test_source_file_path(name: str, location: str, expected: str) -> None:
    assert source_file_path(make_source(name, location)) == os.path.normpath(expected)


def test_resolve_existing_file(workspace: Path) -> None:
    write_source(workspace, "pkg/x.go", b"package x")
    resolver = SourceLocationResolver()

    assert resolver.resolve(make_source("//pkg:x.go", "pkg/BUILD:1:1")) == os.path.join(
        "pkg", "x.go"
    )


def test_resolve_missing_file_returns_none(
    workspace: Path, caplog: pytest.LogCaptureFixture
) -> None:
    resolver = SourceLocationResolver()

    with caplog.at_level(logging.INFO, logger="rulehash.sources"):
        assert resolver.resolve(make_source("//pkg:gone.go", "pkg/BUILD:1:1")) is None

    assert "does not exist on disk" in caplog.text


def test_resolve_caches_hits(workspace: Path) -> None:
    path = write_source(workspace, "pkg/x.go", b"package x")
    resolver = SourceLocationResolver()
    source = make_source("//pkg:x.go", "pkg/BUILD:1:1")

    first = resolver.resolve(source)
    path.unlink()

    assert resolver.resolve(source) == first
    assert len(resolver) == 1


def test_resolve_caches_misses(workspace: Path) -> None:
    resolver = SourceLocationResolver()
    source = make_source("//pkg:x.go", "pkg/BUILD:1:1")

    assert resolver.resolve(source) is None
    write_source(workspace, "pkg/x.go", b"package x")

    assert resolver.resolve(source) is None


def test_cache_is_keyed_by_combined_path(workspace: Path) -> None:
    write_source(workspace, "pkg/x.go", b"package x")
    resolver = SourceLocationResolver()

    resolver.resolve(make_source("//pkg:x.go", "pkg/BUILD:1:1"))
    resolver.resolve(make_source("//pkg:x.go", "pkg/BUILD:7:3"))

    assert len(resolver) == 1


def test_clear_forgets_lookups(workspace: Path) -> None:
    resolver = SourceLocationResolver()
    source = make_source("//pkg:x.go", "pkg/BUILD:1:1")
    assert resolver.resolve(source) is None

    write_source(workspace, "pkg/x.go", b"package x")
    resolver.clear()

    assert resolver.resolve(source) is not None
