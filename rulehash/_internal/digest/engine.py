from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from rulehash.graph import TargetGraph
from rulehash.types import (
    CycleError,
    Diagnostic,
    DiagnosticKind,
    GeneratedFile,
    Label,
    PackageGroup,
    Rule,
    SourceFile,
    Target,
    UnknownLabelError,
    UnknownTargetKindError,
)
from rulehash._internal.digest.canonical import (
    EMPTY_DIGEST,
    IGNORED_ATTRIBUTES,
    new_hasher,
    serialize_attribute,
)
from rulehash._internal.digest.source_locations import (
    SourceLocationResolver,
    source_file_path,
)

logger = logging.getLogger("rulehash.digest")


def _read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


class DigestEngine:
    """Computes content digests of targets in one graph snapshot.

    A rule's digest covers its attributes (minus ``ignored_attributes``) in
    declared order, followed by the digests of its rule inputs in declared
    order. A source file's digest is the SHA-256 of its content. A generated
    file carries the digest of its generating rule.

    Digests are memoized by label for the lifetime of the engine, so a target
    reachable through many paths is computed once. Recoverable problems
    (dangling references, missing or unreadable files, unsupported kinds)
    are collected in ``diagnostics`` instead of stopping the run.

    Example::

        engine = DigestEngine(build_graph(targets))
        engine.hexdigest("//app:server")
    """

    def __init__(
        self,
        graph: TargetGraph,
        *,
        ignored_attributes: Iterable[str] = IGNORED_ATTRIBUTES,
        resolver: SourceLocationResolver | None = None,
        read_bytes: Callable[[str], bytes] | None = None,
    ):
        self.graph = graph
        self.ignored_attributes = frozenset(ignored_attributes)
        self.resolver = resolver or SourceLocationResolver()
        self._read_bytes = read_bytes or _read_file
        self._cache: dict[Label, bytes] = {}
        # Labels that resolved to no digest; their diagnostic is reported once.
        self._no_digest: set[Label] = set()
        self._path_stack: list[Label] = []
        self._path_members: set[Label] = set()
        self.diagnostics: list[Diagnostic] = []

    def digest(self, label: Label) -> bytes | None:
        """Return the digest of ``label``.

        Returns None for targets that carry no digest (package groups, and
        generated files whose generating rule is missing).

        Raises:
            UnknownLabelError: if ``label`` is not in the graph.
            CycleError: if the rule inputs reachable from ``label`` loop.
        """
        target = self.graph.get(label)
        if target is None:
            raise UnknownLabelError(label)
        return self._digest(label, target)

    def hexdigest(self, label: Label) -> str | None:
        result = self.digest(label)
        return result.hex() if result is not None else None

    def cached(self, label: Label) -> bytes | None:
        """Return the memoized digest of ``label`` without computing anything."""
        return self._cache.get(label)

    def __contains__(self, label: object) -> bool:
        return label in self._cache

    def _digest(self, label: Label, target: Target) -> bytes | None:
        cached = self._cache.get(label)
        if cached is not None:
            return cached
        if label in self._no_digest:
            return None

        with self._visiting(label):
            result = self._compute(label, target)

        if result is None:
            self._no_digest.add(label)
        else:
            self._cache[label] = result
        return result

    @contextmanager
    def _visiting(self, label: Label) -> Iterator[None]:
        if label in self._path_members:
            cycle_start = self._path_stack.index(label)
            raise CycleError(tuple(self._path_stack[cycle_start:]) + (label,))
        self._path_stack.append(label)
        self._path_members.add(label)
        try:
            yield
        finally:
            self._path_stack.pop()
            self._path_members.discard(label)

    def _compute(self, label: Label, target: Target) -> bytes | None:
        if isinstance(target, Rule):
            return self._digest_rule(target)
        if isinstance(target, SourceFile):
            return self._digest_source_file(label, target)
        if isinstance(target, GeneratedFile):
            return self._digest_generated_file(label, target)
        if isinstance(target, PackageGroup):
            self._report(
                DiagnosticKind.UNSUPPORTED_KIND,
                label,
                f"Skipped target: {label} (package groups carry no digest)",
            )
            return None
        raise UnknownTargetKindError(
            f"Invalid target: {type(target).__name__} for label {label}"
        )

    def _digest_rule(self, rule: Rule) -> bytes:
        hasher = new_hasher()
        for attribute in rule.attributes:
            if attribute.name in self.ignored_attributes:
                continue
            hasher.update(serialize_attribute(attribute))

        for input_label in rule.rule_inputs:
            input_target = self.graph.get(input_label)
            if input_target is None:
                self._report(
                    DiagnosticKind.DANGLING_REFERENCE,
                    rule.name,
                    f"{input_label} not found in target map",
                    reference=input_label,
                )
                continue
            input_digest = self._digest(input_label, input_target)
            if input_digest is not None:
                hasher.update(input_digest)

        return hasher.digest()

    def _digest_source_file(self, label: Label, source: SourceFile) -> bytes:
        path = self.resolver.resolve(source)
        if path is None:
            # The resolver already logged the miss.
            missing_path = source_file_path(source)
            self._report(
                DiagnosticKind.MISSING_SOURCE,
                label,
                f"Source file {label} not found on disk at {missing_path}; "
                "hashed as empty content",
                reference=missing_path,
                level=None,
            )
            return EMPTY_DIGEST

        try:
            content = self._read_bytes(path)
        except OSError as e:
            self._report(
                DiagnosticKind.UNREADABLE_SOURCE,
                label,
                f"Failed to read file {path}: {e}; hashed as empty content",
                reference=path,
            )
            return EMPTY_DIGEST

        hasher = new_hasher()
        hasher.update(content)
        return hasher.digest()

    def _digest_generated_file(
        self, label: Label, generated: GeneratedFile
    ) -> bytes | None:
        generating_label = generated.generating_rule
        generator = self.graph.get(generating_label)
        if generator is None:
            self._report(
                DiagnosticKind.DANGLING_REFERENCE,
                label,
                f"Generating rule {generating_label} of {label} not found in target map",
                reference=generating_label,
            )
            return None

        # Computed under the generated file's own label; the generating rule
        # is only cached when it is requested itself.
        with self._visiting(generating_label):
            return self._compute(label, generator)

    def _report(
        self,
        kind: DiagnosticKind,
        label: Label,
        message: str,
        reference: str | None = None,
        level: int | None = logging.WARNING,
    ) -> None:
        if level is not None:
            logger.log(level, message)
        self.diagnostics.append(Diagnostic(kind, label, message, reference))
