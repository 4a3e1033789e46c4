from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from rulehash.types import (
    TARGET_TYPES,
    Label,
    Rule,
    Target,
    UnknownTargetKindError,
)


def label_of(target: Target) -> Label:
    """Return the label identifying a target of any supported kind."""
    if isinstance(target, TARGET_TYPES):
        return target.name
    raise UnknownTargetKindError(
        f"Invalid target: {type(target).__name__} is not a recognized target kind"
    )


class TargetGraph(Mapping[Label, Target]):
    """Read-only label index over one query result snapshot.

    Labels are assumed unique. When the input repeats a label, the later
    target replaces the earlier one. References between targets are not
    checked here; dangling rule inputs surface while digesting.
    """

    def __init__(self, targets: Mapping[Label, Target]):
        self._targets = MappingProxyType(dict(targets))

    @classmethod
    def from_targets(cls, targets: Iterable[Target]) -> TargetGraph:
        index: dict[Label, Target] = {}
        for target in targets:
            index[label_of(target)] = target
        return cls(index)

    def __getitem__(self, label: Label) -> Target:
        return self._targets[label]

    def __iter__(self) -> Iterator[Label]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"TargetGraph({len(self._targets)} targets)"

    def rules(self) -> Iterator[Rule]:
        """Iterate rule targets in index order."""
        for target in self._targets.values():
            if isinstance(target, Rule):
                yield target


def build_graph(targets: Iterable[Target]) -> TargetGraph:
    """Index decoded targets by label.

    Raises:
        UnknownTargetKindError: if any target is not a supported kind.
    """
    return TargetGraph.from_targets(targets)
