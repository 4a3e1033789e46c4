from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

Label = str


class RuleHashError(Exception):
    """Base class for fatal errors raised by rulehash."""

    pass


class UnknownTargetKindError(RuleHashError):
    """Raised when a target is not one of the supported kinds."""

    pass


class QueryDecodeError(RuleHashError):
    """Raised when query output cannot be decoded into targets."""

    pass


class UnknownLabelError(RuleHashError, KeyError):
    """Raised when a digest is requested for a label absent from the graph."""

    def __str__(self) -> str:
        return f"Label not found in target graph: {self.args[0]}"


class CycleError(RuleHashError):
    """Raised when the rule-input relation loops back onto itself."""

    def __init__(self, cycle: tuple[Label, ...]):
        self.cycle = cycle
        super().__init__(
            f"Circular dependency detected: {' -> '.join(cycle)}. "
            "Rule inputs must form an acyclic graph."
        )


class TargetKind(Enum):
    """Discriminator of a target in the query result.

    Values match the numeric tags used by the build system's query output.
    """

    RULE = 1
    SOURCE_FILE = 2
    GENERATED_FILE = 3
    PACKAGE_GROUP = 4


@dataclass(frozen=True)
class Attribute:
    """A single declared rule attribute.

    ``value`` is the decoded attribute record without its name (type, value
    fields, explicitly-specified flag, ...). It must be JSON-compatible.
    """

    name: str
    value: Any = None


@dataclass(frozen=True)
class Rule:
    name: Label
    rule_class: str
    attributes: tuple[Attribute, ...] = ()
    rule_inputs: tuple[Label, ...] = ()


@dataclass(frozen=True)
class SourceFile:
    # `location` is "<path>:<line>:<col>" of the declaring build file.
    name: Label
    location: str = ""


@dataclass(frozen=True)
class GeneratedFile:
    name: Label
    generating_rule: Label


@dataclass(frozen=True)
class PackageGroup:
    name: Label


Target = Union[Rule, SourceFile, GeneratedFile, PackageGroup]

TARGET_TYPES: tuple[type, ...] = (Rule, SourceFile, GeneratedFile, PackageGroup)


class DiagnosticKind(str, Enum):
    """Recoverable conditions met while digesting."""

    DANGLING_REFERENCE = "dangling_reference"
    MISSING_SOURCE = "missing_source"
    UNREADABLE_SOURCE = "unreadable_source"
    UNSUPPORTED_KIND = "unsupported_kind"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem that may make a digest less trustworthy.

    ``label`` is the target being digested when the problem was found;
    ``reference`` is the offending label or path, when there is one.
    """

    kind: DiagnosticKind
    label: Label
    message: str
    reference: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "label": self.label,
            "reference": self.reference,
            "message": self.message,
        }

