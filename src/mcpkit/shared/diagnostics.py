"""Path-qualified validation diagnostics."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IssueKind(str, Enum):
    MISSING_PARAMETER = "missing_parameter"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_SCHEMA = "invalid_schema"
    UNSUPPORTED_SCHEMA_TYPE = "unsupported_schema_type"
    INVALID_SCHEMA_DEFINITION = "invalid_schema_definition"


# Display names for schema tags in type mismatch messages
_TYPE_NAMES = {
    "string": "String",
    "int": "Int",
    "bool": "Bool",
    "object": "an object/dictionary",
    "array": "an array",
}


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found at ``path``.

    ``message`` is the short form meant for programmatic consumption.
    ``describe()`` renders the sentence shown to people, which includes the path.
    """

    kind: IssueKind
    path: str
    message: str
    detail: str | None = None

    @classmethod
    def missing_parameter(cls, path: str) -> "ValidationIssue":
        return cls(IssueKind.MISSING_PARAMETER, path, "Missing parameter")

    @classmethod
    def type_mismatch(cls, path: str, expected: str) -> "ValidationIssue":
        name = _TYPE_NAMES.get(expected, expected)
        return cls(IssueKind.TYPE_MISMATCH, path, f"Must be {name}", detail=expected)

    @classmethod
    def invalid_schema(cls, path: str, requirement: str) -> "ValidationIssue":
        return cls(IssueKind.INVALID_SCHEMA, path, f"Must {requirement}")

    @classmethod
    def unsupported_schema_type(cls, path: str, type_name: str) -> "ValidationIssue":
        return cls(
            IssueKind.UNSUPPORTED_SCHEMA_TYPE,
            path,
            f"Unsupported type: {type_name}",
            detail=type_name,
        )

    @classmethod
    def invalid_schema_definition(cls, path: str) -> "ValidationIssue":
        return cls(
            IssueKind.INVALID_SCHEMA_DEFINITION, path, "Invalid type definition"
        )

    def describe(self) -> str:
        if self.kind is IssueKind.MISSING_PARAMETER:
            return f"Missing parameter '{self.path}'"
        if self.kind is IssueKind.UNSUPPORTED_SCHEMA_TYPE:
            return f"Unsupported type for '{self.path}': {self.detail}"
        if self.kind is IssueKind.INVALID_SCHEMA_DEFINITION:
            return f"Invalid type definition for '{self.path}'"
        return f"The parameter '{self.path}' {self.message[0].lower()}{self.message[1:]}"

    def __str__(self) -> str:
        return f"[ValidationError] {self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Outcome of validating a parameter mapping.

    Issues are kept in discovery order. ``valid``, ``errors`` and
    ``structured_errors`` are all derived from them, so the three views can
    never disagree.
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> list[str]:
        return [issue.describe() for issue in self.issues]

    @property
    def structured_errors(self) -> list[tuple[str, str]]:
        return [(issue.path, issue.message) for issue in self.issues]

    def add(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: "ValidationResult") -> None:
        self.issues.extend(other.issues)

    def to_protocol(self) -> dict[str, Any]:
        """Error ``data`` payload for protocol responses."""
        return {
            "errors": [
                {"path": issue.path, "message": issue.message, "kind": issue.kind.value}
                for issue in self.issues
            ]
        }
