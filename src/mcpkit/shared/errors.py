"""Exception types shared by the codec, the schema layer and the registries.

Codec and schema errors subclass ValueError so that pydantic field validators
surface them as ValidationError. Registry errors carry a message plus the
subject they are about and render as ``[Kind] subject: message``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcpkit.shared.diagnostics import ValidationIssue, ValidationResult


# ================================
# Codec
# ================================


class CodecError(ValueError):
    """Base class for failures of a single encode or decode call."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedValueError(CodecError):
    """The value is outside the closed set of dynamic value variants."""


class EncodingError(CodecError):
    """A representable value violates the JSON grammar (non-finite float)."""


class DecodingError(CodecError):
    """Malformed input, or a parsed value that matches no variant."""


# ================================
# Schema authoring
# ================================


class SchemaDefinitionError(ValueError):
    """A schema definition cannot be turned into a well-formed schema node."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


# ================================
# Registries
# ================================


class MCPException(Exception):
    """Base class for registry errors."""

    kind = "Error"

    def __init__(self, subject: str, message: str):
        self.subject = subject
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.kind}] {self.subject}: {self.message}"


class NotFoundError(MCPException, KeyError):
    """No tool, resource or prompt is registered under the identifier."""

    kind = "NotFoundError"

    @property
    def identifier(self) -> str:
        return self.subject


class DuplicateError(MCPException):
    """An entity is already registered under the identifier."""

    kind = "DuplicateError"

    @property
    def identifier(self) -> str:
        return self.subject


class ArgumentValidationError(MCPException):
    """Arguments were rejected before the handler was invoked.

    ``path`` and ``message`` describe the first recorded issue; ``result``
    holds every issue found during validation.
    """

    kind = "ValidationError"

    def __init__(self, result: ValidationResult):
        first: ValidationIssue = result.issues[0]
        super().__init__(first.path, first.message)
        self.result = result

    @property
    def path(self) -> str:
        return self.subject
