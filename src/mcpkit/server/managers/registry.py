"""Shared bookkeeping for the tool, resource and prompt managers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Generic, Literal, Protocol, TypeVar

from mcpkit.protocol.schema import SchemaLike
from mcpkit.shared.errors import ArgumentValidationError, DuplicateError, NotFoundError
from mcpkit.shared.validation import validate

DuplicatePolicy = Literal["keep", "replace", "error"]

# Handlers receive the native argument mapping and may return anything
# DynamicValue.from_native accepts.
Handler = Callable[[dict[str, Any]], Awaitable[Any]]


class Identified(Protocol):
    identifier: str


M = TypeVar("M", bound=Identified)


class Registry(ABC, Generic[M]):
    """Metadata and handlers keyed by identifier.

    All mutations are synchronous. A registry is owned by a single asyncio
    event loop, and an execute finishes its lookup and validation before its
    first suspension point, so no locking is needed.
    """

    kind = "Entity"

    def __init__(
        self,
        *,
        validate_arguments: bool = True,
        warn_on_duplicates: bool = True,
        duplicate_policy: DuplicatePolicy = "keep",
        logger: logging.Logger | None = None,
    ):
        if duplicate_policy not in ("keep", "replace", "error"):
            raise ValueError(f"Unknown duplicate policy: {duplicate_policy!r}")
        self.registered: dict[str, M] = {}
        self.handlers: dict[str, Handler] = {}
        self.validate_arguments = validate_arguments
        self.warn_on_duplicates = warn_on_duplicates
        self.duplicate_policy = duplicate_policy
        self.logger = logger or logging.getLogger(type(self).__module__)

    # ================================
    # Registration
    # ================================

    def register(self, metadata: M, handler: Handler) -> M:
        """Register ``metadata`` with its handler.

        Returns:
            The registered metadata. Under the ``"keep"`` policy a duplicate
            registration is ignored and the existing metadata is returned.

        Raises:
            DuplicateError: If the identifier is taken and the policy is
                ``"error"``.
        """
        identifier = metadata.identifier
        existing = self.registered.get(identifier)
        if existing is not None:
            if self.duplicate_policy == "error":
                raise DuplicateError(identifier, f"{self.kind} already registered")
            if self.warn_on_duplicates:
                self.logger.warning(
                    f"{self.kind} already registered: {identifier} "
                    f"({'replacing' if self.duplicate_policy == 'replace' else 'keeping'} existing)"
                )
            if self.duplicate_policy == "keep":
                return existing

        self.registered[identifier] = metadata
        self.handlers[identifier] = handler
        return metadata

    def get(self, identifier: str) -> M | None:
        return self.registered.get(identifier)

    def get_handler(self, identifier: str) -> Handler | None:
        return self.handlers.get(identifier)

    def list(self) -> list[M]:
        """Registered metadata in registration order."""
        return list(self.registered.values())

    def remove(self, identifier: str) -> bool:
        """Remove an entity. Returns True if it was registered."""
        self.handlers.pop(identifier, None)
        return self.registered.pop(identifier, None) is not None

    def clear(self) -> None:
        self.registered.clear()
        self.handlers.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.registered

    def __len__(self) -> int:
        return len(self.registered)

    # ================================
    # Execution
    # ================================

    @abstractmethod
    def expected_parameters(
        self, metadata: M, arguments: Mapping[str, Any]
    ) -> Mapping[str, SchemaLike]:
        """Schemas the arguments of an execute are validated against."""

    async def _invoke(self, identifier: str, arguments: Mapping[str, Any] | None) -> Any:
        """Look up, validate and await the handler, returning its raw result.

        Raises:
            NotFoundError: If nothing is registered under ``identifier``.
            ArgumentValidationError: If validation is enabled and fails. The
                handler is not invoked.
        """
        arguments = dict(arguments or {})

        metadata = self.registered.get(identifier)
        if metadata is None:
            self.logger.warning(f"Unknown {self.kind.lower()}: {identifier}")
            raise NotFoundError(identifier, f"{self.kind} not found")

        if self.validate_arguments:
            result = validate(arguments, self.expected_parameters(metadata, arguments))
            if not result.valid:
                self.logger.info(
                    f"Rejected arguments for {self.kind.lower()} {identifier}: "
                    + "; ".join(result.errors)
                )
                raise ArgumentValidationError(result)

        handler = self.handlers[identifier]
        return await handler(arguments)
