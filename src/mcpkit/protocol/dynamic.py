"""Closed, recursive representation of JSON-compatible values.

Every payload that crosses the protocol boundary is one of the seven variants
below. They are immutable, compare structurally and are matched exhaustively
wherever they are consumed, so no unexpected runtime type can slip through.

Example:
    >>> value = DynamicValue.from_native({"key": 123, "active": True, "note": None})
    >>> value
    Object(fields={'key': Int(value=123), 'active': Bool(value=True), 'note': Null()})
    >>> value.to_native()
    {'key': 123, 'active': True, 'note': None}
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, TypeAlias

from pydantic import BaseModel, BeforeValidator, PlainSerializer

from mcpkit.shared.errors import UnsupportedValueError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


class DynamicValue:
    """Base class of the dynamic value variants. Not instantiated directly."""

    __slots__ = ()

    @classmethod
    def from_native(cls, value: Any) -> "DynamicValue":
        """Build a dynamic value from plain Python data.

        Accepts None, bool, int, float, str, lists and tuples, string-keyed
        mappings, pydantic models and existing dynamic values.

        Raises:
            UnsupportedValueError: If the value (or anything nested in it) has
                no dynamic value counterpart, an integer does not fit in 64
                bits, or a container contains itself.
        """
        return _from_native(value, active=set())

    def to_native(self) -> JSONValue:
        """Unwrap into plain Python data."""
        match self:
            case Null():
                return None
            case Bool(value=v) | Int(value=v) | Float(value=v) | String(value=v):
                return v
            case Array(items=items):
                return [item.to_native() for item in items]
            case Object(fields=fields):
                return {key: item.to_native() for key, item in fields.items()}
        raise UnsupportedValueError(f"Unknown dynamic value variant: {type(self).__name__}")


@dataclass(frozen=True, slots=True)
class Null(DynamicValue):
    pass


@dataclass(frozen=True, slots=True)
class Bool(DynamicValue):
    value: bool

    def __post_init__(self):
        _require(isinstance(self.value, bool), self, self.value)


@dataclass(frozen=True, slots=True)
class Int(DynamicValue):
    """Signed 64-bit integer."""

    value: int

    def __post_init__(self):
        _require(
            isinstance(self.value, int) and not isinstance(self.value, bool),
            self,
            self.value,
        )
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise UnsupportedValueError(
                f"Integer {self.value} does not fit in a signed 64-bit value"
            )


@dataclass(frozen=True, slots=True)
class Float(DynamicValue):
    """IEEE-754 double. NaN and infinities are representable but not encodable."""

    value: float

    def __post_init__(self):
        _require(isinstance(self.value, float), self, self.value)


@dataclass(frozen=True, slots=True)
class String(DynamicValue):
    value: str

    def __post_init__(self):
        _require(isinstance(self.value, str), self, self.value)


@dataclass(frozen=True, slots=True)
class Array(DynamicValue):
    items: tuple[DynamicValue, ...] = ()

    def __post_init__(self):
        _require(isinstance(self.items, tuple), self, self.items)
        for item in self.items:
            _require(isinstance(item, DynamicValue), self, item)


@dataclass(frozen=True, slots=True)
class Object(DynamicValue):
    """String-keyed mapping. Insertion order is kept for deterministic output."""

    fields: dict[str, DynamicValue] = field(default_factory=dict)

    def __post_init__(self):
        _require(isinstance(self.fields, dict), self, self.fields)
        for key, item in self.fields.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    f"Object keys must be strings, got {type(key).__name__}"
                )
            _require(isinstance(item, DynamicValue), self, item)

    def __getitem__(self, key: str) -> DynamicValue:
        return self.fields[key]

    def get(self, key: str, default: DynamicValue | None = None) -> DynamicValue | None:
        return self.fields.get(key, default)


def _require(ok: bool, variant: DynamicValue, payload: Any) -> None:
    if not ok:
        raise UnsupportedValueError(
            f"{type(variant).__name__} cannot hold a value of type {type(payload).__name__}"
        )


def _from_native(value: Any, active: set[int]) -> DynamicValue:
    # bool is checked before int because bool is a subclass of int
    if isinstance(value, DynamicValue):
        return value
    if value is None:
        return Null()
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, int):
        return Int(value)
    if isinstance(value, float):
        return Float(value)
    if isinstance(value, str):
        return String(value)
    if isinstance(value, BaseModel):
        return _from_native(
            value.model_dump(by_alias=True, exclude_none=True), active
        )

    if isinstance(value, (list, tuple, Mapping)):
        marker = id(value)
        if marker in active:
            raise UnsupportedValueError("Cannot convert a value that contains itself")
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                fields = {}
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise UnsupportedValueError(
                            f"Object keys must be strings, got {type(key).__name__}"
                        )
                    fields[key] = _from_native(item, active)
                return Object(fields)
            return Array(tuple(_from_native(item, active) for item in value))
        finally:
            active.discard(marker)

    raise UnsupportedValueError(
        f"Value of type {type(value).__name__} cannot be represented as a dynamic value"
    )


def _serialize_dynamic(value: DynamicValue) -> Any:
    return value.to_native()


Dynamic = Annotated[
    DynamicValue,
    BeforeValidator(DynamicValue.from_native),
    PlainSerializer(_serialize_dynamic),
]
"""Pydantic field type: accepts plain data, stores a DynamicValue, dumps plain data."""
