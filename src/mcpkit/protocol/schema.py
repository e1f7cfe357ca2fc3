"""Parameter schema nodes.

A schema is authored either as typed nodes or in the definition grammar used
on the wire::

    "int"                                             # bare primitive tag
    {"type": "string"}                                # primitive descriptor
    {"type": "object", "properties": {"name": "string"}}
    {"type": "array", "items": {"type": "int"}}

``parse_schema`` turns a definition into nodes once, when metadata is
authored. In strict mode a malformed definition raises
``SchemaDefinitionError``. In lenient mode the malformed parts are kept as
``UnsupportedSchema`` / ``InvalidSchema`` nodes (or an object/array with a
missing part) so validation can report them instead of failing.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, TypeAlias, get_args

from pydantic import BeforeValidator, PlainSerializer

from mcpkit.shared.errors import SchemaDefinitionError

PrimitiveKind: TypeAlias = Literal["string", "int", "bool"]

PRIMITIVE_KINDS: frozenset[str] = frozenset(get_args(PrimitiveKind))


class SchemaNode:
    """Base class of the schema node variants."""

    __slots__ = ()

    def to_definition(self) -> Any:
        """Render the node back into the definition grammar."""
        match self:
            case PrimitiveSchema(kind=kind):
                return {"type": kind}
            case ObjectSchema(properties=properties):
                definition: dict[str, Any] = {"type": "object"}
                if properties is not None:
                    definition["properties"] = {
                        name: node.to_definition() for name, node in properties.items()
                    }
                return definition
            case ArraySchema(items=items):
                definition = {"type": "array"}
                if items is not None:
                    definition["items"] = items.to_definition()
                return definition
            case UnsupportedSchema(type_name=type_name):
                return {"type": type_name}
            case InvalidSchema(definition=definition):
                return definition
        raise TypeError(f"Unknown schema node: {type(self).__name__}")


@dataclass(frozen=True, slots=True)
class PrimitiveSchema(SchemaNode):
    kind: PrimitiveKind

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise SchemaDefinitionError("", f"unsupported primitive type {self.kind!r}")


@dataclass(frozen=True, slots=True)
class ObjectSchema(SchemaNode):
    """A string-keyed mapping. ``properties`` is None only in lenient parses."""

    properties: Mapping[str, SchemaNode] | None = None


@dataclass(frozen=True, slots=True)
class ArraySchema(SchemaNode):
    """A sequence whose every element has the ``items`` shape."""

    items: SchemaNode | None = None


@dataclass(frozen=True, slots=True)
class UnsupportedSchema(SchemaNode):
    type_name: str


@dataclass(frozen=True, slots=True)
class InvalidSchema(SchemaNode):
    definition: Any


SchemaLike: TypeAlias = SchemaNode | str | Mapping[str, Any]


def parse_schema(definition: SchemaLike, strict: bool = False, path: str = "") -> SchemaNode:
    """Parse a schema definition into a node.

    Args:
        definition: A node (returned unchanged), a bare primitive tag, or a
            descriptor mapping with a ``type`` field.
        strict: Raise instead of keeping malformed parts as nodes.
        path: Location of the definition, used in error messages.

    Raises:
        SchemaDefinitionError: In strict mode, if any part of the definition
            is malformed.
    """
    if isinstance(definition, SchemaNode):
        if strict:
            _check_well_formed(definition, path)
        return definition

    if isinstance(definition, str):
        if definition in PRIMITIVE_KINDS:
            return PrimitiveSchema(definition)
        return _degenerate(UnsupportedSchema(definition), strict, path)

    if not isinstance(definition, Mapping) or not isinstance(
        definition.get("type"), str
    ):
        return _degenerate(InvalidSchema(definition), strict, path)

    type_name = definition["type"]
    if type_name in PRIMITIVE_KINDS:
        return PrimitiveSchema(type_name)

    if type_name == "object":
        properties = definition.get("properties")
        if not isinstance(properties, Mapping):
            return _degenerate(ObjectSchema(None), strict, path)
        return ObjectSchema(
            {
                name: parse_schema(child, strict, _join(path, name))
                for name, child in properties.items()
            }
        )

    if type_name == "array":
        if "items" not in definition:
            return _degenerate(ArraySchema(None), strict, path)
        return ArraySchema(parse_schema(definition["items"], strict, f"{path}[]"))

    return _degenerate(UnsupportedSchema(type_name), strict, path)


def parse_parameters(
    definitions: Mapping[str, SchemaLike], strict: bool = False
) -> dict[str, SchemaNode]:
    """Parse a mapping of parameter names to schema definitions."""
    return {
        name: parse_schema(definition, strict, name)
        for name, definition in definitions.items()
    }


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _degenerate(node: SchemaNode, strict: bool, path: str) -> SchemaNode:
    if strict:
        raise SchemaDefinitionError(path, _describe_problem(node))
    return node


def _describe_problem(node: SchemaNode) -> str:
    match node:
        case UnsupportedSchema(type_name=type_name):
            return f"unsupported type {type_name!r}"
        case ObjectSchema():
            return "object schema must define 'properties'"
        case ArraySchema():
            return "array schema must define 'items'"
    return "invalid type definition"


def _check_well_formed(node: SchemaNode, path: str) -> None:
    match node:
        case PrimitiveSchema():
            return
        case ObjectSchema(properties=None) | ArraySchema(items=None):
            raise SchemaDefinitionError(path, _describe_problem(node))
        case ObjectSchema(properties=properties):
            for name, child in properties.items():
                _check_well_formed(child, _join(path, name))
        case ArraySchema(items=items):
            _check_well_formed(items, f"{path}[]")
        case _:
            raise SchemaDefinitionError(path, _describe_problem(node))


def _parse_strict(definitions: Any) -> Any:
    if isinstance(definitions, Mapping):
        return parse_parameters(definitions, strict=True)
    return definitions


def _dump_parameters(parameters: Mapping[str, SchemaNode]) -> dict[str, Any]:
    return {name: node.to_definition() for name, node in parameters.items()}


SchemaParameters = Annotated[
    dict[str, SchemaNode],
    BeforeValidator(_parse_strict),
    PlainSerializer(_dump_parameters),
]
"""Pydantic field type for parameter schemas, parsed strictly when authored."""
