"""Schema-driven validation of parameter mappings.

``validate`` walks the expected schema depth first and collects every problem
it finds instead of stopping at the first one. It checks plain, already
decoded Python values (``dict``, ``list``, ``str``, ``int``, ``bool``) and
never raises: a malformed schema is reported as a diagnostic like any other.

Keys present in the parameters but not declared in the schema are ignored.
"""

from collections.abc import Mapping
from typing import Any

from mcpkit.protocol.schema import (
    ArraySchema,
    ObjectSchema,
    PrimitiveSchema,
    SchemaLike,
    SchemaNode,
    UnsupportedSchema,
    parse_schema,
)
from mcpkit.shared.diagnostics import ValidationIssue, ValidationResult


def validate(
    params: Mapping[str, Any],
    expected: Mapping[str, SchemaLike],
    path: str = "",
) -> ValidationResult:
    """Validate ``params`` against the ``expected`` parameter schemas.

    Args:
        params: Parameter values keyed by name.
        expected: Schema node or schema definition for every declared parameter.
        path: Prefix for reported paths, used when validating nested objects.

    Returns:
        ValidationResult: Every issue found, in discovery order.
    """
    result = ValidationResult()

    if not isinstance(expected, Mapping):
        result.add(ValidationIssue.invalid_schema_definition(path))
        return result
    if not _is_object(params):
        result.add(ValidationIssue.type_mismatch(path, "object"))
        return result

    for name, definition in expected.items():
        full_path = f"{path}.{name}" if path else str(name)
        if name not in params:
            result.add(ValidationIssue.missing_parameter(full_path))
            continue
        _check_value(params[name], parse_schema(definition), full_path, result)

    return result


def _check_value(
    value: Any, schema: SchemaNode, path: str, result: ValidationResult
) -> None:
    match schema:
        case PrimitiveSchema(kind=kind):
            if not _matches_primitive(value, kind):
                result.add(ValidationIssue.type_mismatch(path, kind))

        case ObjectSchema(properties=None):
            result.add(ValidationIssue.invalid_schema(path, "have defined properties"))
        case ObjectSchema(properties=properties):
            if not _is_object(value):
                result.add(ValidationIssue.type_mismatch(path, "object"))
            else:
                result.merge(validate(value, properties, path))

        case ArraySchema(items=None):
            result.add(ValidationIssue.invalid_schema(path, "define 'items'"))
        case ArraySchema(items=items):
            if not _is_array(value):
                result.add(ValidationIssue.type_mismatch(path, "array"))
            else:
                item_schema = parse_schema(items)
                for index, element in enumerate(value):
                    _check_value(element, item_schema, f"{path}[{index}]", result)

        case UnsupportedSchema(type_name=type_name):
            result.add(ValidationIssue.unsupported_schema_type(path, type_name))

        case _:
            result.add(ValidationIssue.invalid_schema_definition(path))


def _matches_primitive(value: Any, kind: str) -> bool:
    # Exact type checks: no coercion, and bool is never accepted as int
    if kind == "string":
        return isinstance(value, str)
    if kind == "int":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "bool":
        return isinstance(value, bool)
    return False


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping) and all(isinstance(key, str) for key in value)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))
