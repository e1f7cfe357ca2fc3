"""JSON codec for dynamic values.

Encoding writes compact UTF-8 JSON. Decoding resolves each parsed value
against the variants in a fixed order, first match wins:

    null, bool, int, float, string, array, object

The order is observable. A number whose exact value is integral and fits in
64 bits becomes ``Int`` however it is spelled (``2``, ``2.0``, ``1e3``);
every other finite number becomes ``Float``. Booleans never fall through to
``Int``.
"""

import json
import math
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from mcpkit.protocol.dynamic import (
    INT64_MAX,
    INT64_MIN,
    Array,
    Bool,
    DynamicValue,
    Float,
    Int,
    Null,
    Object,
    String,
)
from mcpkit.shared.errors import DecodingError, EncodingError


def encode(value: DynamicValue | Any) -> bytes:
    """Encode a dynamic value as a JSON byte string.

    Plain Python data is coerced with ``DynamicValue.from_native`` first.

    Raises:
        UnsupportedValueError: If the value cannot be coerced into a dynamic value.
        EncodingError: If the value holds a NaN or infinite float.
    """
    if not isinstance(value, DynamicValue):
        value = DynamicValue.from_native(value)
    native = value.to_native()
    try:
        text = json.dumps(
            native, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except ValueError as e:
        raise EncodingError(f"Failed to encode value as JSON: {e}") from e
    return text.encode("utf-8")


def decode(data: bytes | str) -> DynamicValue:
    """Decode a single JSON value.

    Raises:
        DecodingError: On malformed or truncated input, non-standard tokens
            such as ``NaN``, numbers that overflow a double, or a parsed value
            that matches no variant.
    """
    try:
        parsed = json.loads(
            data,
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
        return _resolve(parsed)
    except DecodingError:
        raise
    except RecursionError as e:
        raise DecodingError("JSON value is nested too deeply") from e
    except (ValueError, TypeError) as e:
        raise DecodingError(f"Malformed JSON: {e}") from e


def _reject_constant(token: str) -> Any:
    raise DecodingError(f"Non-standard JSON token: {token}")


# ================================
# Ordered resolution
# ================================


def _as_null(raw: Any) -> DynamicValue | None:
    return Null() if raw is None else None


def _as_bool(raw: Any) -> DynamicValue | None:
    return Bool(raw) if isinstance(raw, bool) else None


def _as_int(raw: Any) -> DynamicValue | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, Decimal) and raw.is_finite():
        if raw.is_zero():
            number = 0
        # Anything above 19 digits is out of range; skip the exact conversion
        elif raw.adjusted() > 18 or raw != raw.to_integral_value():
            return None
        else:
            number = int(raw)
    else:
        return None
    if INT64_MIN <= number <= INT64_MAX:
        return Int(number)
    return None


def _as_float(raw: Any) -> DynamicValue | None:
    if isinstance(raw, bool) or not isinstance(raw, (int, Decimal)):
        return None
    try:
        number = float(raw)
    except OverflowError:
        return None
    return Float(number) if math.isfinite(number) else None


def _as_string(raw: Any) -> DynamicValue | None:
    return String(raw) if isinstance(raw, str) else None


def _as_array(raw: Any) -> DynamicValue | None:
    if not isinstance(raw, list):
        return None
    return Array(tuple(_resolve(item) for item in raw))


def _as_object(raw: Any) -> DynamicValue | None:
    if not isinstance(raw, dict):
        return None
    return Object({key: _resolve(item) for key, item in raw.items()})


_RESOLUTION_ORDER: tuple[Callable[[Any], DynamicValue | None], ...] = (
    _as_null,
    _as_bool,
    _as_int,
    _as_float,
    _as_string,
    _as_array,
    _as_object,
)


def _resolve(raw: Any) -> DynamicValue:
    for attempt in _RESOLUTION_ORDER:
        value = attempt(raw)
        if value is not None:
            return value
    raise DecodingError(f"JSON value cannot be decoded: {raw!r}")

