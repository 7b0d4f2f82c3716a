"""Typed accessors over parsed JSON objects.

Each accessor reads one field and coerces it to the requested type, falling
back to an explicit default when the field is missing or has the wrong shape.
Response decoding can then be written as straight-line field extraction.
"""

import math
import re
from typing import Any

from tuteliq.infrastructure.jsonvalue.codec import JsonValue, serialize

_INT_TEXT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def as_object(value: JsonValue) -> dict[str, JsonValue]:
    """Return the value if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return serialize(value)


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    text = _stringify(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def _coerce_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if _FLOAT_TEXT_RE.fullmatch(text):
            return float(text)
    return None


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_TEXT_RE.fullmatch(value.strip()):
        return int(value.strip())
    as_float = _coerce_float(value)
    if as_float is None or not math.isfinite(as_float):
        return None
    return int(as_float)


def get_str(data: dict[str, JsonValue], key: str) -> str:
    """Read a string field; non-strings are rendered as JSON text.

    Missing keys and JSON null give an empty string.
    """
    value = data.get(key)
    if value is None:
        return ""
    return _stringify(value)


def get_optional_str(data: dict[str, JsonValue], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return _stringify(value)


def get_bool(data: dict[str, JsonValue], key: str) -> bool:
    """Read a boolean field, accepting "true"/"false" text. Defaults to False."""
    value = data.get(key)
    if value is None:
        return False
    return bool(_coerce_bool(value))


def get_optional_bool(data: dict[str, JsonValue], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    return _coerce_bool(value)


def get_int(data: dict[str, JsonValue], key: str) -> int:
    """Read an integer field. Floats are truncated; unparsable values give 0."""
    value = data.get(key)
    if value is None:
        return 0
    coerced = _coerce_int(value)
    return coerced if coerced is not None else 0


def get_optional_int(data: dict[str, JsonValue], key: str) -> int | None:
    """Read a nullable integer field.

    Returns None when the key is missing, null, or unparsable. A present
    ``0`` stays ``0``.
    """
    value = data.get(key)
    if value is None:
        return None
    return _coerce_int(value)


def get_float(data: dict[str, JsonValue], key: str) -> float:
    """Read a numeric field as float. Missing or unparsable values give 0.0."""
    value = data.get(key)
    if value is None:
        return 0.0
    coerced = _coerce_float(value)
    return coerced if coerced is not None else 0.0


def get_optional_float(data: dict[str, JsonValue], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    return _coerce_float(value)


def get_str_list(data: dict[str, JsonValue], key: str) -> list[str]:
    """Read a list field, stringifying each element. Non-lists give []."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return ["" if item is None else _stringify(item) for item in value]


def get_object(data: dict[str, JsonValue], key: str) -> dict[str, JsonValue] | None:
    """Read a nested object for further decoding, or None."""
    value = data.get(key)
    return value if isinstance(value, dict) else None


def get_object_list(
    data: dict[str, JsonValue], key: str
) -> list[dict[str, JsonValue]]:
    """Read a list of objects, skipping elements that are not objects."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def get_int_dict(data: dict[str, JsonValue], key: str) -> dict[str, int]:
    """Read an object of integer counters, dropping entries that don't coerce."""
    value = data.get(key)
    if not isinstance(value, dict):
        return {}
    result: dict[str, int] = {}
    for name, item in value.items():
        coerced = _coerce_int(item)
        if coerced is not None:
            result[name] = coerced
    return result
