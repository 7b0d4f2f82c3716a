"""JSON value model: lenient codec and tolerant typed accessors."""

from tuteliq.infrastructure.jsonvalue.codec import (
    JsonParseError,
    JsonValue,
    parse,
    parse_strict,
    serialize,
)
from tuteliq.infrastructure.jsonvalue.decoder import (
    as_object,
    get_bool,
    get_float,
    get_int,
    get_int_dict,
    get_object,
    get_object_list,
    get_optional_bool,
    get_optional_float,
    get_optional_int,
    get_optional_str,
    get_str,
    get_str_list,
)

__all__ = [
    "JsonParseError",
    "JsonValue",
    "as_object",
    "get_bool",
    "get_float",
    "get_int",
    "get_int_dict",
    "get_object",
    "get_object_list",
    "get_optional_bool",
    "get_optional_float",
    "get_optional_int",
    "get_optional_str",
    "get_str",
    "get_str_list",
    "parse",
    "parse_strict",
    "serialize",
]
