"""Lenient JSON parser and compact serializer.

Values are plain Python objects: ``None``, ``bool``, ``int``, ``float``,
``str``, ``list`` and ``dict``. Dicts keep insertion order, which the
serializer preserves on output.

``parse`` never raises on malformed input. A structural anomaly inside an
object or array turns that container into ``None`` and parsing resumes after
its closing bracket, so the rest of the document survives. An anomaly outside
any container gives ``None`` for the whole document. Use ``parse_strict`` to
get a ``JsonParseError`` with the reason and position instead.
"""

import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeAlias

import structlog

logger = structlog.get_logger()

JsonValue: TypeAlias = (
    None | bool | int | float | str | list["JsonValue"] | dict[str, "JsonValue"]
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_WORD_BREAK = frozenset('{}[],:"')
_OPENERS = frozenset("{[")
_CLOSERS = frozenset("}]")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_SERIALIZE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class JsonParseError(ValueError):
    """Raised by ``parse_strict`` when the input is structurally malformed."""

    def __init__(self, reason: str, position: int) -> None:
        self.reason = reason
        self.position = position
        super().__init__(f"{reason} at position {position}")


class _Token(Enum):
    NONE = "none"
    CURLY_OPEN = "{"
    CURLY_CLOSE = "}"
    SQUARED_OPEN = "["
    SQUARED_CLOSE = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    WORD = "word"


class _Parser:
    """Recursive-descent parser with single-character lookahead.

    In lenient mode each object and array absorbs the anomalies raised while
    reading its own body: the container becomes ``None`` and the cursor moves
    past its matching closing bracket.
    """

    def __init__(self, text: str, *, strict: bool = False) -> None:
        self._text = text
        self._pos = 0
        self._strict = strict

    def _fail(self, reason: str) -> JsonParseError:
        return JsonParseError(reason, self._pos)

    def _peek(self) -> str | None:
        if self._pos >= len(self._text):
            return None
        return self._text[self._pos]

    def _read(self) -> str | None:
        char = self._peek()
        if char is not None:
            self._pos += 1
        return char

    def _eat_whitespace(self) -> None:
        while (char := self._peek()) is not None and char.isspace():
            self._pos += 1

    def _next_word(self) -> str:
        start = self._pos
        while (char := self._peek()) is not None:
            if char.isspace() or char in _WORD_BREAK:
                break
            self._pos += 1
        return self._text[start : self._pos]

    def _next_token(self) -> _Token:
        """Classify the next token.

        Closing brackets, commas and barewords are consumed here. Openers,
        string quotes, colons and numbers are left for the caller to read.
        """
        self._eat_whitespace()
        char = self._peek()
        if char is None:
            return _Token.NONE

        if char == "{":
            return _Token.CURLY_OPEN
        if char == "[":
            return _Token.SQUARED_OPEN
        if char == '"':
            return _Token.STRING
        if char == ":":
            return _Token.COLON
        if char in "}],":
            self._pos += 1
            return {
                "}": _Token.CURLY_CLOSE,
                "]": _Token.SQUARED_CLOSE,
                ",": _Token.COMMA,
            }[char]
        if char == "-" or "0" <= char <= "9":
            return _Token.NUMBER

        word = self._next_word()
        if word == "true":
            return _Token.TRUE
        if word == "false":
            return _Token.FALSE
        if word == "null":
            return _Token.NULL
        return _Token.WORD

    def parse(self) -> JsonValue:
        return self._parse_by_token(self._next_token())

    def _parse_by_token(self, token: _Token) -> JsonValue:
        if token is _Token.STRING:
            return self._parse_string()
        if token is _Token.NUMBER:
            return self._parse_number()
        if token is _Token.CURLY_OPEN:
            return self._parse_container(self._read_object)
        if token is _Token.SQUARED_OPEN:
            return self._parse_container(self._read_array)
        if token is _Token.TRUE:
            return True
        if token is _Token.FALSE:
            return False
        if token is _Token.NULL:
            return None
        if token is _Token.NONE:
            raise self._fail("unexpected end of input")
        if token is _Token.WORD:
            raise self._fail("unknown bareword")
        raise self._fail(f"unexpected '{token.value}'")

    def _parse_container(self, read: Callable[[], JsonValue]) -> JsonValue:
        start = self._pos
        try:
            return read()
        except JsonParseError as e:
            if self._strict:
                raise
            logger.debug(
                "json_container_dropped",
                reason=e.reason,
                position=e.position,
                container_start=start,
            )
            self._skip_container(start)
            return None

    def _skip_container(self, start: int) -> None:
        """Move past the bracket matching the opener at ``start``.

        String literals are skipped so brackets inside them do not count.
        Without a match the cursor ends at the end of input.
        """
        depth = 0
        pos = start
        text = self._text
        while pos < len(text):
            char = text[pos]
            pos += 1
            if char == '"':
                while pos < len(text) and text[pos] != '"':
                    pos += 2 if text[pos] == "\\" else 1
                pos += 1
            elif char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
                if depth == 0:
                    break
        self._pos = min(pos, len(text))

    def _read_object(self) -> dict[str, JsonValue]:
        table: dict[str, JsonValue] = {}
        self._read()  # {

        while True:
            token = self._next_token()
            if token is _Token.NONE:
                raise self._fail("unterminated object")
            if token is _Token.CURLY_CLOSE:
                return table
            if token is _Token.COMMA:
                continue
            if token is not _Token.STRING:
                raise self._fail("expected string key")

            name = self._parse_string()
            if self._next_token() is not _Token.COLON:
                raise self._fail("expected ':' after key")
            self._read()  # :

            table[name] = self.parse()

    def _read_array(self) -> list[JsonValue]:
        array: list[JsonValue] = []
        self._read()  # [

        while True:
            token = self._next_token()
            if token is _Token.NONE:
                raise self._fail("unterminated array")
            if token is _Token.SQUARED_CLOSE:
                return array
            if token is _Token.COMMA:
                continue
            array.append(self._parse_by_token(token))

    def _parse_string(self) -> str:
        chars: list[str] = []
        self._read()  # "

        while True:
            char = self._read()
            if char is None:
                raise self._fail("unterminated string")
            if char == '"':
                return "".join(chars)
            if char != "\\":
                chars.append(char)
                continue

            escape = self._read()
            if escape is None:
                raise self._fail("unterminated string")
            if escape == "u":
                chars.append(self._parse_unicode_escape())
            elif escape in _ESCAPES:
                chars.append(_ESCAPES[escape])
            # unknown escapes are dropped

    def _read_hex4(self) -> int:
        digits = self._text[self._pos : self._pos + 4]
        if len(digits) < 4:
            raise self._fail("unterminated string")
        if not all(c in _HEX_DIGITS for c in digits):
            raise self._fail("invalid \\u escape")
        self._pos += 4
        return int(digits, 16)

    def _parse_unicode_escape(self) -> str:
        unit = self._read_hex4()
        if 0xD800 <= unit <= 0xDBFF and self._text.startswith("\\u", self._pos):
            saved = self._pos
            self._pos += 2
            low = self._read_hex4()
            if 0xDC00 <= low <= 0xDFFF:
                return chr(0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00))
            self._pos = saved
        return chr(unit)

    def _parse_number(self) -> int | float:
        word = self._next_word()

        if "." not in word:
            if _INT_RE.fullmatch(word):
                value = int(word)
                if INT64_MIN <= value <= INT64_MAX:
                    return value
            return 0

        if _FLOAT_RE.fullmatch(word):
            return float(word)
        return 0


def parse_strict(text: str) -> JsonValue:
    """Parse JSON text, raising on structural errors.

    Args:
        text: The JSON document.

    Returns:
        The parsed value.

    Raises:
        JsonParseError: If the document is malformed anywhere.
    """
    return _Parser(text, strict=True).parse()


def parse(text: str | None) -> JsonValue:
    """Parse JSON text leniently.

    Returns ``None`` for empty input, for a malformed top-level value and for
    a malformed top-level container. A malformed nested container becomes
    ``None`` in place. A ``None`` result cannot be told apart from a literal
    ``null``.

    Args:
        text: The JSON document, or None.

    Returns:
        The parsed value, or None if it could not be parsed.
    """
    if not text:
        return None
    try:
        return _Parser(text).parse()
    except JsonParseError as e:
        logger.debug("json_parse_failed", reason=e.reason, position=e.position)
        return None


def serialize(value: Any) -> str:
    """Serialize a value to compact JSON text.

    Args:
        value: A JSON value. Other objects are written as the quoted
            ``str()`` of the object (an Enum writes its value).

    Returns:
        JSON text with no inserted whitespace.
    """
    parts: list[str] = []
    _serialize_value(value, parts)
    return "".join(parts)


def _serialize_value(value: Any, parts: list[str]) -> None:
    if value is None:
        parts.append("null")
    elif isinstance(value, bool):
        parts.append("true" if value else "false")
    elif isinstance(value, Enum):
        _serialize_value(value.value, parts)
    elif isinstance(value, str):
        _serialize_string(value, parts)
    elif isinstance(value, int):
        parts.append(str(value))
    elif isinstance(value, float):
        parts.append(_format_float(value))
    elif isinstance(value, dict):
        parts.append("{")
        for index, (key, item) in enumerate(value.items()):
            if index:
                parts.append(",")
            _serialize_string(str(key), parts)
            parts.append(":")
            _serialize_value(item, parts)
        parts.append("}")
    elif isinstance(value, (list, tuple)):
        parts.append("[")
        for index, item in enumerate(value):
            if index:
                parts.append(",")
            _serialize_value(item, parts)
        parts.append("]")
    else:
        _serialize_string(str(value), parts)


def _serialize_string(text: str, parts: list[str]) -> None:
    parts.append('"')
    for char in text:
        escaped = _SERIALIZE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char < " ":
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    parts.append('"')


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return "null"
    text = repr(value)
    # the parser reads dot-less numbers as integers
    if "." not in text:
        mantissa, sep, exponent = text.partition("e")
        text = f"{mantissa}.0{sep}{exponent}"
    return text
