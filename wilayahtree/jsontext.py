"""A small, lenient JSON reader and an indented JSON writer.

The reader keeps string contents exactly as written between the quotes
(escape sequences are not decoded), reads every number as a float and, for
objects with repeated keys, keeps the first occurrence.  The writer emits
strings unescaped and numbers in ``%g`` form.
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ["JsonParseError", "parse", "dumps"]

_WHITESPACE = frozenset(" \t\n\r\v\f")
_NUMBER_CHARS = frozenset("0123456789.-eE")
_MAX_NUMBER_CHARS = 31
_FLOAT_PREFIX = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE]-?\d+)?")
_INDENT = "  "


class JsonParseError(ValueError):
    """Raised when text cannot be read as a JSON value."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(f"{message} at position {pos}")
        self.pos = pos


class _Reader:
    def __init__(self, text: str) -> None:
        # Text ends at the first NUL character, as with a C string.
        self.text = text.split("\0", 1)[0]
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def fail(self, message: str) -> JsonParseError:
        return JsonParseError(message, self.pos)

    def skip_whitespace(self) -> None:
        while self.peek() in _WHITESPACE and self.peek():
            self.pos += 1

    def string(self) -> str:
        if self.peek() != '"':
            raise self.fail("expected '\"'")
        self.pos += 1
        start = self.pos
        while self.peek() and self.peek() != '"':
            if self.peek() == "\\":
                self.pos += 1
                if not self.peek():
                    break
            self.pos += 1
        if not self.peek():
            raise self.fail("unterminated string")
        result = self.text[start:self.pos]
        self.pos += 1
        return result

    def number(self) -> float:
        start = self.pos
        while self.peek() in _NUMBER_CHARS and self.peek():
            self.pos += 1
            if self.pos - start >= _MAX_NUMBER_CHARS:
                break
        match = _FLOAT_PREFIX.match(self.text, start, self.pos)
        return float(match.group()) if match else 0.0

    def array(self) -> list[Any]:
        self.pos += 1
        self.skip_whitespace()
        items: list[Any] = []
        if self.peek() == "]":
            self.pos += 1
            return items
        while self.peek():
            items.append(self.value())
            self.skip_whitespace()
            if self.peek() == "]":
                self.pos += 1
                break
            if self.peek() != ",":
                raise self.fail("expected ',' or ']'")
            self.pos += 1
            self.skip_whitespace()
        return items

    def object(self) -> dict[str, Any]:
        self.pos += 1
        self.skip_whitespace()
        members: dict[str, Any] = {}
        if self.peek() == "}":
            self.pos += 1
            return members
        while self.peek():
            key = self.string()
            self.skip_whitespace()
            if self.peek() != ":":
                raise self.fail("expected ':'")
            self.pos += 1
            self.skip_whitespace()
            value = self.value()
            members.setdefault(key, value)
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                break
            if self.peek() != ",":
                raise self.fail("expected ',' or '}'")
            self.pos += 1
            self.skip_whitespace()
        return members

    def value(self) -> Any:
        self.skip_whitespace()
        c = self.peek()
        if c == "{":
            return self.object()
        if c == "[":
            return self.array()
        if c == '"':
            return self.string()
        if c and (c.isdigit() and c.isascii() or c == "-"):
            return self.number()
        for literal, result in (("true", True), ("false", False), ("null", None)):
            if self.text.startswith(literal, self.pos):
                self.pos += len(literal)
                return result
        raise self.fail("unexpected input")


def parse(text: str) -> Any:
    """Read one JSON value from ``text``; only whitespace may follow it."""
    reader = _Reader(text)
    result = reader.value()
    reader.skip_whitespace()
    if reader.peek():
        raise reader.fail("unexpected trailing data")
    return result


def _render(value: Any, depth: int) -> str:
    pad = _INDENT * depth
    if isinstance(value, dict):
        members = []
        for key, child in value.items():
            if not isinstance(key, str):
                raise TypeError(f"object keys must be str, not {type(key).__name__}")
            members.append(f'{_INDENT * (depth + 1)}"{key}": {_render(child, 0)}')
        body = ",\n".join(members) + "\n" if members else ""
        return f"{pad}{{\n{body}{pad}}}"
    if isinstance(value, (list, tuple)):
        items = [_render(child, depth + 1) for child in value]
        body = ",\n".join(items) + "\n" if items else ""
        return f"{pad}[\n{body}{pad}]"
    if isinstance(value, str):
        return f'{pad}"{value}"'
    if value is True:
        return f"{pad}true"
    if value is False:
        return f"{pad}false"
    if value is None:
        return f"{pad}null"
    if isinstance(value, (int, float)):
        return pad + "%g" % float(value)
    raise TypeError(f"cannot write {type(value).__name__} as JSON")


def dumps(value: Any) -> str:
    """Write ``value`` as indented JSON text."""
    return _render(value, 0)