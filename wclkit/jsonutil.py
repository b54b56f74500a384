"""JSON helpers: unescaping, pretty printing and splitting arrays into elements."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal

from wclkit.stack import Stack

_WIDTH = 80
_INDENT = "  "
_WS = " \t\r\n"
_SCALAR_END = _WS + ",]}:"


def unescape(content: str) -> str:
    """Turn the \\u003c, \\u003e and \\u0026 escapes back into <, > and &."""
    return (
        content.replace("\\u003c", "<")
        .replace("\\u003e", ">")
        .replace("\\u0026", "&")
    )


# --- pretty printing -------------------------------------------------------


class _Parser:
    """Reads JSON into a tree that keeps strings and numbers as written."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WS:
            self.pos += 1

    def peek(self) -> str:
        if self.pos >= len(self.text):
            raise ValueError("unexpected end of JSON input")
        return self.text[self.pos]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise ValueError(f"expected {char!r} at offset {self.pos}")
        self.pos += 1

    def value(self):
        self.skip_ws()
        char = self.peek()
        if char == "{":
            return self.obj()
        if char == "[":
            return self.arr()
        if char == '"':
            return ("raw", self.string())
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _SCALAR_END:
            self.pos += 1
        if start == self.pos:
            raise ValueError(f"unexpected {char!r} at offset {start}")
        return ("raw", self.text[start:self.pos])

    def string(self) -> str:
        start = self.pos
        self.pos += 1
        while True:
            char = self.peek()
            self.pos += 1
            if char == "\\":
                self.peek()
                self.pos += 1
            elif char == '"':
                return self.text[start:self.pos]

    def obj(self):
        self.pos += 1
        members = []
        self.skip_ws()
        if self.peek() == "}":
            self.pos += 1
            return ("obj", members)
        while True:
            self.skip_ws()
            if self.peek() != '"':
                raise ValueError(f"expected object key at offset {self.pos}")
            key = self.string()
            self.skip_ws()
            self.expect(":")
            members.append((key, self.value()))
            self.skip_ws()
            if self.peek() == ",":
                self.pos += 1
                continue
            self.expect("}")
            return ("obj", members)

    def arr(self):
        self.pos += 1
        items = []
        self.skip_ws()
        if self.peek() == "]":
            self.pos += 1
            return ("arr", items)
        while True:
            items.append(self.value())
            self.skip_ws()
            if self.peek() == ",":
                self.pos += 1
                continue
            self.expect("]")
            return ("arr", items)

    def document(self):
        node = self.value()
        self.skip_ws()
        if self.pos != len(self.text):
            raise ValueError(f"unexpected data at offset {self.pos}")
        return node


def _width(s: str) -> int:
    return len(s.encode("utf-8"))


def _single_line(node) -> str | None:
    kind, payload = node
    if kind == "raw":
        return payload
    if kind == "obj":
        return None
    parts = []
    for item in payload:
        rendered = _single_line(item)
        if rendered is None:
            return None
        parts.append(rendered)
    return "[" + ", ".join(parts) + "]"


def _render(node, col: int, depth: int) -> str:
    kind, payload = node
    if kind == "raw":
        return payload
    closing_indent = _INDENT * depth
    inner = _INDENT * (depth + 1)
    if kind == "arr":
        if not payload:
            return "[]"
        room = _WIDTH - col
        if room > 3:
            line = _single_line(node)
            if line is not None and _width(line) <= room:
                return line
        parts = [inner + _render(item, _width(inner), depth + 1) for item in payload]
        return "[\n" + ",\n".join(parts) + "\n" + closing_indent + "]"
    if not payload:
        return "{}"
    parts = []
    for key, item in payload:
        head = f"{inner}{key}: "
        parts.append(head + _render(item, _width(head), depth + 1))
    return "{\n" + ",\n".join(parts) + "\n" + closing_indent + "}"


def indent_string(s: str) -> str:
    """Pretty-print JSON with two-space indentation.

    Arrays of plain values that fit in 80 columns stay on one line.
    Raises ValueError on malformed input.
    """
    return _render(_Parser(s).document(), 0, 0) + "\n"


def indent(data: bytes) -> bytes:
    """Pretty-print JSON bytes; see indent_string."""
    return indent_string(data.decode("utf-8", errors="replace")).encode("utf-8")


# --- splitting -------------------------------------------------------------

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def _encode_string(s: str) -> str:
    out = ['"']
    for char in s:
        code = ord(char)
        if char in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[char])
        elif code < 0x20 or char in "<>&\u2028\u2029":
            out.append(f"\\u{code:04x}")
        elif 0xD800 <= code <= 0xDFFF:
            out.append("\ufffd")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


def _format_number(value: float) -> str:
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        text = repr(value)
        return re.sub(r"e-0(\d)$", r"e-\1", text)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _marshal(value) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, str):
        return _encode_string(value)
    if isinstance(value, list):
        return "[" + ",".join(_marshal(item) for item in value) + "]"
    return "{" + ",".join(
        _encode_string(key) + ":" + _marshal(value[key]) for key in sorted(value)
    ) + "}"


def _number(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number {text} is out of range")
    return value


def _reject_constant(name: str):
    raise ValueError(f"invalid character in literal {name}")


def split(src: bytes | str) -> list[bytes]:
    """Split a JSON array into its elements, each re-encoded compactly.

    Object keys come out sorted, numbers are normalised and <, > and &
    are escaped. Raises ValueError if src is not a JSON array.
    """
    text = src.decode("utf-8", errors="replace") if isinstance(src, bytes) else src
    try:
        value = json.loads(
            text,
            parse_int=_number,
            parse_float=_number,
            parse_constant=_reject_constant,
        )
    except ValueError as exc:
        raise ValueError(f"unmarshal to list error: {exc}") from exc
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(
            f"unmarshal to list error: cannot unmarshal {type(value).__name__} into a list"
        )
    return [_marshal(item).encode("utf-8") for item in value]


def split_string(src: str) -> list[str]:
    """Split a JSON array string into its elements; see split."""
    return [item.decode("utf-8") for item in split(src)]


def format_single_line(s: str) -> str:
    """Rewrite a JSON array with one element per line.

    Input that is not a JSON array, or is empty, is returned unchanged.
    """
    try:
        items = split_string(s)
    except ValueError:
        return s
    if not items:
        return s
    return "[\n" + ",\n".join("  " + item for item in items) + "\n]"


def split_objects(s: str) -> list[str]:
    """Split a one-line array of JSON objects by tracking brace depth.

    Elements are returned as written. Braces inside strings are not
    recognised. Raises ValueError if s is not such an array and
    IndexError on an unbalanced closing brace.
    """
    if not (len(s) >= 4 and s.startswith("[{") and s.endswith("}]") and "\n" not in s):
        raise ValueError("not JSON array of object")
    body = s[1:-1]
    objects: list[str] = []
    current: list[str] = []
    braces = Stack()
    for char in body:
        if char == "," and braces.is_empty():
            objects.append("".join(current))
            current = []
            continue
        current.append(char)
        if char == "{":
            braces.push("{")
        elif char == "}":
            braces.pop()
    objects.append("".join(current))
    return objects