"""JSON renderers and their variants."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any

from ginkit.render.base import Render, write_content_type

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
JSONP_CONTENT_TYPE = "application/javascript; charset=utf-8"
JSON_ASCII_CONTENT_TYPE = "application/json"

_HTML_REPLACEMENTS = (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026"))

_JS_REPLACEMENTS = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "=": "\\u003D",
}


def _default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _marshal(obj: Any, *, indent: bool = False, escape_html: bool = True) -> str:
    options: dict = dict(
        default=_default, ensure_ascii=False, allow_nan=False, sort_keys=True
    )
    if indent:
        text = json.dumps(obj, indent=4, separators=(",", ": "), **options)
    else:
        text = json.dumps(obj, separators=(",", ":"), **options)
    text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    if escape_html:
        for char, escaped in _HTML_REPLACEMENTS:
            text = text.replace(char, escaped)
    return text


def _js_escape(s: str) -> str:
    out = []
    for ch in s:
        if ch in _JS_REPLACEMENTS:
            out.append(_JS_REPLACEMENTS[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04X}")
        elif ord(ch) >= 0x80 and not ch.isprintable():
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


def write_json(writer: Any, obj: Any) -> None:
    """Write the JSON content type and *obj* encoded as compact JSON."""
    write_content_type(writer, JSON_CONTENT_TYPE)
    writer.write(_marshal(obj).encode("utf-8"))


@dataclass
class JSON(Render):
    """Compact JSON with HTML characters escaped."""

    data: Any = None

    def render(self, writer: Any) -> None:
        write_json(writer, self.data)

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class IndentedJSON(Render):
    """JSON indented by four spaces."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(_marshal(self.data, indent=True).encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class SecureJSON(Render):
    """JSON whose array output is preceded by *prefix*."""

    prefix: str = ""
    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        text = _marshal(self.data)
        if text.startswith("[") and text.endswith("]"):
            writer.write(self.prefix.encode("utf-8"))
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class JsonpJSON(Render):
    """JSON wrapped in a call to *callback*."""

    callback: str = ""
    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        text = _marshal(self.data)
        if not self.callback:
            writer.write(text.encode("utf-8"))
            return
        writer.write(_js_escape(self.callback).encode("utf-8"))
        writer.write(b"(")
        writer.write(text.encode("utf-8"))
        writer.write(b");")

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSONP_CONTENT_TYPE)


@dataclass
class AsciiJSON(Render):
    """JSON with every non-ASCII character written as a \\u escape."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        text = _marshal(self.data)
        ascii_text = "".join(
            ch if ord(ch) < 128 else f"\\u{ord(ch):04x}" for ch in text
        )
        writer.write(ascii_text.encode("ascii"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSON_ASCII_CONTENT_TYPE)


@dataclass
class PureJSON(Render):
    """JSON with HTML characters left as they are, ending in a newline."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write((_marshal(self.data, escape_html=False) + "\n").encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)