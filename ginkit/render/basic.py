"""Renderers for raw data, streams, redirects and formatted text."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, BinaryIO, Optional
from urllib.parse import urlsplit

from ginkit.render.base import Render, write_content_type

PLAIN_CONTENT_TYPE = "text/plain; charset=utf-8"

_CHUNK_SIZE = 32 * 1024

_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "'": "&#39;"}
)

_GO_VERBS = re.compile(r"%%|%([-+ #0-9.*]*)v")


def _canonical_key(key: str) -> str:
    if not key or any(ch in " \t:" or ord(ch) > 127 for ch in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


@dataclass
class Data(Render):
    """Raw bytes with a custom content type."""

    content_type: str = ""
    data: bytes = b""

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(bytes(self.data))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, self.content_type)


@dataclass
class Reader(Render):
    """A binary stream copied to the response, with extra headers.

    A negative *content_length* means the length is unknown.
    """

    reader: BinaryIO
    content_type: str = ""
    content_length: int = -1
    headers: Optional[dict] = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        headers = dict(self.headers or {})
        if self.content_length >= 0:
            headers["Content-Length"] = str(self.content_length)
        self._write_headers(writer, headers)
        while True:
            chunk = self.reader.read(_CHUNK_SIZE)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            writer.write(chunk)

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, self.content_type)

    @staticmethod
    def _write_headers(writer: Any, headers: dict) -> None:
        for key, value in headers.items():
            name = _canonical_key(key)
            if not writer.headers.get(name):
                writer.headers[name] = value


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path) if path else "."
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _resolve_location(url: str, request_path: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if parts.scheme or parts.netloc:
        return url
    old = request_path or "/"
    if not url or url[0] != "/":
        url = old[: old.rfind("/") + 1] + url
    query = ""
    i = url.find("?")
    if i != -1:
        url, query = url[:i], url[i:]
    trailing = url.endswith("/")
    url = _clean(url)
    if trailing and not url.endswith("/"):
        url += "/"
    return url + query


def _hex_escape_non_ascii(s: str) -> str:
    return "".join(
        ch if ord(ch) < 0x80 else "".join(f"%{b:02X}" for b in ch.encode("utf-8"))
        for ch in s
    )


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


@dataclass
class Redirect(Render):
    """A redirect of *request* to *location* with status *code*.

    The request exposes ``method`` and ``path``.
    """

    code: int
    request: Any
    location: str

    def render(self, writer: Any) -> None:
        code = self.code
        if (code < 300 or code > 308) and code != 201:
            raise ValueError(f"Cannot redirect with status code {code}")
        method = getattr(self.request, "method", "GET")
        url = _resolve_location(self.location, getattr(self.request, "path", ""))
        had_content_type = bool(writer.headers.get("Content-Type"))
        writer.headers["Location"] = _hex_escape_non_ascii(url)
        if not had_content_type and method in ("GET", "HEAD"):
            writer.headers["Content-Type"] = "text/html; charset=utf-8"
        writer.write_header(code)
        if not had_content_type and method == "GET":
            body = f'<a href="{url.translate(_HTML_ESCAPES)}">{_status_text(code)}</a>.\n\n'
            writer.write(body.encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        """A redirect sets no content type of its own."""


def _format(format: str, data: list) -> str:
    def verb(match: re.Match) -> str:
        if match.group(0) == "%%":
            return "%%"
        return "%" + match.group(1) + "s"

    return _GO_VERBS.sub(verb, format) % tuple(data)


@dataclass
class String(Render):
    """Plain text built from a printf-style *format* and its arguments."""

    format: str = ""
    data: list = field(default_factory=list)

    def render(self, writer: Any) -> None:
        write_string(writer, self.format, self.data)

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, PLAIN_CONTENT_TYPE)


def write_string(writer: Any, format: str, data: list) -> None:
    """Write plain text; *format* is used verbatim when *data* is empty."""
    write_content_type(writer, PLAIN_CONTENT_TYPE)
    text = _format(format, list(data)) if data else format
    writer.write(text.encode("utf-8"))