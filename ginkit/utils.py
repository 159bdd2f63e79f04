"""Small helpers shared by the framework."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any, Callable
from xml.sax.saxutils import escape


class H(dict):
    """A plain string-keyed mapping for response payloads."""

    def to_xml(self) -> str:
        """Encode the mapping as ``<map><key>value</key>...</map>``.

        Raises ValueError if a key is not a usable element name.
        """
        parts = ["<map>"]
        for key, value in self.items():
            if not isinstance(key, str) or not key or any(
                ch.isspace() or ch in "<>&/\"'=" for ch in key
            ):
                raise ValueError(f"xml: invalid element name {key!r}")
            parts.append(f"<{key}>{escape(str(value))}</{key}>")
        parts.append("</map>")
        return "".join(parts)


def filter_flags(content: str) -> str:
    """Return *content* up to the first space or semicolon."""
    for i, char in enumerate(content):
        if char in " ;":
            return content[:i]
    return content


def choose_data(custom: Any, wildcard: Any) -> Any:
    """Return *custom* if set, else *wildcard*; raise if neither is set."""
    if custom is not None:
        return custom
    if wildcard is not None:
        return wildcard
    raise ValueError("negotiation config is invalid")


def parse_accept(accept_header: str) -> list[str]:
    """Split an Accept header into media types, dropping parameters."""
    out = []
    for part in accept_header.split(","):
        i = part.find(";")
        if i > 0:
            part = part[:i]
        part = part.strip()
        if part:
            out.append(part)
    return out


def last_char(s: str) -> str:
    """Return the last character of *s*; raise on an empty string."""
    if not s:
        raise ValueError("The length of the string can't be 0")
    return s[-1]


def name_of_function(f: Callable[..., Any]) -> str:
    """Return the module-qualified name of *f*."""
    return f"{f.__module__}.{f.__qualname__}"


def _clean(path: str) -> str:
    """Lexically clean a slash-separated path, without a trailing slash."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    body = "/".join(parts)
    if rooted:
        return "/" + body
    return body or "."


def _join(*elements: str) -> str:
    joined = "/".join(e for e in elements if e)
    return _clean(joined) if joined else ""


def join_paths(absolute_path: str, relative_path: str) -> str:
    """Join two URL paths, keeping a trailing slash from *relative_path*."""
    if relative_path == "":
        return absolute_path
    final_path = _join(absolute_path, relative_path)
    if last_char(relative_path) == "/" and last_char(final_path) != "/":
        return final_path + "/"
    return final_path


def resolve_address(addr: Sequence[str]) -> str:
    """Return the listen address from *addr* or the PORT environment."""
    if len(addr) == 0:
        port = os.environ.get("PORT", "")
        if port:
            return ":" + port
        return ":8080"
    if len(addr) == 1:
        return addr[0]
    raise ValueError("too many parameters")


def is_ascii(s: str) -> bool:
    """Return True if every character of *s* is ASCII."""
    return s.isascii()