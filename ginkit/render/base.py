"""Common interface of response renderers."""

from __future__ import annotations

import abc
from typing import Any


class Render(abc.ABC):
    """A response body that knows how to write itself and its content type.

    A writer exposes a ``headers`` mapping, ``write(data: bytes)`` and
    ``write_header(code: int)``.
    """

    @abc.abstractmethod
    def render(self, writer: Any) -> None:
        """Write the content type and the body to *writer*."""

    @abc.abstractmethod
    def write_content_type(self, writer: Any) -> None:
        """Write the content type header to *writer*."""


def write_content_type(writer: Any, value: str) -> None:
    """Set the Content-Type header on *writer* unless it is already set."""
    if not writer.headers.get("Content-Type"):
        writer.headers["Content-Type"] = value