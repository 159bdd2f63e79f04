"""Response writer that tracks the status code and body size."""

from __future__ import annotations

from typing import Any, Optional

from ginkit import mode as _mode

NO_WRITTEN = -1
DEFAULT_STATUS = 200


def _debug_print(message: str) -> None:
    if _mode.mode() == _mode.DEBUG_MODE:
        _mode.DEFAULT_WRITER.write(f"[GIN-debug] {message}\n")


class ResponseWriter:
    """Wraps a writer, deferring the status line until the body is written.

    The wrapped writer exposes ``headers``, ``write_header(code)`` and
    ``write(data)``; ``flush()`` is optional.
    """

    def __init__(self, writer: Optional[Any] = None) -> None:
        self.writer: Any = None
        self._size = NO_WRITTEN
        self._status = DEFAULT_STATUS
        if writer is not None:
            self.reset(writer)

    def reset(self, writer: Any) -> None:
        """Start over with *writer* as the wrapped writer."""
        self.writer = writer
        self._size = NO_WRITTEN
        self._status = DEFAULT_STATUS

    @property
    def headers(self) -> Any:
        """The wrapped writer's header mapping."""
        return self.writer.headers

    @property
    def status(self) -> int:
        """The response status code."""
        return self._status

    @property
    def size(self) -> int:
        """Bytes written to the body, or -1 if the header is not written."""
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        self._size = value

    @property
    def written(self) -> bool:
        """True once the status line has been sent."""
        return self._size != NO_WRITTEN

    def write_header(self, code: int) -> None:
        """Record *code* as the status to send; non-positive codes are ignored."""
        if code > 0 and self._status != code:
            if self.written:
                _debug_print(
                    "[WARNING] Headers were already written. "
                    f"Wanted to override status code {self._status} with {code}"
                )
            self._status = code

    def write_header_now(self) -> None:
        """Send the status line unless it has been sent already."""
        if not self.written:
            self._size = 0
            self.writer.write_header(self._status)

    def write(self, data: bytes) -> int:
        """Write *data* to the body and return the number of bytes written."""
        self.write_header_now()
        result = self.writer.write(bytes(data))
        n = result if isinstance(result, int) else len(data)
        self._size += n
        return n

    def write_string(self, s: str) -> int:
        """Write *s* encoded as UTF-8 and return the number of bytes written."""
        return self.write(s.encode("utf-8"))

    def flush(self) -> None:
        """Send the status line and flush the wrapped writer."""
        self.write_header_now()
        flush = getattr(self.writer, "flush", None)
        if not callable(flush):
            raise TypeError(
                f"{type(self.writer).__name__} does not support flushing"
            )
        flush()