"""Request log formatting and console colour settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

GREEN = "\033[97;42m"
WHITE = "\033[90;47m"
YELLOW = "\033[90;43m"
RED = "\033[97;41m"
BLUE = "\033[97;44m"
MAGENTA = "\033[97;45m"
CYAN = "\033[97;46m"
RESET = "\033[0m"

_METHOD_COLORS = {
    "GET": BLUE,
    "POST": CYAN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": GREEN,
    "HEAD": MAGENTA,
    "OPTIONS": WHITE,
}

_TIME_FORMAT = "%Y/%m/%d - %H:%M:%S"

_NS_PER_SECOND = 10**9


class ColorMode(enum.Enum):
    """Whether log lines carry ANSI colours."""

    AUTO = 0
    DISABLE = 1
    FORCE = 2


_color_mode = ColorMode.AUTO


def console_color_mode() -> ColorMode:
    """Return the current console colour mode."""
    return _color_mode


def set_console_color_mode(mode: ColorMode) -> None:
    """Set the console colour mode."""
    global _color_mode
    _color_mode = ColorMode(mode)


def disable_console_color() -> None:
    """Never colour log output."""
    set_console_color_mode(ColorMode.DISABLE)


def force_console_color() -> None:
    """Always colour log output."""
    set_console_color_mode(ColorMode.FORCE)


@dataclass
class LogFormatterParams:
    """Everything a formatter is handed when a request is logged."""

    request: Any = None
    time_stamp: datetime = field(default_factory=datetime.now)
    status_code: int = 0
    latency: timedelta = timedelta(0)
    client_ip: str = ""
    method: str = ""
    path: str = ""
    error_message: str = ""
    is_term: bool = False
    body_size: int = 0
    keys: Optional[dict] = None

    def status_code_color(self) -> str:
        """Return the ANSI colour for the status code."""
        code = self.status_code
        if 200 <= code < 300:
            return GREEN
        if 300 <= code < 400:
            return WHITE
        if 400 <= code < 500:
            return YELLOW
        return RED

    def method_color(self) -> str:
        """Return the ANSI colour for the HTTP method."""
        return _METHOD_COLORS.get(self.method, RESET)

    def reset_color(self) -> str:
        """Return the escape sequence that resets all attributes."""
        return RESET

    def is_output_color(self) -> bool:
        """Return True if colours should be written to the log."""
        return _color_mode is ColorMode.FORCE or (
            _color_mode is ColorMode.AUTO and self.is_term
        )


def _to_nanoseconds(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * _NS_PER_SECOND + delta.microseconds * 1000


def _fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    digits = str(frac).rjust(precision, "0").rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def _format_duration(ns: int) -> str:
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < _NS_PER_SECOND:
        if u < 1000:
            text = f"{u}ns"
        elif u < 1_000_000:
            text = _fraction(u, 3) + "µs"
        else:
            text = _fraction(u, 6) + "ms"
        return sign + text
    seconds, frac = divmod(u, _NS_PER_SECOND)
    text = _fraction(seconds % 60 * _NS_PER_SECOND + frac, 9) + "s"
    minutes = seconds // 60
    if minutes > 0:
        text = f"{minutes % 60}m" + text
        hours = minutes // 60
        if hours > 0:
            text = f"{hours}h" + text
    return sign + text


_QUOTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(s: str) -> str:
    out = []
    for ch in s:
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) <= 0xFFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    return '"' + "".join(out) + '"'


def default_log_formatter(params: LogFormatterParams) -> str:
    """Format one request log line in the default layout."""
    status_color = method_color = reset_color = ""
    if params.is_output_color():
        status_color = params.status_code_color()
        method_color = params.method_color()
        reset_color = params.reset_color()

    latency = _to_nanoseconds(params.latency)
    if latency > 60 * _NS_PER_SECOND:
        latency -= latency % _NS_PER_SECOND

    return (
        f"[GIN] {params.time_stamp.strftime(_TIME_FORMAT)} "
        f"|{status_color} {params.status_code:3d} {reset_color}"
        f"| {_format_duration(latency):>13} "
        f"| {params.client_ip:>15} "
        f"|{method_color} {params.method:<7} {reset_color} "
        f"{_quote(params.path)}\n{params.error_message}"
    )