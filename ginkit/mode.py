"""Framework run mode and global writers."""

from __future__ import annotations

import enum
import os
import sys

VERSION = "v1.7.7"

ENV_GIN_MODE = "GIN_MODE"

DEBUG_MODE = "debug"
RELEASE_MODE = "release"
TEST_MODE = "test"

DEFAULT_WRITER = sys.stdout
DEFAULT_ERROR_WRITER = sys.stderr


class _ModeCode(enum.IntEnum):
    DEBUG = 0
    RELEASE = 1
    TEST = 2


_CODES = {
    DEBUG_MODE: _ModeCode.DEBUG,
    RELEASE_MODE: _ModeCode.RELEASE,
    TEST_MODE: _ModeCode.TEST,
}

_mode_code = _ModeCode.DEBUG
_mode_name = DEBUG_MODE


def set_mode(value: str) -> None:
    """Set the run mode; an empty value selects debug mode.

    Raises ValueError for an unknown mode name.
    """
    global _mode_code, _mode_name
    if not value:
        value = DEBUG_MODE
    try:
        code = _CODES[value]
    except KeyError:
        raise ValueError(
            f"gin mode unknown: {value} (available mode: debug release test)"
        ) from None
    _mode_code = code
    _mode_name = value


def mode() -> str:
    """Return the current run mode name."""
    return _mode_name


set_mode(os.environ.get(ENV_GIN_MODE, ""))