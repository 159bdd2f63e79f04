import pytest

from ginkit import mode as mode_module
from ginkit.mode import (
    DEBUG_MODE,
    RELEASE_MODE,
    TEST_MODE,
    mode,
    set_mode,
)


@pytest.fixture(autouse=True)
def _restore_mode():
    previous = mode()
    yield
    set_mode(previous)


def test_set_mode_empty_is_debug():
    set_mode(TEST_MODE)
    set_mode("")
    assert mode() == DEBUG_MODE
    assert mode_module._mode_code == mode_module._ModeCode.DEBUG


@pytest.mark.parametrize(
    "name,code",
    [
        (DEBUG_MODE, mode_module._ModeCode.DEBUG),
        (RELEASE_MODE, mode_module._ModeCode.RELEASE),
        (TEST_MODE, mode_module._ModeCode.TEST),
    ],
)
def test_set_mode(name, code):
    set_mode(name)
    assert mode() == name
    assert mode_module._mode_code == code


def test_set_mode_unknown_raises():
    set_mode(RELEASE_MODE)
    with pytest.raises(ValueError, match="gin mode unknown: unknown"):
        set_mode("unknown")
    assert mode() == RELEASE_MODE


@pytest.mark.parametrize("literal", ["debug", "release", "test"])
def test_set_mode_accepts_literal_names(literal):
    set_mode(literal)
    assert mode() == literal