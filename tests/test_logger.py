from datetime import datetime, timedelta, timezone

import pytest

from ginkit import logger
from ginkit.logger import (
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    WHITE,
    YELLOW,
    ColorMode,
    LogFormatterParams,
    console_color_mode,
    default_log_formatter,
    disable_console_color,
    force_console_color,
    set_console_color_mode,
)


@pytest.fixture(autouse=True)
def _restore_color_mode():
    set_console_color_mode(ColorMode.AUTO)
    yield
    set_console_color_mode(ColorMode.AUTO)


def _params(latency, is_term):
    return LogFormatterParams(
        time_stamp=datetime.fromtimestamp(1544173902, tz=timezone.utc),
        status_code=200,
        latency=latency,
        client_ip="20.20.20.20",
        method="GET",
        path="/",
        error_message="",
        is_term=is_term,
    )


def test_default_log_formatter_plain():
    assert default_log_formatter(_params(timedelta(seconds=5), False)) == (
        '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'
    )


def test_default_log_formatter_plain_long_duration():
    long = timedelta(milliseconds=9876543210)
    assert default_log_formatter(_params(long, False)) == (
        '[GIN] 2018/12/07 - 09:11:42 | 200 |    2743h29m3s |     20.20.20.20 | GET      "/"\n'
    )


def test_default_log_formatter_colored():
    assert default_log_formatter(_params(timedelta(seconds=5), True)) == (
        "[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|            5s "
        '|     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )


def test_default_log_formatter_colored_long_duration():
    long = timedelta(milliseconds=9876543210)
    assert default_log_formatter(_params(long, True)) == (
        "[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|    2743h29m3s "
        '|     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )


def test_default_log_formatter_short_latency_and_error():
    params = _params(timedelta(microseconds=1500), False)
    params.path = "/example?a=100"
    params.error_message = "oops"
    line = default_log_formatter(params)
    assert "|         1.5ms |" in line
    assert line.endswith('"/example?a=100"\noops')


@pytest.mark.parametrize(
    "method, color",
    [
        ("GET", BLUE),
        ("POST", CYAN),
        ("PUT", YELLOW),
        ("DELETE", RED),
        ("PATCH", GREEN),
        ("HEAD", MAGENTA),
        ("OPTIONS", WHITE),
        ("TRACE", RESET),
    ],
)
def test_color_for_method(method, color):
    assert LogFormatterParams(method=method).method_color() == color


@pytest.mark.parametrize(
    "code, color",
    [(200, GREEN), (301, WHITE), (404, YELLOW), (2, RED), (500, RED)],
)
def test_color_for_status(code, color):
    assert LogFormatterParams(status_code=code).status_code_color() == color


def test_reset_color():
    assert LogFormatterParams().reset_color() == bytes([27, 91, 48, 109]).decode()


def test_is_output_color_with_terminal():
    p = LogFormatterParams(is_term=True)
    assert p.is_output_color() is True
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_is_output_color_without_terminal():
    p = LogFormatterParams(is_term=False)
    assert p.is_output_color() is False
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_disable_console_color():
    assert console_color_mode() is ColorMode.AUTO
    disable_console_color()
    assert console_color_mode() is ColorMode.DISABLE


def test_force_console_color():
    assert console_color_mode() is ColorMode.AUTO
    force_console_color()
    assert console_color_mode() is ColorMode.FORCE


def test_set_console_color_mode_rejects_unknown():
    with pytest.raises(ValueError):
        set_console_color_mode(42)
    assert logger.console_color_mode() is ColorMode.AUTO