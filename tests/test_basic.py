import io
from types import SimpleNamespace

import pytest

from ginkit.render.basic import Data, Reader, Redirect, String, write_string


class Recorder:
    def __init__(self):
        self.headers = {}
        self.status = 200
        self.body = bytearray()

    def write_header(self, code):
        self.status = code

    def write(self, data):
        self.body += data
        return len(data)


BODY = b"#!PNG some raw data"


def test_render_data():
    w = Recorder()
    Data(content_type="image/png", data=BODY).render(w)
    assert bytes(w.body) == BODY
    assert w.headers["Content-Type"] == "image/png"


def test_reader_render_no_headers():
    w = Recorder()
    Reader(reader=io.BytesIO(b"test"), content_length=4).render(w)
    assert bytes(w.body) == b"test"
    assert w.headers["Content-Length"] == "4"


def test_render_reader():
    w = Recorder()
    headers = {
        "Content-Disposition": 'attachment; filename="filename.png"',
        "x-request-id": "requestId",
    }
    Reader(
        reader=io.BytesIO(BODY),
        content_type="image/png",
        content_length=len(BODY),
        headers=headers,
    ).render(w)
    assert bytes(w.body) == BODY
    assert w.headers["Content-Type"] == "image/png"
    assert w.headers["Content-Length"] == str(len(BODY))
    assert w.headers["Content-Disposition"] == headers["Content-Disposition"]
    assert w.headers["X-Request-Id"] == "requestId"


def test_render_reader_no_content_length():
    w = Recorder()
    Reader(
        reader=io.BytesIO(BODY),
        content_type="image/png",
        content_length=-1,
        headers={"x-request-id": "requestId"},
    ).render(w)
    assert bytes(w.body) == BODY
    assert "Content-Length" not in w.headers
    assert w.headers["X-Request-Id"] == "requestId"


def test_reader_keeps_existing_header():
    w = Recorder()
    w.headers["Content-Disposition"] = "inline"
    Reader(
        reader=io.BytesIO(b"x"),
        headers={"Content-Disposition": "attachment"},
    ).render(w)
    assert w.headers["Content-Disposition"] == "inline"


def test_render_redirect_moved_permanently():
    req = SimpleNamespace(method="GET", path="/test-redirect")
    w = Recorder()
    Redirect(code=301, request=req, location="/new/location").render(w)
    assert w.status == 301
    assert w.headers["Location"] == "/new/location"
    assert bytes(w.body) == b'<a href="/new/location">Moved Permanently</a>.\n\n'


def test_render_redirect_bad_code():
    req = SimpleNamespace(method="GET", path="/test-redirect")
    with pytest.raises(ValueError, match="Cannot redirect with status code 200"):
        Redirect(code=200, request=req, location="/new/location").render(Recorder())


def test_render_redirect_created():
    req = SimpleNamespace(method="GET", path="/test-redirect")
    w = Recorder()
    Redirect(code=201, request=req, location="/new/location").render(w)
    assert w.status == 201
    assert w.headers["Location"] == "/new/location"


def test_redirect_relative_location():
    req = SimpleNamespace(method="POST", path="/a/b")
    w = Recorder()
    Redirect(code=302, request=req, location="c/../d/?q=1").render(w)
    assert w.headers["Location"] == "/a/d/?q=1"
    assert bytes(w.body) == b""


def test_redirect_absolute_location_head():
    req = SimpleNamespace(method="HEAD", path="/")
    w = Recorder()
    Redirect(code=307, request=req, location="https://example.com/x").render(w)
    assert w.headers["Location"] == "https://example.com/x"
    assert w.headers["Content-Type"] == "text/html; charset=utf-8"
    assert bytes(w.body) == b""


def test_redirect_write_content_type_does_nothing():
    req = SimpleNamespace(method="GET", path="/")
    w = Recorder()
    Redirect(code=200, request=req, location="/").write_content_type(w)
    assert w.headers == {}


def test_render_string():
    w = Recorder()
    String(format="hello %s %d", data=[]).write_content_type(w)
    assert w.headers["Content-Type"] == "text/plain; charset=utf-8"
    String(format="hola %s %d", data=["manu", 2]).render(w)
    assert bytes(w.body) == b"hola manu 2"


def test_render_string_len_zero():
    w = Recorder()
    String(format="hola %s %d", data=[]).render(w)
    assert bytes(w.body) == b"hola %s %d"
    assert w.headers["Content-Type"] == "text/plain; charset=utf-8"


def test_write_string_value_verb():
    w = Recorder()
    write_string(w, "%v items, 100%%", [3])
    assert bytes(w.body) == b"3 items, 100%"