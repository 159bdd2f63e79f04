"""Renderers for MessagePack, protocol buffers, XML and YAML."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from xml.sax.saxutils import escape

import msgpack
import yaml

from ginkit.render.base import Render, write_content_type
from ginkit.utils import H

MSGPACK_CONTENT_TYPE = "application/msgpack; charset=utf-8"
PROTOBUF_CONTENT_TYPE = "application/x-protobuf"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"
YAML_CONTENT_TYPE = "application/x-yaml; charset=utf-8"


def write_msgpack(writer: Any, obj: Any) -> None:
    """Write the MessagePack content type and *obj* encoded as MessagePack."""
    write_content_type(writer, MSGPACK_CONTENT_TYPE)
    writer.write(msgpack.packb(obj, use_bin_type=False))


@dataclass
class MsgPack(Render):
    """A MessagePack-encoded value."""

    data: Any = None

    def render(self, writer: Any) -> None:
        write_msgpack(writer, self.data)

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, MSGPACK_CONTENT_TYPE)


@dataclass
class ProtoBuf(Render):
    """A protocol buffer message, serialised with ``SerializeToString``."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        serialize = getattr(self.data, "SerializeToString", None)
        if not callable(serialize):
            raise TypeError(
                f"protobuf: {type(self.data).__name__} is not a protocol buffer message"
            )
        writer.write(serialize())

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, PROTOBUF_CONTENT_TYPE)


def _encode_xml(data: Any) -> str:
    to_xml = getattr(data, "to_xml", None)
    if callable(to_xml):
        return to_xml()
    if isinstance(data, Mapping):
        return H(data).to_xml()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        name = type(data).__name__
        inner = "".join(
            f"<{f.name}>{escape(str(getattr(data, f.name)))}</{f.name}>"
            for f in dataclasses.fields(data)
        )
        return f"<{name}>{inner}</{name}>"
    raise TypeError(f"xml: unsupported type: {type(data).__name__}")


@dataclass
class XML(Render):
    """An XML-encoded value: an object with ``to_xml``, a mapping or a dataclass."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(_encode_xml(self.data).encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, XML_CONTENT_TYPE)


@dataclass
class YAML(Render):
    """A YAML-encoded value."""

    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        text = yaml.safe_dump(
            self.data, default_flow_style=False, allow_unicode=True, sort_keys=True
        )
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, YAML_CONTENT_TYPE)