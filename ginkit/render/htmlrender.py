"""HTML template renderers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from glob import glob as _glob_files
from typing import Any, Optional

import jinja2

from ginkit.render.base import Render, write_content_type

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass
class Delims:
    """Left and right delimiters of template expressions."""

    left: str = "{{"
    right: str = "}}"


def _context(data: Any) -> dict:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}


@dataclass
class HTML(Render):
    """A template rendered with *data*.

    *template* is a ``jinja2.Environment``, looked up by *name*, or a single
    ``jinja2.Template``. Mapping data becomes the template context; other
    data is available as ``data``.
    """

    template: Any
    name: str = ""
    data: Any = None

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        context = _context(self.data)
        if isinstance(self.template, jinja2.Environment):
            if not self.name:
                raise ValueError("html: a template name is required for a template set")
            text = self.template.get_template(self.name).render(context)
        else:
            own_name = getattr(self.template, "name", None)
            if self.name and own_name not in (None, self.name):
                raise ValueError(f"html: no template named {self.name!r}")
            text = self.template.render(context)
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        write_content_type(writer, HTML_CONTENT_TYPE)


@dataclass
class HTMLProduction:
    """Renders from templates loaded once."""

    template: Any
    delims: Delims = field(default_factory=Delims)

    def instance(self, name: str, data: Any) -> HTML:
        """Return an HTML render of template *name* with *data*."""
        return HTML(template=self.template, name=name, data=data)


@dataclass
class HTMLDebug:
    """Renders from templates reloaded from disk on every instance."""

    files: list = field(default_factory=list)
    glob: str = ""
    delims: Delims = field(default_factory=Delims)
    func_map: Optional[dict] = None

    def instance(self, name: str, data: Any) -> HTML:
        """Reload the templates and return an HTML render of *name*."""
        return HTML(template=self._load_template(), name=name, data=data)

    def _load_template(self) -> jinja2.Environment:
        if self.files:
            paths = list(self.files)
        elif self.glob:
            paths = sorted(_glob_files(self.glob))
            if not paths:
                raise ValueError(
                    f"html/template: pattern matches no files: {self.glob!r}"
                )
        else:
            raise ValueError(
                "the HTML debug render was created without files or glob pattern"
            )
        sources = {}
        for path in paths:
            with open(path, encoding="utf-8") as handle:
                sources[os.path.basename(path)] = handle.read()
        env = jinja2.Environment(
            loader=jinja2.DictLoader(sources),
            variable_start_string=self.delims.left or "{{",
            variable_end_string=self.delims.right or "}}",
            autoescape=True,
            keep_trailing_newline=True,
        )
        env.globals.update(self.func_map or {})
        return env