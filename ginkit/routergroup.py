"""Router groups: a path prefix plus shared middleware for registering routes."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from ginkit.tree import MethodTree, MethodTrees, Node
from ginkit.utils import join_paths

Handler = Callable[[Any], Any]

MAX_HANDLERS = 63

_METHOD_NAME = re.compile(r"^[A-Z]+$")

ANY_METHODS = (
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "HEAD",
    "OPTIONS",
    "DELETE",
    "CONNECT",
    "TRACE",
)


class _RouteTable:
    """Routing trees, one per HTTP method."""

    def __init__(self) -> None:
        self.trees = MethodTrees()

    def add_route(self, method: str, path: str, handlers: list) -> None:
        if not path.startswith("/"):
            raise ValueError("path must begin with '/'")
        if not method:
            raise ValueError("HTTP method can not be empty")
        if not handlers:
            raise ValueError("there must be at least one handler")
        root = self.trees.get(method)
        if root is None:
            root = Node(full_path="/")
            self.trees.append(MethodTree(method, root))
        root.add_route(path, list(handlers))


class RouterGroup:
    """A path prefix and a chain of middleware shared by its routes.

    *engine* is any object with ``add_route(method, path, handlers)``; when
    it is omitted, the group keeps its own routing trees, reachable as
    ``engine.trees``. Registration methods return the group, or the engine
    for a root group, so that calls can be chained.
    """

    def __init__(
        self,
        engine: Optional[Any] = None,
        base_path: str = "/",
        handlers: Optional[list] = None,
        root: bool = False,
    ) -> None:
        self.engine = engine if engine is not None else _RouteTable()
        self.handlers: list = list(handlers or [])
        self._base_path = base_path
        self._root = root

    @property
    def base_path(self) -> str:
        """The absolute path prefix of the group."""
        return self._base_path

    def _combine_handlers(self, handlers: tuple) -> list:
        merged = self.handlers + list(handlers)
        if len(merged) >= MAX_HANDLERS:
            raise ValueError("too many handlers")
        return merged

    def _absolute_path(self, relative_path: str) -> str:
        return join_paths(self._base_path, relative_path)

    def _return_obj(self) -> Any:
        return self.engine if self._root else self

    def _handle(self, http_method: str, relative_path: str, handlers: tuple) -> Any:
        absolute_path = self._absolute_path(relative_path)
        combined = self._combine_handlers(handlers)
        self.engine.add_route(http_method, absolute_path, combined)
        return self._return_obj()

    def use(self, *args: Handler) -> Any:
        """Append middleware to the group."""
        self.handlers = self._combine_handlers(args)
        return self._return_obj()

    def group(self, relative_path: str, *args: Handler) -> "RouterGroup":
        """Create a sub-group below *relative_path* with extra middleware."""
        return RouterGroup(
            engine=self.engine,
            base_path=self._absolute_path(relative_path),
            handlers=self._combine_handlers(args),
        )

    def handle(self, http_method: str, relative_path: str, *args: Handler) -> Any:
        """Register handlers for any upper-case HTTP method name."""
        if not _METHOD_NAME.match(http_method):
            raise ValueError(f"http method {http_method} is not valid")
        return self._handle(http_method, relative_path, args)

    def get(self, relative_path: str, *args: Handler) -> Any:
        """Register a GET route."""
        return self._handle("GET", relative_path, args)

    def post(self, relative_path: str, *args: Handler) -> Any:
        """Register a POST route."""
        return self._handle("POST", relative_path, args)

    def delete(self, relative_path: str, *args: Handler) -> Any:
        """Register a DELETE route."""
        return self._handle("DELETE", relative_path, args)

    def patch(self, relative_path: str, *args: Handler) -> Any:
        """Register a PATCH route."""
        return self._handle("PATCH", relative_path, args)

    def put(self, relative_path: str, *args: Handler) -> Any:
        """Register a PUT route."""
        return self._handle("PUT", relative_path, args)

    def options(self, relative_path: str, *args: Handler) -> Any:
        """Register an OPTIONS route."""
        return self._handle("OPTIONS", relative_path, args)

    def head(self, relative_path: str, *args: Handler) -> Any:
        """Register a HEAD route."""
        return self._handle("HEAD", relative_path, args)

    def any(self, relative_path: str, *args: Handler) -> Any:
        """Register a route for every common HTTP method."""
        for method in ANY_METHODS:
            self._handle(method, relative_path, args)
        return self._return_obj()