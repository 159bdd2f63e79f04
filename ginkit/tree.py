"""Radix tree used to route request paths to handler chains."""

from __future__ import annotations

import dataclasses
import enum
import re
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import unquote_plus


class RouteError(ValueError):
    """Raised when a route cannot be registered or the tree is inconsistent."""


@dataclass(frozen=True)
class Param:
    """A single URL parameter."""

    key: str
    value: str


class Params(list):
    """Ordered URL parameters; the first parameter in the path comes first."""

    def get(self, name: str) -> Optional[str]:
        """Return the value of the first parameter named *name*, or None."""
        for entry in self:
            if entry.key == name:
                return entry.value
        return None

    def by_name(self, name: str) -> str:
        """Return the value of the first parameter named *name*, or ''."""
        value = self.get(name)
        return "" if value is None else value


class NodeType(enum.IntEnum):
    STATIC = 0
    ROOT = 1
    PARAM = 2
    CATCH_ALL = 3


@dataclass
class NodeValue:
    """Result of a tree lookup."""

    handlers: Optional[list] = None
    params: Params = field(default_factory=Params)
    tsr: bool = False
    full_path: str = ""


@dataclass(eq=False)
class _Skipped:
    path: str
    node: "Node"
    params_count: int


_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _query_unescape(value: str) -> str:
    """Decode a query-escaped value; keep it unchanged if it is malformed."""
    if _BAD_ESCAPE.search(value):
        return value
    return unquote_plus(value)


def _lower(c: str) -> str:
    low = c.lower()
    return low if len(low) == 1 else c


def _upper(c: str) -> str:
    up = c.upper()
    return up if len(up) == 1 else c


def _equal_fold(a: str, b: str) -> bool:
    if len(a) != len(b):
        return False
    return all(
        x == y or x.lower() == y.lower() or x.upper() == y.upper()
        for x, y in zip(a, b)
    )


def count_params(path: str) -> int:
    """Return the number of ':' and '*' characters in *path*."""
    return path.count(":") + path.count("*")


def count_sections(path: str) -> int:
    """Return the number of '/' characters in *path*."""
    return path.count("/")


def longest_common_prefix(a: str, b: str) -> int:
    """Return the length of the common prefix of *a* and *b*."""
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def find_wildcard(path: str) -> tuple[str, int, bool]:
    """Find the first wildcard segment in *path*.

    Returns (wildcard, index, valid); index is -1 when there is none.
    """
    for start, c in enumerate(path):
        if c not in ":*":
            continue
        valid = True
        for offset, ch in enumerate(path[start + 1:]):
            if ch == "/":
                return path[start:start + 1 + offset], start, valid
            if ch in ":*":
                valid = False
        return path[start:], start, valid
    return "", -1, False


@dataclass(eq=False)
class Node:
    """A node of the routing radix tree."""

    path: str = ""
    indices: str = ""
    wild_child: bool = False
    n_type: int = NodeType.STATIC
    priority: int = 0
    children: list = field(default_factory=list)
    handlers: Optional[list] = None
    full_path: str = ""

    def _add_child(self, child: "Node") -> None:
        if self.wild_child and self.children:
            wildcard_child = self.children[-1]
            self.children[-1:] = [child, wildcard_child]
        else:
            self.children.append(child)

    def _increment_child_prio(self, pos: int) -> int:
        cs = self.children
        cs[pos].priority += 1
        prio = cs[pos].priority
        new_pos = pos
        while new_pos > 0 and cs[new_pos - 1].priority < prio:
            cs[new_pos - 1], cs[new_pos] = cs[new_pos], cs[new_pos - 1]
            new_pos -= 1
        if new_pos != pos:
            idx = self.indices
            self.indices = (
                idx[:new_pos] + idx[pos] + idx[new_pos:pos] + idx[pos + 1:]
            )
        return new_pos

    def add_route(self, path: str, handlers: Optional[list]) -> None:
        """Register *handlers* for *path*; raise RouteError on conflicts."""
        full_path = path
        n = self
        n.priority += 1

        if not n.path and not n.children:
            n._insert_child(path, full_path, handlers)
            n.n_type = NodeType.ROOT
            return

        parent_full_path_index = 0
        while True:
            i = longest_common_prefix(path, n.path)

            if i < len(n.path):
                child = Node(
                    path=n.path[i:],
                    wild_child=n.wild_child,
                    indices=n.indices,
                    children=n.children,
                    handlers=n.handlers,
                    priority=n.priority - 1,
                    full_path=n.full_path,
                )
                n.children = [child]
                n.indices = n.path[i]
                n.path = path[:i]
                n.handlers = None
                n.wild_child = False
                n.full_path = full_path[:parent_full_path_index + i]

            if i < len(path):
                path = path[i:]
                c = path[0]

                if n.n_type == NodeType.PARAM and c == "/" and len(n.children) == 1:
                    parent_full_path_index += len(n.path)
                    n = n.children[0]
                    n.priority += 1
                    continue

                idx = n.indices.find(c)
                if idx >= 0:
                    parent_full_path_index += len(n.path)
                    idx = n._increment_child_prio(idx)
                    n = n.children[idx]
                    continue

                if c not in ":*" and n.n_type != NodeType.CATCH_ALL:
                    n.indices += c
                    child = Node(full_path=full_path)
                    n._add_child(child)
                    n._increment_child_prio(len(n.indices) - 1)
                    n = child
                elif n.wild_child:
                    n = n.children[-1]
                    n.priority += 1
                    if (
                        len(path) >= len(n.path)
                        and n.path == path[:len(n.path)]
                        and n.n_type != NodeType.CATCH_ALL
                        and (len(n.path) >= len(path) or path[len(n.path)] == "/")
                    ):
                        continue
                    path_seg = path
                    if n.n_type != NodeType.CATCH_ALL:
                        path_seg = path_seg.split("/", 1)[0]
                    prefix = full_path[:full_path.index(path_seg)] + n.path
                    raise RouteError(
                        f"'{path_seg}' in new path '{full_path}' conflicts with "
                        f"existing wildcard '{n.path}' in existing prefix '{prefix}'"
                    )

                n._insert_child(path, full_path, handlers)
                return

            if n.handlers is not None:
                raise RouteError(
                    f"handlers are already registered for path '{full_path}'"
                )
            n.handlers = handlers
            n.full_path = full_path
            return

    def _insert_child(self, path: str, full_path: str, handlers: Optional[list]) -> None:
        n = self
        while True:
            wildcard, i, valid = find_wildcard(path)
            if i < 0:
                break

            if not valid:
                raise RouteError(
                    "only one wildcard per path segment is allowed, has: "
                    f"'{wildcard}' in path '{full_path}'"
                )
            if len(wildcard) < 2:
                raise RouteError(
                    "wildcards must be named with a non-empty name in path "
                    f"'{full_path}'"
                )

            if wildcard[0] == ":":
                if i > 0:
                    n.path = path[:i]
                    path = path[i:]
                child = Node(n_type=NodeType.PARAM, path=wildcard, full_path=full_path)
                n._add_child(child)
                n.wild_child = True
                n = child
                n.priority += 1

                if len(wildcard) < len(path):
                    path = path[len(wildcard):]
                    child = Node(priority=1, full_path=full_path)
                    n._add_child(child)
                    n = child
                    continue

                n.handlers = handlers
                return

            if i + len(wildcard) != len(path):
                raise RouteError(
                    "catch-all routes are only allowed at the end of the path "
                    f"in path '{full_path}'"
                )

            if n.path and n.path[-1] == "/":
                path_seg = n.children[0].path.split("/", 1)[0] if n.children else ""
                raise RouteError(
                    f"catch-all wildcard '{path}' in new path '{full_path}' "
                    f"conflicts with existing path segment '{path_seg}' in "
                    f"existing prefix '{n.path}{path_seg}'"
                )

            i -= 1
            if i < 0 or path[i] != "/":
                raise RouteError(f"no / before catch-all in path '{full_path}'")

            n.path = path[:i]
            child = Node(wild_child=True, n_type=NodeType.CATCH_ALL, full_path=full_path)
            n._add_child(child)
            n.indices = "/"
            n = child
            n.priority += 1

            n.children = [
                Node(
                    path=path[i:],
                    n_type=NodeType.CATCH_ALL,
                    handlers=handlers,
                    priority=1,
                    full_path=full_path,
                )
            ]
            return

        n.path = path
        n.handlers = handlers
        n.full_path = full_path

    def get_value(self, path: str, unescape: bool = False) -> NodeValue:
        """Look up *path*; the result may recommend a trailing-slash redirect."""
        value = NodeValue()
        params = value.params
        skipped: list[_Skipped] = []
        global_count = 0
        n = self

        def rollback() -> bool:
            nonlocal path, n, global_count
            while skipped:
                entry = skipped.pop()
                if entry.path.endswith(path):
                    path = entry.path
                    n = entry.node
                    del params[entry.params_count:]
                    global_count = entry.params_count
                    return True
            return False

        while True:
            prefix = n.path
            if len(path) > len(prefix) and path.startswith(prefix):
                path = path[len(prefix):]
                idx = n.indices.find(path[0])
                if idx >= 0:
                    if n.wild_child:
                        skipped.append(
                            _Skipped(prefix + path, dataclasses.replace(n, indices=""), global_count)
                        )
                    n = n.children[idx]
                    continue

                if not n.wild_child:
                    if path != "/" and rollback():
                        continue
                    value.tsr = path == "/" and n.handlers is not None
                    return value

                n = n.children[-1]
                global_count += 1

                if n.n_type == NodeType.PARAM:
                    end = path.find("/")
                    if end < 0:
                        end = len(path)
                    val = path[:end]
                    if unescape:
                        val = _query_unescape(val)
                    params.append(Param(n.path[1:], val))

                    if end < len(path):
                        if n.children:
                            path = path[end:]
                            n = n.children[0]
                            continue
                        value.tsr = len(path) == end + 1
                        return value

                    if n.handlers is not None:
                        value.handlers = n.handlers
                        value.full_path = n.full_path
                        return value
                    if len(n.children) == 1:
                        n = n.children[0]
                        value.tsr = (n.path == "/" and n.handlers is not None) or (
                            n.path == "" and n.indices == "/"
                        )
                    return value

                if n.n_type == NodeType.CATCH_ALL:
                    val = _query_unescape(path) if unescape else path
                    params.append(Param(n.path[2:], val))
                    value.handlers = n.handlers
                    value.full_path = n.full_path
                    return value

                raise RouteError("invalid node type")

            if path == prefix:
                if n.handlers is None and path != "/" and rollback():
                    continue
                if n.handlers is not None:
                    value.handlers = n.handlers
                    value.full_path = n.full_path
                    return value
                if path == "/" and n.wild_child and n.n_type != NodeType.ROOT:
                    value.tsr = True
                    return value
                idx = n.indices.find("/")
                if idx >= 0:
                    n = n.children[idx]
                    value.tsr = (len(n.path) == 1 and n.handlers is not None) or (
                        n.n_type == NodeType.CATCH_ALL
                        and n.children[0].handlers is not None
                    )
                return value

            value.tsr = path == "/" or (
                len(prefix) == len(path) + 1
                and prefix[len(path)] == "/"
                and path == prefix[:-1]
                and n.handlers is not None
            )
            if not value.tsr and path != "/" and rollback():
                continue
            return value

    def find_case_insensitive_path(self, path: str, fix_trailing_slash: bool) -> Optional[str]:
        """Return the registered path matching *path* case-insensitively, or None."""
        return self._find_ci(path, "", fix_trailing_slash)

    def _find_ci(self, path: str, ci_path: str, fix: bool) -> Optional[str]:
        n = self
        np_len = len(n.path)

        while len(path) >= np_len and (
            np_len == 0 or _equal_fold(path[1:np_len], n.path[1:])
        ):
            path = path[np_len:]
            ci_path += n.path

            if not path:
                if n.handlers is not None:
                    return ci_path
                if fix:
                    idx = n.indices.find("/")
                    if idx >= 0:
                        n = n.children[idx]
                        if (len(n.path) == 1 and n.handlers is not None) or (
                            n.n_type == NodeType.CATCH_ALL
                            and n.children[0].handlers is not None
                        ):
                            return ci_path + "/"
                        return None
                return None

            if not n.wild_child:
                c = path[0]
                lo = _lower(c)
                idx = n.indices.find(lo)
                if idx >= 0:
                    out = n.children[idx]._find_ci(path, ci_path, fix)
                    if out is not None:
                        return out
                up = _upper(c)
                if up != lo:
                    idx = n.indices.find(up)
                    if idx >= 0:
                        n = n.children[idx]
                        np_len = len(n.path)
                        continue
                if fix and path == "/" and n.handlers is not None:
                    return ci_path
                return None

            n = n.children[0]
            if n.n_type == NodeType.PARAM:
                end = path.find("/")
                if end < 0:
                    end = len(path)
                ci_path += path[:end]

                if end < len(path):
                    if n.children:
                        n = n.children[0]
                        np_len = len(n.path)
                        path = path[end:]
                        continue
                    if fix and len(path) == end + 1:
                        return ci_path
                    return None

                if n.handlers is not None:
                    return ci_path
                if fix and len(n.children) == 1:
                    n = n.children[0]
                    if n.path == "/" and n.handlers is not None:
                        return ci_path + "/"
                return None

            if n.n_type == NodeType.CATCH_ALL:
                return ci_path + path

            raise RouteError("invalid node type")

        if fix:
            if path == "/":
                return ci_path
            if (
                len(path) + 1 == np_len
                and n.path[len(path)] == "/"
                and _equal_fold(path[1:], n.path[1:len(path)])
                and n.handlers is not None
            ):
                return ci_path + n.path
        return None


@dataclass
class MethodTree:
    """The routing tree of one HTTP method."""

    method: str
    root: Node


class MethodTrees(list):
    """The routing trees of all registered HTTP methods."""

    def get(self, method: str) -> Optional[Node]:
        """Return the root node for *method*, or None."""
        for tree in self:
            if tree.method == method:
                return tree.root
        return None