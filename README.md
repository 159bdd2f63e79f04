# ginkit

Building blocks for HTTP routing and response handling:

- a radix-tree router with named parameters (`:name`) and catch-all segments
  (`*path`), trailing-slash redirect hints and case-insensitive lookup
  (`ginkit.tree`);
- router groups that share a path prefix and middleware (`ginkit.routergroup`);
- response renderers for JSON in several forms, plain text, raw data, streams,
  redirects, HTML templates (Jinja2), MessagePack, protobuf messages, XML and
  YAML (`ginkit.render`);
- a request log line formatter with optional ANSI colours (`ginkit.logger`);
- a response writer that tracks the status code and body size
  (`ginkit.response_writer`);
- URL path cleaning and small helpers (`ginkit.path`, `ginkit.utils`);
- a global run mode: `debug`, `release` or `test` (`ginkit.mode`).

## Installing

```
pip install .
```

## Routing tree

```python
from ginkit.tree import Node

tree = Node()
tree.add_route("/users/:id", [show_user])
tree.add_route("/static/*filepath", [serve_file])

value = tree.get_value("/users/42", False)
value.handlers                 # [show_user]
value.full_path                # "/users/:id"
value.params.by_name("id")     # "42"

tree.get_value("/users/42/", False).tsr          # True: drop the trailing slash
tree.find_case_insensitive_path("/USERS/42", True)   # "/users/42", or None
```

With `unescape=True`, parameter values are query-unescaped (`+` becomes a
space, `%2F` becomes `/`); malformed escapes are left as they are.

Conflicting routes, such as two different parameter names at the same place,
a catch-all that is not at the end of the path, or a handler registered twice
for one path, raise `RouteError` (a `ValueError`).

`count_params`, `count_sections`, `longest_common_prefix` and `find_wildcard`
are available as plain functions. `MethodTrees` is a list of per-method trees
with `get(method)` returning the root `Node` or `None`.

## Router groups

```python
from ginkit.routergroup import RouterGroup

root = RouterGroup()
api = root.group("/api", auth_middleware)
api.get("/users/:id", show_user).post("/users", create_user)
root.any("/ping", ping)

get_tree = root.engine.trees.get("GET")
get_tree.get_value("/api/users/7", False).handlers   # [auth_middleware, show_user]
```

`use`, `handle`, `get`, `post`, `put`, `patch`, `delete`, `options`, `head`
and `any` return the group so calls can be chained. `handle` accepts any
upper-case method name and raises `ValueError` otherwise. A group whose
combined middleware and handlers reach 63 raises `ValueError("too many
handlers")`. Any object with `add_route(method, path, handlers)` can be passed
as `engine`; without one, the group keeps its own routing trees.

## Paths and helpers

```python
from ginkit.path import clean_path
from ginkit.utils import join_paths, parse_accept

clean_path("abc/./../def")          # "/def"
clean_path("/a/b/c//")              # "/a/b/c/"
join_paths("/a/", "/hola//")        # "/a/hola/"
parse_accept("text/html, application/xml;q=0.9")   # ["text/html", "application/xml"]
```

`ginkit.utils` also has `H` (a dict with `to_xml()`), `filter_flags`,
`choose_data`, `last_char`, `name_of_function`, `resolve_address` (reads
`PORT`, defaulting to `":8080"`) and `is_ascii`.

## Rendering

Every renderer has `render(writer)` and `write_content_type(writer)`. A writer
is any object with a `headers` mapping, `write(data: bytes)` and
`write_header(code: int)`. `Content-Type` is set only when the writer has none
yet.

```python
from ginkit.render.jsonrender import JSON, SecureJSON, JsonpJSON
from ginkit.render.basic import String, Data

JSON({"foo": "bar"}).render(writer)              # {"foo":"bar"}
SecureJSON("while(1);", [1, 2]).render(writer)   # the prefix goes before arrays only
JsonpJSON("cb", {"a": 1}).render(writer)         # cb({"a":1});
String("hola %s %d", ["manu", 2]).render(writer)
Data("image/png", png_bytes).render(writer)
```

- `ginkit.render.jsonrender`: `JSON`, `IndentedJSON`, `SecureJSON`,
  `JsonpJSON`, `AsciiJSON`, `PureJSON`, `write_json`. Keys are sorted; HTML
  characters are escaped except in `PureJSON`.
- `ginkit.render.basic`: `Data`, `Reader` (copies a binary stream, adds
  `Content-Length` when known and extra headers), `Redirect` (status 201 or
  300–308, otherwise `ValueError`), `String`, `write_string`.
- `ginkit.render.htmlrender`: `HTML`, `HTMLProduction`, `HTMLDebug` (reloads
  Jinja2 templates from `files` or a `glob` on every `instance`), `Delims`.
- `ginkit.render.encoders`: `MsgPack`, `write_msgpack`, `ProtoBuf` (any
  object with `SerializeToString`), `XML` (objects with `to_xml`, mappings,
  dataclasses), `YAML`.
- `ginkit.render.base`: the `Render` base class and `write_content_type`.

## Response writer

```python
from ginkit.response_writer import ResponseWriter

w = ResponseWriter(underlying)
w.write_header(300)   # recorded, not sent yet
w.write(b"hola")      # sends the status, then the body
w.status, w.size, w.written   # 300, 4, True
```

## Log formatting

```python
from datetime import datetime, timedelta
from ginkit.logger import LogFormatterParams, default_log_formatter, force_console_color

params = LogFormatterParams(
    time_stamp=datetime(2018, 12, 7, 9, 11, 42),
    status_code=200,
    latency=timedelta(seconds=5),
    client_ip="20.20.20.20",
    method="GET",
    path="/",
)
default_log_formatter(params)
# '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'
```

Colours follow `console_color_mode()`: `ColorMode.AUTO` colours only when
`is_term` is set, `force_console_color()` always colours and
`disable_console_color()` never does.

## Mode

```python
from ginkit.mode import set_mode, mode

set_mode("release")
mode()   # "release"
```

An empty name selects `debug`; an unknown name raises `ValueError`. When the
package is imported, the mode is read from the `GIN_MODE` environment variable.

## What this package does not do

There is no HTTP server, application engine or request context here: nothing
listens on a port or dispatches requests through the router groups and
handlers for you. There is no logging or error-recovery middleware, only the
log line formatter; no static file serving; and no request body binding or
validation. Wire the tree, renderers and response writer into the server of
your choice.

## Running the tests

```
pip install .[test]
pytest
```