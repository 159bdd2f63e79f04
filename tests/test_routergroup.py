import pytest

from ginkit.routergroup import ANY_METHODS, MAX_HANDLERS, RouterGroup
from ginkit.tree import RouteError


def noop(c):
    return None


class RecordingEngine:
    def __init__(self):
        self.routes = []

    def add_route(self, method, path, handlers):
        self.routes.append((method, path, list(handlers)))


def lookup(group, method, path):
    root = group.engine.trees.get(method)
    assert root is not None
    return root.get_value(path)


def test_router_group_basic():
    router = RouterGroup()
    group = router.group("/hola", noop)
    group.use(noop)
    assert len(group.handlers) == 2
    assert group.base_path == "/hola"
    assert group.engine is router.engine

    group2 = group.group("manu")
    group2.use(noop, noop)
    assert len(group2.handlers) == 4
    assert group2.base_path == "/hola/manu"
    assert group2.engine is router.engine


@pytest.mark.parametrize(
    "method", ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
)
def test_router_group_basic_handle(method):
    router = RouterGroup()
    v1 = router.group("v1", noop)
    assert v1.base_path == "/v1"

    login = v1.group("/login/", noop, noop)
    assert login.base_path == "/v1/login/"

    def handler(c):
        return "handled"

    register = {
        "GET": lambda g: g.get("/test", handler),
        "POST": lambda g: g.post("/test", handler),
        "PUT": lambda g: g.put("/test", handler),
        "PATCH": lambda g: g.patch("/test", handler),
        "DELETE": lambda g: g.delete("/test", handler),
        "HEAD": lambda g: g.head("/test", handler),
        "OPTIONS": lambda g: g.options("/test", handler),
    }[method]
    register(v1)
    register(login)

    value = lookup(router, method, "/v1/login/test")
    assert len(value.handlers) == 4
    assert value.handlers[3] is handler
    assert value.full_path == "/v1/login/test"

    value = lookup(router, method, "/v1/test")
    assert len(value.handlers) == 2
    assert value.handlers[1] is handler
    assert value.full_path == "/v1/test"


def test_router_group_too_many_handlers():
    router = RouterGroup()
    router.use(*([noop] * (MAX_HANDLERS - 1)))
    assert len(router.handlers) == MAX_HANDLERS - 1

    handlers2 = [noop] * (MAX_HANDLERS + 1)
    with pytest.raises(ValueError, match="^too many handlers$"):
        router.use(*handlers2)
    with pytest.raises(ValueError, match="^too many handlers$"):
        router.get("/", *handlers2)


def test_router_group_handle_without_handlers():
    router = RouterGroup()
    with pytest.raises(ValueError):
        router.handle("GET", "/")


@pytest.mark.parametrize("method", [" GET", "GET ", "", "PO ST", "1GET", "PATCh"])
def test_router_group_bad_method(method):
    router = RouterGroup()
    with pytest.raises(ValueError, match="is not valid"):
        router.handle(method, "/", noop)


def test_router_group_custom_method():
    router = RouterGroup()
    router.handle("PURGE", "/cache", noop)
    value = lookup(router, "PURGE", "/cache")
    assert value.handlers == [noop]


def _check_pipeline(r, expected):
    assert r.use(noop) is expected
    assert r.handle("GET", "/handler", noop) is expected
    assert r.any("/any", noop) is expected
    assert r.get("/", noop) is expected
    assert r.post("/", noop) is expected
    assert r.delete("/", noop) is expected
    assert r.patch("/", noop) is expected
    assert r.put("/", noop) is expected
    assert r.options("/", noop) is expected
    assert r.head("/", noop) is expected


def test_router_group_pipeline_root_returns_engine():
    engine = RecordingEngine()
    root = RouterGroup(engine=engine, root=True)
    _check_pipeline(root, engine)
    assert ("GET", "/handler", [noop, noop]) in engine.routes


def test_router_group_pipeline_subgroup_returns_group():
    engine = RecordingEngine()
    root = RouterGroup(engine=engine, root=True)
    v1 = root.group("/v1")
    _check_pipeline(v1, v1)
    assert ("POST", "/v1/", [noop, noop]) in engine.routes


def test_router_group_any_registers_all_methods():
    engine = RecordingEngine()
    group = RouterGroup(engine=engine)
    group.any("/any", noop)
    assert [method for method, _, _ in engine.routes] == list(ANY_METHODS)
    assert {path for _, path, _ in engine.routes} == {"/any"}


def test_router_group_duplicate_route():
    router = RouterGroup()
    router.get("/dup", noop)
    with pytest.raises(RouteError, match="already registered"):
        router.get("/dup", noop)


def test_router_group_trailing_slash_kept():
    router = RouterGroup()
    api = router.group("/api")
    api.get("/items/", noop)
    value = lookup(router, "GET", "/api/items/")
    assert value.full_path == "/api/items/"
    assert lookup(router, "GET", "/api/items").tsr is True