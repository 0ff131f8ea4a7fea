"""Tests for junction.middleware: guard chain and request context."""

import pytest

from junction.app import App
from junction.http.request import Request
from junction.http.response import Response
from junction.middleware import MiddlewareChain, RequestContext
from junction.testing import TestClient


def _ctx() -> RequestContext:
    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    request = Request.from_asgi(
        {"type": "http", "method": "GET", "path": "/", "headers": []}, receive
    )
    return RequestContext(request)


class TestMiddlewareChain:
    async def test_empty_chain_continues(self) -> None:
        assert await MiddlewareChain().run(_ctx()) is True

    async def test_guards_run_in_registration_order(self) -> None:
        order: list[str] = []
        chain = MiddlewareChain()

        def first(ctx: RequestContext) -> bool:
            order.append("first")
            return True

        async def second(ctx: RequestContext) -> bool:
            order.append("second")
            return True

        chain.add(first)
        chain.add(second)
        assert await chain.run(_ctx()) is True
        assert order == ["first", "second"]

    async def test_false_stops_the_chain(self) -> None:
        order: list[str] = []
        chain = MiddlewareChain()

        def stop(ctx: RequestContext) -> bool:
            order.append("stop")
            return False

        def never(ctx: RequestContext) -> bool:
            order.append("never")
            return True

        chain.add(stop)
        chain.add(never)
        assert await chain.run(_ctx()) is False
        assert order == ["stop"]

    async def test_callable_object_guard(self) -> None:
        class AllowList:
            def __init__(self, clients: set[str]) -> None:
                self.clients = clients

            def __call__(self, ctx: RequestContext) -> bool:
                return ctx.request.path in self.clients

        chain = MiddlewareChain()
        chain.add(AllowList({"/"}))
        assert await chain.run(_ctx()) is True

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            MiddlewareChain().add("not a guard")  # type: ignore[arg-type]

    def test_add_after_freeze_raises(self) -> None:
        chain = MiddlewareChain().freeze()
        with pytest.raises(RuntimeError, match="frozen"):
            chain.add(lambda ctx: True)

    def test_len_and_iter(self) -> None:
        def guard(ctx: RequestContext) -> bool:
            return True

        chain = MiddlewareChain((guard,))
        assert len(chain) == 1
        assert list(chain) == [guard]


class TestRequestContext:
    def test_respond_writes_response(self) -> None:
        ctx = _ctx()
        assert not ctx.responded

        response = ctx.respond("denied", status=403, headers={"X-Reason": "token"})

        assert ctx.responded
        assert ctx.response is response
        assert response.status == 403
        assert response.header("x-reason") == "token"

    def test_send_writes_prebuilt_response(self) -> None:
        ctx = _ctx()
        response = Response(body="moved", status=302).with_header("Location", "/login")

        ctx.send(response)

        assert ctx.responded
        assert ctx.response is response

    def test_state_is_per_context(self) -> None:
        first, second = _ctx(), _ctx()
        first.state["user"] = "ada"
        assert second.state == {}


class TestGuardsInApp:
    async def test_passing_guards_reach_handler(self) -> None:
        app = App()
        seen: list[str] = []

        def log_guard(ctx: RequestContext) -> bool:
            seen.append(ctx.request.path)
            return True

        app.add_middleware(log_guard)
        app.add_route("GET", "/index", lambda request: "Hello World")

        async with TestClient(app) as client:
            response = await client.get("/index")

        assert response.text == "Hello World"
        assert seen == ["/index"]

    async def test_stopping_guard_skips_later_guards_and_handler(self) -> None:
        app = App()
        calls: list[str] = []

        def require_token(ctx: RequestContext) -> bool:
            calls.append("auth")
            if ctx.request.headers.get("x-token") != "s3cr3t":
                ctx.respond("forbidden", status=403)
                return False
            return True

        def audit(ctx: RequestContext) -> bool:
            calls.append("audit")
            return True

        def index(request: Request) -> str:
            calls.append("handler")
            return "Hello World"

        app.add_middleware(require_token)
        app.add_middleware(audit)
        app.add_route("GET", "/index", index)

        async with TestClient(app) as client:
            denied = await client.get("/index")
            allowed = await client.get("/index", headers={"X-Token": "s3cr3t"})

        assert denied.status == 403
        assert denied.text == "forbidden"
        assert allowed.text == "Hello World"
        assert calls == ["auth", "auth", "audit", "handler"]

    async def test_guard_runs_before_routing(self) -> None:
        app = App()
        app.add_middleware(lambda ctx: ctx.respond("maintenance", status=503) is None)

        async with TestClient(app) as client:
            response = await client.get("/no-such-route")

        assert response.status == 503
        assert response.text == "maintenance"

    async def test_stop_without_response_is_empty_200(self) -> None:
        app = App()
        app.add_middleware(lambda ctx: False)
        app.add_route("GET", "/index", lambda request: "Hello World")

        async with TestClient(app) as client:
            response = await client.get("/index")

        assert response.status == 200
        assert response.body == b""

    async def test_guard_state_is_visible_to_later_guards(self) -> None:
        app = App()
        seen: list[str] = []

        def identify(ctx: RequestContext) -> bool:
            ctx.state["user"] = "ada"
            return True

        async def check(ctx: RequestContext) -> bool:
            seen.append(ctx.state["user"])
            return True

        app.add_middleware(identify)
        app.add_middleware(check)
        app.add_route("GET", "/", lambda request: "home")

        async with TestClient(app) as client:
            await client.get("/")

        assert seen == ["ada"]
