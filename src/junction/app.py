"""Junction application class.

Mutable during setup (routes, middleware, error handlers).
Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from types import MappingProxyType
from typing import Any, TypeVar

from junction._internal.asgi import Receive, Scope, Send
from junction._internal.types import ErrorHandler, Handler
from junction.binding.handlers import body_handler, json_handler, parameters_handler, struct_handler
from junction.binding.params import Parameter
from junction.config import Settings
from junction.middleware.chain import Guard, MiddlewareChain
from junction.routing.methods import HTTPMethod
from junction.routing.route import Route
from junction.routing.table import RouteTable
from junction.server.dispatch import Dispatcher

logger = logging.getLogger("junction.app")

T = TypeVar("T")


class App:
    """The junction application.

    Usage::

        app = App()

        @app.get("/index")
        def index(request):
            return "Hello World"

        app.add_middleware(require_token)
        app.run()

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        ``freeze()`` uses a Lock + double-check so exactly one thread
        builds the ``Dispatcher``, even when several ASGI workers call
        ``__call__()`` concurrently on the first request. Every setup
        method raises ``RuntimeError`` once the app is frozen.
    """

    __slots__ = (
        "_dispatcher",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "settings",
    )

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings: Settings = settings or Settings()
        self._routes = RouteTable()
        self._middleware = MiddlewareChain()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def add_route(self, method: str, pattern: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *pattern*.

        Method tokens outside the nine standard methods go to the
        catch-all bucket. Registering the same pattern twice for one
        method replaces the earlier handler.
        """
        self._check_not_frozen()
        return self._routes.add(method, pattern, handler)

    def route(self, pattern: str, *, method: str = HTTPMethod.GET) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.add_route(method, pattern, func)
            return func

        return decorator

    def get(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.GET)

    def head(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.HEAD)

    def post(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.POST)

    def put(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.PUT)

    def patch(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.PATCH)

    def delete(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.DELETE)

    def options(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.OPTIONS)

    def connect(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.CONNECT)

    def trace(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, method=HTTPMethod.TRACE)

    # -- Body-reading routes --

    def handle_body(self, method: str, pattern: str, handler: Handler) -> Route:
        """Register ``handler(request, body: bytes)``."""
        return self.add_route(method, pattern, body_handler(handler))

    def handle_url_body(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        parameters: Iterable[Parameter],
    ) -> Route:
        """Register ``handler(request, values: dict)`` with named parameters bound.

        A missing required parameter or an invalid value answers 400
        with a plain-text message and *handler* is not called.
        """
        return self.add_route(method, pattern, parameters_handler(handler, parameters))

    def handle_struct(
        self,
        method: str,
        pattern: str,
        datacls: type[T],
        handler: Handler,
    ) -> Route:
        """Register ``handler(request, record: T)`` for a URL-encoded body.

        Raises ``ConfigurationError`` right away if *datacls* is not a
        flat dataclass of supported field types.
        """
        return self.add_route(method, pattern, struct_handler(datacls, handler))

    def handle_json(
        self,
        method: str,
        pattern: str,
        datacls: type[T],
        handler: Handler,
    ) -> Route:
        """Register ``handler(request, record: T | None, error: BindingError | None)``."""
        return self.add_route(method, pattern, json_handler(datacls, handler))

    # -- Middleware --

    def add_middleware(self, guard: Guard) -> None:
        """Append a guard. Guards run in registration order before routing."""
        self._check_not_frozen()
        self._middleware.add(guard)

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook; runs during ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook; runs during ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self) -> None:
        """Freeze the app and serve it as described by ``self.settings``."""
        from junction.server.serve import run_settings

        self.freeze()
        run_settings(self, self.settings)

    @property
    def routes(self) -> list[Route]:
        """Every registered route (freezes the app)."""
        return self.freeze().router.routes

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await self.freeze()(scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        self.freeze()

        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await _run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await _run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def freeze(self) -> Dispatcher:
        """Build (once) and return the immutable ``Dispatcher``.

        After this call the route table, middleware chain, and error
        handlers can no longer change.
        """
        if self._dispatcher is not None:
            return self._dispatcher
        with self._freeze_lock:
            if self._dispatcher is None:
                self._dispatcher = self._freeze()
                self._frozen = True
        return self._dispatcher

    def _freeze(self) -> Dispatcher:
        """MUST only be called while holding _freeze_lock."""
        if self.settings.root is not None:
            from junction.static import StaticFiles

            self._routes.add(HTTPMethod.GET, "/{path:path}", StaticFiles(self.settings))

        return Dispatcher(
            router=self._routes.freeze(),
            middleware=self._middleware.freeze(),
            error_handlers=MappingProxyType(dict(self._error_handlers)),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and error handlers before calling app.run()."
            )
            raise RuntimeError(msg)


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        result = hook()
        if inspect.isawaitable(result):
            await result
