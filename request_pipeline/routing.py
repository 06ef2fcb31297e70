# Terminal Routing
"""
Terminal handler that dispatches an exchange to an endpoint by exact path.

This is the only place in the service that maps paths to application logic.
Endpoint handlers receive the exchange and return ``str`` or ``bytes``
(sync or async); the router writes the content with a 200 status. A known
path requested with an unregistered method is answered with 405.
"""

import inspect
import logging
from typing import Awaitable, Callable, Dict, FrozenSet, Iterable, Union

from .errors import ConfigurationError, RoutingError
from .models.exchange import Exchange

logger = logging.getLogger("pipeline.routing")

EndpointResult = Union[str, bytes]
EndpointHandler = Callable[[Exchange], Union[EndpointResult, Awaitable[EndpointResult]]]

NOT_FOUND_MESSAGE = "Not Found"
METHOD_NOT_ALLOWED_MESSAGE = "Method Not Allowed"
DEFAULT_METHODS = ("GET",)


class Router:
    """Exact-path endpoint table, usable as a pipeline terminal handler."""

    name = "router"

    def __init__(self):
        self._routes: Dict[str, EndpointHandler] = {}
        self._methods: Dict[str, FrozenSet[str]] = {}

    @property
    def routes(self) -> Dict[str, EndpointHandler]:
        return dict(self._routes)

    @property
    def is_empty(self) -> bool:
        return not self._routes

    def add_route(self, path: str, handler: EndpointHandler, methods: Iterable[str] = DEFAULT_METHODS) -> None:
        """
        Register an endpoint for an exact path.

        GET routes also answer HEAD.

        Raises:
            ConfigurationError: If the path is already registered, the
                handler is not callable or no method is given
        """
        if not callable(handler):
            raise ConfigurationError(f"Endpoint for {path} is not callable")
        if path in self._routes:
            raise ConfigurationError(f"Duplicate route: {path}")
        allowed = {method.upper() for method in methods}
        if not allowed:
            raise ConfigurationError(f"Endpoint for {path} has no methods")
        if "GET" in allowed:
            allowed.add("HEAD")
        self._routes[path] = handler
        self._methods[path] = frozenset(allowed)

    def route(self, path: str, methods: Iterable[str] = DEFAULT_METHODS):
        """Decorator form of ``add_route``."""
        def decorator(handler: EndpointHandler) -> EndpointHandler:
            self.add_route(path, handler, methods)
            return handler
        return decorator

    def resolve(self, path: str) -> EndpointHandler:
        try:
            return self._routes[path]
        except KeyError:
            raise RoutingError(path) from None

    def allows(self, path: str, method: str) -> bool:
        return method.upper() in self._methods.get(path, frozenset())

    async def __call__(self, exchange: Exchange) -> None:
        try:
            handler = self.resolve(exchange.path)
        except RoutingError as e:
            logger.info(f"[{exchange.exchange_id}] {e}")
            exchange.reject(404, NOT_FOUND_MESSAGE)
            return

        if not self.allows(exchange.path, exchange.method):
            logger.info(f"[{exchange.exchange_id}] {exchange.method} not allowed for {exchange.path}")
            exchange.reject(405, METHOD_NOT_ALLOWED_MESSAGE)
            return

        content = handler(exchange)
        if inspect.isawaitable(content):
            content = await content

        exchange.write(content, status_code=200)
        exchange.complete()
