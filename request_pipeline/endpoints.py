# Demo Endpoints
"""Application endpoints reached when every stage lets the request through."""

from .models.exchange import Exchange
from .routing import Router


def root(exchange: Exchange) -> str:
    return "Middleware Security Demo - All checks passed!"


def demo_test(exchange: Exchange) -> str:
    return "Test endpoint reached successfully!"


def api_data(exchange: Exchange) -> str:
    return "API Data endpoint - All security checks passed!"


def api_secure(exchange: Exchange) -> str:
    return "Secure API endpoint - Authentication successful!"


def create_router() -> Router:
    """Router with the demo endpoints registered."""
    router = Router()
    router.add_route("/", root)
    router.add_route("/test", demo_test)
    router.add_route("/api/data", api_data)
    router.add_route("/api/secure", api_secure)
    return router
