"""HTTP adapter package."""

from relay.adapters.web.routes import relay_router, to_response
from relay.adapters.web.server import create_app

__all__ = ["create_app", "relay_router", "to_response"]
