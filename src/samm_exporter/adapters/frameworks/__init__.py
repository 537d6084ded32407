"""Framework adapters exposing the registry over HTTP."""

from samm_exporter.adapters.frameworks.asgi import (
    AccessLogMiddleware,
    compose,
    create_asgi_app,
)

__all__ = ["AccessLogMiddleware", "compose", "create_asgi_app"]
