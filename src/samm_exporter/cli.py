"""Command-line entry point: wire the registry, sampler and HTTP server."""

import logging
import socket
from collections.abc import Sequence

import uvicorn

from samm_exporter.adapters.frameworks.asgi import (
    ASGIApp,
    AccessLogMiddleware,
    compose,
    create_asgi_app,
)
from samm_exporter.adapters.logging import configure_logging
from samm_exporter.config import Settings, load_settings
from samm_exporter.core.exceptions import DuplicateRegistration, ListenerBindFailure
from samm_exporter.core.models import MeasurementFamily
from samm_exporter.core.registry import MeasurementRegistry
from samm_exporter.core.sampler import Sampler

logger = logging.getLogger(__name__)

GAUGE_NAME = "samm_gauge"
GAUGE_HELP = "This is a test metric for Gauge"
GAUGE_LABELS = ("instance",)


def register_measurements(registry: MeasurementRegistry) -> MeasurementFamily:
    """Declare the gauge family written by the sampler."""
    return registry.register(GAUGE_NAME, GAUGE_HELP, GAUGE_LABELS)


def build_app(registry: MeasurementRegistry) -> ASGIApp:
    """Build the served ASGI app: access logging around the exposition endpoint."""
    return compose(create_asgi_app(registry), AccessLogMiddleware)


def bind_listener(host: str, port: int) -> socket.socket:
    """Bind the HTTP listener socket.

    Binding happens before the server starts so that a failure surfaces
    as ListenerBindFailure instead of inside the server's event loop.

    Raises:
        ListenerBindFailure: If the address cannot be bound.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise ListenerBindFailure(host, port, e) from e
    sock.set_inheritable(True)
    return sock


def serve(settings: Settings) -> None:
    """Run the exporter until the process is stopped.

    Raises:
        DuplicateRegistration: If the measurement schema conflicts.
        ListenerBindFailure: If the listen address cannot be bound.
    """
    registry = MeasurementRegistry()
    family = register_measurements(registry)
    sock = bind_listener(settings.host, settings.port)

    sampler = Sampler(
        registry,
        family,
        period=settings.oscillation_period,
        interval=settings.sample_interval,
    )
    sampler.start()

    config = uvicorn.Config(
        build_app(registry),
        access_log=False,
        lifespan="off",
        log_level=settings.log_level.lower(),
    )
    logger.info("listening on %s:%d", settings.host, settings.port)
    uvicorn.Server(config).run(sockets=[sock])


def main(argv: Sequence[str] | None = None) -> int:
    """Parse flags, configure logging and serve; return the exit status."""
    settings = load_settings(argv)
    configure_logging(settings.log_level)
    try:
        serve(settings)
    except (DuplicateRegistration, ListenerBindFailure) as e:
        logger.critical("%s: %s", type(e).__name__, e)
        return 1
    return 0
