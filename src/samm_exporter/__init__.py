"""samm_exporter: a minimal Prometheus telemetry-exposition daemon."""

from samm_exporter.adapters.frameworks.asgi import (
    AccessLogMiddleware,
    compose,
    create_asgi_app,
)
from samm_exporter.adapters.logging import configure_logging
from samm_exporter.core.exceptions import (
    DuplicateRegistration,
    LabelArityMismatch,
    ListenerBindFailure,
    SammExporterError,
    SerializationFailure,
)
from samm_exporter.core.models import Measurement, MeasurementFamily
from samm_exporter.core.oscillation import Oscillation
from samm_exporter.core.registry import MeasurementRegistry
from samm_exporter.core.sampler import Sampler

__all__ = [
    "AccessLogMiddleware",
    "DuplicateRegistration",
    "LabelArityMismatch",
    "ListenerBindFailure",
    "Measurement",
    "MeasurementFamily",
    "MeasurementRegistry",
    "Oscillation",
    "Sampler",
    "SammExporterError",
    "SerializationFailure",
    "compose",
    "configure_logging",
    "create_asgi_app",
]
