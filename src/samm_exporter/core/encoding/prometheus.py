"""Prometheus and OpenMetrics encoding of registry snapshots.

Serialization itself is delegated to ``prometheus_client``; this module
only maps a snapshot onto its metric families and picks the encoder
requested by the client.
"""

import gzip
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.exposition import choose_encoder, gzip_accepted

from samm_exporter.core.exceptions import SerializationFailure
from samm_exporter.core.models import Measurement


class SnapshotCollector:
    """Collector that replays one fixed snapshot to an encoder.

    The encoders in ``prometheus_client`` accept any object with a
    ``collect()`` method, so a request can be encoded from exactly the
    snapshot it took, without touching a global registry.
    """

    def __init__(self, measurements: Sequence[Measurement]) -> None:
        self._measurements = measurements

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Yield one gauge family per metric name, in snapshot order."""
        families: dict[str, GaugeMetricFamily] = {}
        for m in self._measurements:
            family = families.get(m.name)
            if family is None:
                family = GaugeMetricFamily(m.name, m.help, labels=list(m.labels))
                families[m.name] = family
            family.add_metric(list(m.labels.values()), m.value)
        yield from families.values()


@dataclass(frozen=True)
class EncodedPayload:
    """An encoded exposition body with its response headers."""

    body: bytes
    content_type: str
    content_encoding: str | None = None


def encode_snapshot(
    measurements: Sequence[Measurement],
    accept: str = "",
    accept_encoding: str = "",
    disable_compression: bool = False,
) -> EncodedPayload:
    """Encode a snapshot in the format negotiated by the request headers.

    Args:
        measurements: Snapshot taken from the registry.
        accept: Value of the request's Accept header. OpenMetrics is used
            when it asks for ``application/openmetrics-text``; otherwise
            the Prometheus text format.
        accept_encoding: Value of the request's Accept-Encoding header.
        disable_compression: Never gzip the body when True.

    Returns:
        EncodedPayload with body and header values.

    Raises:
        SerializationFailure: If the snapshot cannot be encoded.
    """
    encoder, content_type = choose_encoder(accept)
    try:
        body = encoder(SnapshotCollector(measurements))
    except Exception as e:
        raise SerializationFailure(f"cannot encode snapshot: {e}") from e
    if not disable_compression and gzip_accepted(accept_encoding):
        return EncodedPayload(gzip.compress(body), content_type, "gzip")
    return EncodedPayload(body, content_type)
