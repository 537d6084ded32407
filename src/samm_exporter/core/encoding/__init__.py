"""Exposition encoders for registry snapshots."""

from samm_exporter.core.encoding.prometheus import (
    EncodedPayload,
    SnapshotCollector,
    encode_snapshot,
)

__all__ = ["EncodedPayload", "SnapshotCollector", "encode_snapshot"]
