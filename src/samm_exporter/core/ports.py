"""Port interfaces between the core and its adapters.

The exposition adapters depend only on these protocols, not on the
concrete registry.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from samm_exporter.core.models import Measurement


@runtime_checkable
class SnapshotSource(Protocol):
    """Port for anything that can produce a consistent measurement snapshot.

    Examples: MeasurementRegistry.
    """

    def snapshot(self) -> Sequence[Measurement]:
        """Return a point-in-time view of all current measurements."""
        ...
