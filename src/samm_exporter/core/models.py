"""Core domain models for exposed measurements."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MeasurementFamily:
    """A named group of measurements sharing one set of label dimensions.

    Instances are returned by ``MeasurementRegistry.register`` and act as
    the handle for subsequent writes.

    Attributes:
        name: Metric name (e.g., samm_gauge).
        help: Human readable description emitted as HELP text.
        label_names: Ordered label dimensions for every series in the family.
    """

    name: str
    help: str
    label_names: tuple[str, ...] = ()

    @property
    def schema(self) -> tuple[str, tuple[str, ...]]:
        """Return the part of the family that must match on re-registration."""
        return (self.help, self.label_names)


@dataclass(frozen=True)
class Measurement:
    """A single series value taken from a registry snapshot.

    Attributes:
        name: Name of the family the series belongs to.
        labels: Label name to label value, in the family's label order.
        value: Latest value written for the series.
        help: Help text of the family.
    """

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    value: float = 0.0
    help: str = ""
