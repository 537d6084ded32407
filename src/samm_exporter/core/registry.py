"""Thread-safe registry of labeled gauge measurements."""

import re
import threading
from collections.abc import Iterable, Mapping, Sequence

from samm_exporter.core.exceptions import DuplicateRegistration, LabelArityMismatch
from samm_exporter.core.models import Measurement, MeasurementFamily

_METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
_LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

LabelValues = Sequence[object]


def _validate_schema(name: str, label_names: tuple[str, ...]) -> None:
    """Reject names the exposition formats cannot represent.

    Raises:
        ValueError: If the metric name or a label name is invalid, or a
            label name is repeated.
    """
    if not _METRIC_NAME_RE.match(name):
        raise ValueError(f"invalid metric name: {name!r}")
    for label in label_names:
        if not _LABEL_NAME_RE.match(label) or label.startswith("__"):
            raise ValueError(f"invalid label name for {name!r}: {label!r}")
    if len(set(label_names)) != len(label_names):
        raise ValueError(f"duplicate label names for {name!r}: {label_names!r}")


class MeasurementRegistry:
    """In-memory collection of measurement families and their latest values.

    A single lock serializes every write and every snapshot copy, so a
    snapshot never observes a partially applied update. Each
    ``(name, label values)`` pair holds exactly one value; writing it
    again replaces the value in place.

    Example:
        ```python
        registry = MeasurementRegistry()
        gauge = registry.register("samm_gauge", "Test gauge", ["instance"])
        registry.set(gauge, ["instance"], 1.0)
        registry.snapshot()
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._families: dict[str, MeasurementFamily] = {}
        self._values: dict[str, dict[tuple[str, ...], float]] = {}

    def register(
        self,
        name: str,
        help: str,
        label_names: Iterable[str] = (),
    ) -> MeasurementFamily:
        """Declare a measurement family and return its handle.

        Registering the same name with the same help text and label names
        returns the existing handle.

        Args:
            name: Metric name.
            help: Description emitted as HELP text.
            label_names: Label dimensions for every series in the family.

        Returns:
            The MeasurementFamily handle for writes.

        Raises:
            DuplicateRegistration: If the name exists with another schema.
            ValueError: If the name or a label name is invalid.
        """
        family = MeasurementFamily(name=name, help=help, label_names=tuple(label_names))
        _validate_schema(family.name, family.label_names)
        with self._lock:
            existing = self._families.get(name)
            if existing is not None:
                if existing.schema != family.schema:
                    raise DuplicateRegistration(name, existing.schema, family.schema)
                return existing
            self._families[name] = family
            self._values[name] = {}
        return family

    def families(self) -> list[MeasurementFamily]:
        """Return registered families in registration order."""
        with self._lock:
            return list(self._families.values())

    def _key(self, family: MeasurementFamily, label_values: LabelValues) -> tuple[str, ...]:
        if len(label_values) != len(family.label_names):
            raise LabelArityMismatch(
                family.name, len(family.label_names), len(label_values)
            )
        return tuple(str(v) for v in label_values)

    def _check_registered(self, family: MeasurementFamily) -> None:
        # Caller holds the lock.
        if self._families.get(family.name) is not family:
            raise KeyError(f"measurement family {family.name!r} is not registered")

    def set(
        self,
        family: MeasurementFamily,
        label_values: LabelValues,
        value: float,
    ) -> None:
        """Create or update the value of one series.

        Args:
            family: Handle returned by ``register``.
            label_values: One value per label name, in the family's order.
            value: New value for the series.

        Raises:
            LabelArityMismatch: If the number of label values is wrong.
            KeyError: If the handle was not registered with this registry.
        """
        key = self._key(family, label_values)
        value = float(value)
        with self._lock:
            self._check_registered(family)
            self._values[family.name][key] = value

    def set_many(
        self,
        family: MeasurementFamily,
        updates: Mapping[tuple[object, ...], float],
    ) -> None:
        """Apply several series updates of one family atomically.

        Every label tuple is validated before anything is written, so
        either all updates land or none do.

        Args:
            family: Handle returned by ``register``.
            updates: Label values tuple to new value.

        Raises:
            LabelArityMismatch: If any label tuple has the wrong length.
            KeyError: If the handle was not registered with this registry.
        """
        prepared = [(self._key(family, lv), float(v)) for lv, v in updates.items()]
        with self._lock:
            self._check_registered(family)
            series = self._values[family.name]
            for key, value in prepared:
                series[key] = value

    def snapshot(self) -> tuple[Measurement, ...]:
        """Return a consistent point-in-time view of every series.

        Families appear in registration order; series within a family in
        the order they were first written.
        """
        with self._lock:
            copied = [
                (family, list(self._values[name].items()))
                for name, family in self._families.items()
            ]
        return tuple(
            Measurement(
                name=family.name,
                labels=dict(zip(family.label_names, key)),
                value=value,
                help=family.help,
            )
            for family, series in copied
            for key, value in series
        )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(series) for series in self._values.values())
