"""Background sampler that refreshes the demo measurements."""

import logging
import threading
import time
from collections.abc import Callable

from samm_exporter.core.exceptions import LabelArityMismatch
from samm_exporter.core.models import MeasurementFamily
from samm_exporter.core.oscillation import Oscillation
from samm_exporter.core.registry import MeasurementRegistry

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0
COUNTER_LABEL = "instance"
OSCILLATION_LABEL = "oscillation"


class Sampler:
    """Recompute the counter and oscillation series at a fixed cadence.

    Each tick increments an internal counter by one and writes it under
    the ``instance`` label value, then writes the current oscillation
    value under ``oscillation``. Both writes land in the registry in one
    atomic update. Missed ticks are not made up.

    The clock and the stop event are injectable so tests can drive
    ``tick()`` without real waits.
    """

    def __init__(
        self,
        registry: MeasurementRegistry,
        family: MeasurementFamily,
        period: float,
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the sampler.

        Args:
            registry: Registry receiving the writes.
            family: Handle of a family with exactly one label dimension.
            period: Oscillation period in seconds.
            interval: Seconds to wait between ticks.
            clock: Monotonic time source; its first reading anchors the
                oscillation.
            stop_event: Event used both for waiting and for stopping.
        """
        if len(family.label_names) != 1:
            raise LabelArityMismatch(family.name, 1, len(family.label_names))
        if interval <= 0:
            raise ValueError(f"sample interval must be positive, got {interval!r}")
        self.registry = registry
        self.family = family
        self.interval = interval
        self._clock = clock
        self.oscillation = Oscillation(start=clock(), period=period)
        self._counter = 0.0
        self._stop = stop_event or threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def counter(self) -> float:
        """Value written under the ``instance`` label on the last tick."""
        return self._counter

    def tick(self) -> float:
        """Run one sampling iteration and return the new counter value."""
        self._counter += 1
        self.registry.set_many(
            self.family,
            {
                (COUNTER_LABEL,): self._counter,
                (OSCILLATION_LABEL,): self.oscillation.value_at(self._clock()),
            },
        )
        logger.info(".")
        return self._counter

    def run(self) -> None:
        """Tick until stopped, waiting ``interval`` seconds between ticks."""
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self.interval)

    def start(self) -> None:
        """Start the sampler on a daemon thread.

        Raises:
            RuntimeError: If the sampler was already started.
        """
        if self._thread is not None:
            raise RuntimeError("sampler already started")
        self._thread = threading.Thread(target=self.run, name="samm-sampler", daemon=True)
        self._thread.start()
        logger.debug(
            "sampler started with interval=%ss period=%ss",
            self.interval,
            self.oscillation.period,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to exit and wait for the thread to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        """Return True while the sampler thread is alive."""
        return self._thread is not None and self._thread.is_alive()
