"""Deterministic oscillation signal used by the sampler."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Oscillation:
    """A smooth periodic signal bounded to roughly [1.16, 2.84].

    The value is ``2 + sin(sin(2π · elapsed / period))`` where ``elapsed``
    is measured from ``start``.

    Attributes:
        start: Clock reading the signal is anchored to.
        period: Length of one full cycle in seconds. Must be positive.
    """

    start: float
    period: float

    def __post_init__(self) -> None:
        if not self.period > 0 or math.isinf(self.period):
            raise ValueError(f"oscillation period must be positive, got {self.period!r}")

    def value_at(self, now: float) -> float:
        """Return the signal value at clock reading ``now``."""
        phase = 2 * math.pi * (now - self.start) / self.period
        return 2 + math.sin(math.sin(phase))
