"""Runtime configuration: command-line flags and environment defaults."""

import argparse
import os
import re
from collections.abc import Sequence
from dataclasses import dataclass

ENV_LISTEN_ADDRESS = "SAMM_LISTEN_ADDRESS"
ENV_OSCILLATION_PERIOD = "SAMM_OSCILLATION_PERIOD"
ENV_SAMPLE_INTERVAL = "SAMM_SAMPLE_INTERVAL"
ENV_LOG_LEVEL = "SAMM_LOG_LEVEL"

DEFAULT_LISTEN_ADDRESS = ":5000"
DEFAULT_OSCILLATION_PERIOD = "10m"
DEFAULT_SAMPLE_INTERVAL = "1s"
DEFAULT_LOG_LEVEL = "INFO"

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Parse a Go-style duration string into seconds.

    Accepts a signed sequence of decimal numbers, each with a unit suffix,
    such as ``"10m"``, ``"1h30m"``, ``"2.5s"`` or ``"500ms"``. A bare
    ``"0"`` is also accepted.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    s = text.strip()
    sign = 1.0
    if s[:1] in ("+", "-"):
        sign = -1.0 if s[0] == "-" else 1.0
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise ValueError(f"invalid duration: {text!r}")

    total = 0.0
    pos = 0
    while pos < len(s):
        match = _DURATION_PART_RE.match(s, pos)
        if match is None:
            raise ValueError(f"invalid duration: {text!r}")
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def parse_listen_address(text: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address.

    An empty host (``":5000"``) means all interfaces. IPv6 hosts must be
    bracketed, as in ``"[::1]:5000"``.

    Raises:
        ValueError: If the port is missing or out of range.
    """
    host, sep, port_text = text.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address: {text!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in address: {text!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in address: {text!r}")
    return host or "0.0.0.0", port  # nosec B104


@dataclass(frozen=True)
class Settings:
    """Validated runtime settings.

    Attributes:
        host: Interface the HTTP listener binds to.
        port: TCP port of the HTTP listener.
        oscillation_period: Oscillation period in seconds.
        sample_interval: Seconds between sampler ticks.
        log_level: Level name for the process log.
    """

    host: str = "0.0.0.0"  # nosec B104
    port: int = 5000
    oscillation_period: float = 600.0
    sample_interval: float = 1.0
    log_level: str = DEFAULT_LOG_LEVEL


def _positive_duration(text: str) -> float:
    try:
        seconds = parse_duration(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive: {text!r}")
    return seconds


def _listen_address(text: str) -> tuple[str, int]:
    try:
        return parse_listen_address(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser with environment-backed defaults."""
    parser = argparse.ArgumentParser(
        prog="samm-exporter",
        description="Expose a synthetic gauge over a Prometheus /metrics endpoint.",
    )
    parser.add_argument(
        "--listen-address",
        type=_listen_address,
        default=os.getenv(ENV_LISTEN_ADDRESS, DEFAULT_LISTEN_ADDRESS),
        help="The address to listen on for HTTP requests (default: %(default)s).",
    )
    parser.add_argument(
        "--oscillation-period",
        type=_positive_duration,
        default=os.getenv(ENV_OSCILLATION_PERIOD, DEFAULT_OSCILLATION_PERIOD),
        help="The duration of the oscillation period (default: %(default)s).",
    )
    parser.add_argument(
        "--sample-interval",
        type=_positive_duration,
        default=os.getenv(ENV_SAMPLE_INTERVAL, DEFAULT_SAMPLE_INTERVAL),
        help="Time between sampler ticks (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        help="Process log level (default: %(default)s).",
    )
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Parse ``argv`` (default: sys.argv[1:]) into Settings."""
    args = build_parser().parse_args(argv)
    host, port = args.listen_address
    return Settings(
        host=host,
        port=port,
        oscillation_period=args.oscillation_period,
        sample_interval=args.sample_interval,
        log_level=args.log_level,
    )
