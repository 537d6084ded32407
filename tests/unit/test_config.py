"""Tests for flag parsing and runtime settings."""

import pytest

from samm_exporter.config import (
    ENV_LISTEN_ADDRESS,
    ENV_LOG_LEVEL,
    ENV_OSCILLATION_PERIOD,
    ENV_SAMPLE_INTERVAL,
    Settings,
    load_settings,
    parse_duration,
    parse_listen_address,
)

pytestmark = [pytest.mark.unit, pytest.mark.tier(0)]


class TestParseDuration:
    """Tests for parse_duration()."""

    @pytest.mark.parametrize(
        ("text", "seconds"),
        [
            ("10m", 600.0),
            ("10s", 10.0),
            ("1h30m", 5400.0),
            ("2.5s", 2.5),
            ("500ms", 0.5),
            (".5h", 1800.0),
            ("1m0.5s", 60.5),
            ("250us", 250e-6),
            ("250µs", 250e-6),
            ("100ns", 100e-9),
            ("0", 0.0),
            ("-1m", -60.0),
            ("+3s", 3.0),
        ],
    )
    def test_valid_durations(self, text: str, seconds: float) -> None:
        """Go-style duration strings are converted to seconds."""
        assert parse_duration(text) == pytest.approx(seconds)

    @pytest.mark.parametrize("text", ["", "10", "m", "1x", "1h 30m", "ten", "-", "1.2.3s"])
    def test_invalid_durations(self, text: str) -> None:
        """Malformed strings raise ValueError."""
        with pytest.raises(ValueError, match="invalid duration"):
            parse_duration(text)


class TestParseListenAddress:
    """Tests for parse_listen_address()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (":5000", ("0.0.0.0", 5000)),
            ("127.0.0.1:9100", ("127.0.0.1", 9100)),
            ("localhost:80", ("localhost", 80)),
            ("[::1]:5000", ("::1", 5000)),
            (":0", ("0.0.0.0", 0)),
        ],
    )
    def test_valid_addresses(self, text: str, expected: tuple[str, int]) -> None:
        """host:port forms are split; an empty host means all interfaces."""
        assert parse_listen_address(text) == expected

    @pytest.mark.parametrize("text", ["5000", "host:", "host:http", ":70000", ":-1"])
    def test_invalid_addresses(self, text: str) -> None:
        """Missing, non-numeric or out-of-range ports raise ValueError."""
        with pytest.raises(ValueError):
            parse_listen_address(text)


class TestLoadSettings:
    """Tests for load_settings()."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            ENV_LISTEN_ADDRESS,
            ENV_OSCILLATION_PERIOD,
            ENV_SAMPLE_INTERVAL,
            ENV_LOG_LEVEL,
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        """Without flags the exporter listens on :5000 with a 10m period."""
        assert load_settings([]) == Settings(
            host="0.0.0.0",
            port=5000,
            oscillation_period=600.0,
            sample_interval=1.0,
            log_level="INFO",
        )

    def test_flags_override_defaults(self) -> None:
        """Command-line flags are parsed into Settings."""
        settings = load_settings(
            [
                "--listen-address",
                "127.0.0.1:9100",
                "--oscillation-period",
                "10s",
                "--sample-interval",
                "250ms",
                "--log-level",
                "debug",
            ]
        )

        assert settings.host == "127.0.0.1"
        assert settings.port == 9100
        assert settings.oscillation_period == 10.0
        assert settings.sample_interval == 0.25
        assert settings.log_level == "DEBUG"

    def test_environment_supplies_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables replace the built-in defaults."""
        monkeypatch.setenv(ENV_LISTEN_ADDRESS, ":8080")
        monkeypatch.setenv(ENV_OSCILLATION_PERIOD, "1m")
        monkeypatch.setenv(ENV_LOG_LEVEL, "warning")

        settings = load_settings([])

        assert settings.port == 8080
        assert settings.oscillation_period == 60.0
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize(
        "argv",
        [
            ["--oscillation-period", "0s"],
            ["--oscillation-period", "-1m"],
            ["--oscillation-period", "soon"],
            ["--sample-interval", "0"],
            ["--listen-address", "nowhere"],
            ["--log-level", "chatty"],
        ],
    )
    def test_invalid_flags_exit_with_usage_error(self, argv: list[str]) -> None:
        """argparse rejects invalid values with exit status 2."""
        with pytest.raises(SystemExit) as exc_info:
            load_settings(argv)

        assert exc_info.value.code == 2
