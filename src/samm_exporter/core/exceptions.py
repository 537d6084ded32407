"""Exception hierarchy for samm_exporter."""


class SammExporterError(Exception):
    """Base class for all errors raised by samm_exporter."""


class DuplicateRegistration(SammExporterError, ValueError):
    """A family name is already registered with a different schema."""

    def __init__(self, name: str, existing: object, requested: object) -> None:
        self.name = name
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"measurement family {name!r} already registered with schema "
            f"{existing!r}, refusing {requested!r}"
        )


class LabelArityMismatch(SammExporterError, ValueError):
    """The number of label values does not match the family's label names."""

    def __init__(self, name: str, expected: int, got: int) -> None:
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"measurement family {name!r} expects {expected} label value(s), "
            f"got {got}"
        )


class SerializationFailure(SammExporterError):
    """A registry snapshot could not be encoded into an exposition payload."""


class ListenerBindFailure(SammExporterError, OSError):
    """The HTTP listener could not bind the configured address."""

    def __init__(self, host: str, port: int, reason: BaseException) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"cannot listen on {host}:{port}: {reason}")
