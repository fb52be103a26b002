"""
Error taxonomy — validation failures and remote-call failures.

None of these are fatal: a ValidationError keeps the controller Idle,
a RemoteError fails a single cycle and the next tick runs normally.
"""


class PointsAgentError(Exception):
    """Base for every error raised by points_core."""


class ValidationError(PointsAgentError):
    """Bad operator input. `field` names the offending settings key."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field
        self.message = message


# ─── Remote errors ───────────────────────────────────────────────

class RemoteError(PointsAgentError):
    """A call to the points API failed."""


class NetworkError(RemoteError):
    """Transport failure (unreachable host, timeout, TLS). Cause kept in __cause__."""


class ProtocolError(RemoteError):
    """The server answered with a non-2xx status."""

    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(RemoteError):
    """The response body could not be decoded into the expected shape."""
