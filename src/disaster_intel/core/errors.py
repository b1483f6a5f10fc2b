"""Error taxonomy shared by adapters and services."""

from typing import Optional


class DisasterIntelError(Exception):
    """Base class for all package errors."""


class ValidationError(DisasterIntelError):
    """Input could not be accepted, e.g. a malformed URL."""


class ConfigurationGap(DisasterIntelError):
    """A credential required by an upstream capability is not configured."""


class UpstreamError(DisasterIntelError):
    """An external capability failed."""


class UpstreamTimeout(UpstreamError):
    """An external capability did not answer within its timeout."""


class UpstreamFailure(UpstreamError):
    """An external capability answered with an error or unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
