from __future__ import annotations


class DialectTTSError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DialectTTSError):
    """The inbound request is malformed or missing a required field."""

    status_code = 400


class MethodNotAllowedError(ValidationError):
    status_code = 405


class AuthorizationError(DialectTTSError):
    """No credential could be resolved for the remote model."""

    status_code = 401


class RemoteCallError(DialectTTSError):
    """A call to the hosted model failed."""

    status_code = 500


class SynthesisError(RemoteCallError):
    """The synthesis call succeeded but returned no audio payload."""


class RemoteTimeoutError(RemoteCallError, TimeoutError):
    """A remote call did not complete within the configured timeout."""


class DecodeError(DialectTTSError, ValueError):
    """The encoded audio payload is not valid base64."""

    status_code = 500
