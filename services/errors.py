"""
Service-layer exceptions.

Each class carries the HTTP status and the stable error code the route layer
uses when it turns the exception into the uniform error envelope
(see api/errors.py). The services never build responses themselves.
"""
from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for errors raised by the session core."""

    status_code: int = 400
    error_code: str = "BAD_REQUEST"
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, *, details: Optional[dict] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details or {}


class InvalidCredentialsError(ServiceError):
    # Same message for unknown username and wrong password
    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"


class InvalidTokenError(ServiceError):
    status_code = 403
    error_code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class UnknownSessionError(ServiceError):
    status_code = 403
    error_code = "UNKNOWN_SESSION"
    default_message = "Refresh token not found or expired"


class SessionTheftSuspectedError(ServiceError):
    status_code = 403
    error_code = "SESSION_REVOKED"
    default_message = "Security violation: IP address or device ID mismatch"


class StorageUnavailableError(ServiceError):
    status_code = 503
    error_code = "STORAGE_UNAVAILABLE"
    default_message = "Storage is temporarily unavailable"
