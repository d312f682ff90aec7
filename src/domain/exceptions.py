"""
domain.exceptions - Custom exception hierarchy for the user directory client.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class AuthenticationError(DomainError):
    """Raised when login fails (rejected credentials or transport failure)."""


class UnauthorizedError(DomainError):
    """Raised when a directory operation is attempted without a session."""


class RemoteAPIError(DomainError):
    """Raised by the HTTP client for any non-success or unusable response.

    status_code is None for transport failures (connection refused, timeout)
    and for payloads that could not be parsed.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RecoverableRemoteError(DomainError):
    """A failed load/update/delete call. Local state has been rolled back."""

    def __init__(
        self,
        action: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.action = action
        self.status_code = status_code
        super().__init__(message)


class ActionInProgressError(DomainError):
    """Raised when a pending action is re-submitted or replaced mid-flight."""
