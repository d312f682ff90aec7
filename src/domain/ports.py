"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the client needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC — any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from domain.entities import UserRecord
from domain.models import DirectoryPage


# ---------------------------------------------------------------------------
# Remote service ports
# ---------------------------------------------------------------------------

@runtime_checkable
class AuthAPI(Protocol):
    """Exchange credentials for a session token."""

    async def login(self, email: str, password: str) -> str: ...


@runtime_checkable
class DirectoryAPI(Protocol):
    """Read and mutate the remote user directory.

    Implementations raise domain.exceptions.RemoteAPIError for any
    non-success response or transport failure.
    """

    async def fetch_page(self, page: int) -> DirectoryPage: ...

    async def update_user(self, record: UserRecord) -> None: ...

    async def delete_user(self, user_id: int) -> None: ...


# ---------------------------------------------------------------------------
# Local storage ports
# ---------------------------------------------------------------------------

@runtime_checkable
class TokenStorage(Protocol):
    """Durable storage for the single session token."""

    def load(self) -> Optional[str]: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...
