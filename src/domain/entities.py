"""
domain.entities - Types with a remote identity.

UserRecord mirrors one entry of the remote directory. Field names follow
Python conventions; the mapping to the wire format (first_name, avatar, ...)
lives in infrastructure.http.schemas.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """One user as returned by the directory service.

    id is assigned by the remote service and never changes. The other
    attributes are opaque strings from the service's point of view.
    """
    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    avatar_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()
