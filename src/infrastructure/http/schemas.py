"""Pydantic models for the remote directory API request/response payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from domain.entities import UserRecord
from domain.models import DirectoryPage


# --- Auth ---

class LoginBody(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str = Field(..., min_length=1)


# --- Users ---

class UserOut(BaseModel):
    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            avatar_url=self.avatar,
        )

    @classmethod
    def from_record(cls, record: UserRecord) -> UserOut:
        return cls(
            id=record.id,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            avatar=record.avatar_url,
        )


class UserPageOut(BaseModel):
    page: int = Field(..., ge=1)
    per_page: int = 0
    total: int = 0
    total_pages: int = Field(..., ge=0)
    data: list[UserOut] = Field(default_factory=list)

    def to_page(self) -> DirectoryPage:
        return DirectoryPage(
            page=self.page,
            total_pages=self.total_pages,
            per_page=self.per_page,
            total=self.total,
            records=tuple(user.to_record() for user in self.data),
        )
