"""
domain.models - Value objects for directory state.

These are immutable data containers with no dependencies on infrastructure
(no requests, no pydantic, no file I/O):

    DirectoryPage   one remote page of users, replaced wholesale per fetch
    PendingAction   Idle | Open(record) | Submitting(record) per dialog kind
    Notification    user-visible outcome of a load/update/delete
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from domain.entities import UserRecord


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryPage:
    """A bounded, ordered slice of the remote user collection.

    page is 1-based. total_pages comes from the server and is trusted as-is.
    records keeps the server-returned order.
    """
    page: int = 1
    total_pages: int = 1
    per_page: int = 0
    total: int = 0
    records: tuple[UserRecord, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> DirectoryPage:
        """Placeholder shown before the first successful fetch."""
        return cls()

    def index_of(self, user_id: int) -> Optional[int]:
        for index, record in enumerate(self.records):
            if record.id == user_id:
                return index
        return None

    def with_replaced(self, updated: UserRecord) -> DirectoryPage:
        """Return a copy with the record sharing updated.id swapped in place."""
        index = self.index_of(updated.id)
        if index is None:
            return self
        records = self.records[:index] + (updated,) + self.records[index + 1:]
        return DirectoryPage(
            page=self.page,
            total_pages=self.total_pages,
            per_page=self.per_page,
            total=self.total,
            records=records,
        )

    def without(self, user_id: int) -> DirectoryPage:
        """Return a copy without the record with user_id (no-op if absent)."""
        if self.index_of(user_id) is None:
            return self
        return DirectoryPage(
            page=self.page,
            total_pages=self.total_pages,
            per_page=self.per_page,
            total=self.total,
            records=tuple(r for r in self.records if r.id != user_id),
        )


# ---------------------------------------------------------------------------
# Pending actions (edit / delete dialogs)
# ---------------------------------------------------------------------------

class ActionKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"


class ActionState(str, Enum):
    IDLE = "idle"
    OPEN = "open"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class PendingAction:
    """Tagged variant for one dialog surface.

    IDLE carries no record. OPEN and SUBMITTING carry a copy of the record
    being acted on (SUBMITTING may carry None when a confirmation was issued
    without a dialog being open).
    """
    state: ActionState = ActionState.IDLE
    record: Optional[UserRecord] = None

    @classmethod
    def idle(cls) -> PendingAction:
        return cls()

    @classmethod
    def open(cls, record: UserRecord) -> PendingAction:
        return cls(state=ActionState.OPEN, record=record)

    @classmethod
    def submitting(cls, record: Optional[UserRecord]) -> PendingAction:
        return cls(state=ActionState.SUBMITTING, record=record)

    @property
    def is_idle(self) -> bool:
        return self.state is ActionState.IDLE

    @property
    def is_open(self) -> bool:
        return self.state is ActionState.OPEN

    @property
    def is_submitting(self) -> bool:
        return self.state is ActionState.SUBMITTING


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A toast-style message for the presentation layer."""
    title: str
    description: str
    level: NotificationLevel = NotificationLevel.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.level is NotificationLevel.ERROR
