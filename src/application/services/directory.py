"""
application.services.directory - One page of the remote directory plus
the edit/delete workflows applied to it.

DirectoryController owns:

    page        the DirectoryPage currently shown (swapped in one assignment,
                so readers see either the old page or the new one)
    loading     True while at least one page fetch is outstanding
    editing     PendingAction slot for the edit dialog
    deleting    PendingAction slot for the delete dialog

Remote failures are caught here and turned into RecoverableRemoteError plus
an error Notification; they never reach the presentation layer as raised
exceptions. Overlapping load_page() calls are not coalesced: whichever
response resolves last wins.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Optional

from application.services.session import SessionStore
from domain.entities import UserRecord
from domain.exceptions import ActionInProgressError, RecoverableRemoteError, RemoteAPIError
from domain.models import (
    ActionKind,
    DirectoryPage,
    Notification,
    NotificationLevel,
    PendingAction,
)
from domain.ports import DirectoryAPI

logger = logging.getLogger(__name__)

NotificationObserver = Callable[[Notification], None]

_FAILURE_MESSAGES = {
    "load": "Failed to load users. Please try again.",
    "update": "Failed to update user. Please try again.",
    "delete": "Failed to delete user. Please try again.",
}


class DirectoryController:
    """Maintains one page of users and reconciles it with remote mutations."""

    def __init__(self, api: DirectoryAPI, session: SessionStore):
        self._api = api
        self._session = session
        self._page = DirectoryPage.empty()
        self._outstanding_loads = 0
        self._actions: dict[ActionKind, PendingAction] = {
            ActionKind.EDIT: PendingAction.idle(),
            ActionKind.DELETE: PendingAction.idle(),
        }
        self._observers: list[NotificationObserver] = []
        self.last_error: Optional[RecoverableRemoteError] = None

    # ------------------------------------------------------------------
    # Presentation state
    # ------------------------------------------------------------------

    @property
    def page(self) -> DirectoryPage:
        return self._page

    @property
    def records(self) -> list[UserRecord]:
        return list(self._page.records)

    @property
    def current_page(self) -> int:
        return self._page.page

    @property
    def total_pages(self) -> int:
        return self._page.total_pages

    @property
    def loading(self) -> bool:
        return self._outstanding_loads > 0

    @property
    def editing(self) -> PendingAction:
        return self._actions[ActionKind.EDIT]

    @property
    def deleting(self) -> PendingAction:
        return self._actions[ActionKind.DELETE]

    def find(self, user_id: int) -> Optional[UserRecord]:
        index = self._page.index_of(user_id)
        return None if index is None else self._page.records[index]

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------

    async def load_page(self, page_number: int) -> bool:
        """Fetch page_number and replace the current page on success.

        Returns False (page unchanged, error notification emitted) when the
        remote call fails.

        Raises:
            UnauthorizedError: no active session.
            ValueError: page_number < 1.
        """
        self._session.require_authenticated()
        if page_number < 1:
            raise ValueError(f"Page numbers start at 1, got {page_number}")

        self._outstanding_loads += 1
        try:
            page = await self._api.fetch_page(page_number)
        except RemoteAPIError as exc:
            failure = exc
        else:
            failure = None
        finally:
            self._outstanding_loads -= 1

        if failure is not None:
            self._fail("load", failure)
            return False

        self._page = page
        self.last_error = None
        logger.debug(
            "Showing page %d of %d (%d record(s))",
            page.page, page.total_pages, len(page.records),
        )
        return True

    async def refresh(self) -> bool:
        return await self.load_page(self.current_page)

    async def next_page(self) -> bool:
        if self.current_page >= self.total_pages:
            return False
        return await self.load_page(self.current_page + 1)

    async def previous_page(self) -> bool:
        if self.current_page <= 1:
            return False
        return await self.load_page(self.current_page - 1)

    # ------------------------------------------------------------------
    # Pending actions
    # ------------------------------------------------------------------

    def begin_edit(self, record: UserRecord) -> None:
        self._begin(ActionKind.EDIT, record)

    def begin_delete(self, record: UserRecord) -> None:
        self._begin(ActionKind.DELETE, record)

    def cancel_edit(self) -> bool:
        return self._cancel(ActionKind.EDIT)

    def cancel_delete(self) -> bool:
        return self._cancel(ActionKind.DELETE)

    async def confirm_edit(self, updated: UserRecord) -> bool:
        """Send updated to the remote service and patch it into the page.

        On success the record with the same id is replaced in place (length
        and order unchanged) and the edit slot goes back to idle. On failure
        the page is untouched and the slot returns to where it was, so an
        open dialog stays open for a retry.
        """
        self._session.require_authenticated()
        previous = self._submit(ActionKind.EDIT)
        try:
            await self._api.update_user(updated)
        except RemoteAPIError as exc:
            self._actions[ActionKind.EDIT] = previous
            self._fail("update", exc)
            return False

        self._page = self._page.with_replaced(updated)
        self._actions[ActionKind.EDIT] = PendingAction.idle()
        self.last_error = None
        self._emit(Notification(
            title="User updated",
            description=f"{updated.full_name} has been updated.",
        ))
        return True

    async def confirm_delete(self, user_id: int) -> bool:
        """Delete user_id remotely and drop it from the page.

        Removing an id that is no longer on the page is a no-op, so a
        repeated confirmation succeeds quietly.
        """
        self._session.require_authenticated()
        previous = self._submit(ActionKind.DELETE)
        try:
            await self._api.delete_user(user_id)
        except RemoteAPIError as exc:
            self._actions[ActionKind.DELETE] = previous
            self._fail("delete", exc)
            return False

        self._page = self._page.without(user_id)
        self._actions[ActionKind.DELETE] = PendingAction.idle()
        self.last_error = None
        self._emit(Notification(
            title="User deleted",
            description="User has been removed successfully.",
        ))
        return True

    def _begin(self, kind: ActionKind, record: UserRecord) -> None:
        if self._actions[kind].is_submitting:
            raise ActionInProgressError(
                f"A {kind.value} for user {self._target_id(kind)} is still being submitted."
            )
        self._actions[kind] = PendingAction.open(dataclasses.replace(record))
        logger.debug("Opened %s for user %d", kind.value, record.id)

    def _cancel(self, kind: ActionKind) -> bool:
        if self._actions[kind].is_submitting:
            logger.debug("Ignoring cancel of %s while it is being submitted", kind.value)
            return False
        self._actions[kind] = PendingAction.idle()
        return True

    def _submit(self, kind: ActionKind) -> PendingAction:
        """Move the slot to SUBMITTING and return its pre-call state."""
        previous = self._actions[kind]
        if previous.is_submitting:
            raise ActionInProgressError(
                f"A {kind.value} for user {self._target_id(kind)} is already in flight."
            )
        self._actions[kind] = PendingAction.submitting(previous.record)
        return previous

    def _target_id(self, kind: ActionKind) -> str:
        record = self._actions[kind].record
        return str(record.id) if record else "?"

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, observer: NotificationObserver) -> Callable[[], None]:
        """Deliver every Notification to observer. Returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _fail(self, action: str, exc: RemoteAPIError) -> None:
        logger.warning("Directory %s failed: %s", action, exc)
        self.last_error = RecoverableRemoteError(
            action, str(exc), status_code=exc.status_code,
        )
        self._emit(Notification(
            title="Error",
            description=_FAILURE_MESSAGES[action],
            level=NotificationLevel.ERROR,
        ))

    def _emit(self, notification: Notification) -> None:
        for observer in list(self._observers):
            try:
                observer(notification)
            except Exception:
                logger.exception("Notification observer %r failed", observer)
