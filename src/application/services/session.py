"""
application.services.session - Authentication session lifecycle.

SessionStore is the single source of truth for whether the caller may access
the directory. One instance per process, created by the composition root.

The token is persisted through a TokenStorage port so a session survives
process restarts. restore() trusts the persisted token without a network
call; it is only found to be invalid when the remote service rejects it.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from domain.exceptions import AuthenticationError, RemoteAPIError, UnauthorizedError
from domain.ports import AuthAPI, TokenStorage

logger = logging.getLogger(__name__)

SessionObserver = Callable[[bool], None]


class SessionStore:
    """Owns the session token and the derived authenticated state."""

    def __init__(self, auth_api: AuthAPI, storage: TokenStorage):
        self._auth_api = auth_api
        self._storage = storage
        self._token: Optional[str] = None
        self._observers: list[SessionObserver] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def require_authenticated(self) -> str:
        """Return the active token or raise UnauthorizedError."""
        if not self._token:
            raise UnauthorizedError("No active session. Log in first.")
        return self._token

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def restore(self) -> bool:
        """Adopt a previously persisted token, if any. No network call."""
        token = self._storage.load()
        if token:
            logger.info("Restored persisted session")
            self._set_token(token)
        return self.is_authenticated

    async def login(self, email: str, password: str) -> None:
        """Authenticate against the remote service and persist the token.

        Raises:
            AuthenticationError: credentials rejected or the call failed.
                The current session (if any) is left untouched.
        """
        try:
            token = await self._auth_api.login(email, password)
        except RemoteAPIError as exc:
            logger.warning("Login failed for %s: %s", email, exc)
            raise AuthenticationError("Login failed.") from exc

        if not token:
            raise AuthenticationError("Login failed: no token returned.")

        self._storage.save(token)
        logger.info("Logged in as %s", email)
        self._set_token(token)

    def logout(self) -> None:
        """Forget the token locally and on disk. Idempotent.

        The in-memory session is dropped even when the stored token cannot
        be removed.
        """
        try:
            self._storage.clear()
        except OSError as exc:
            logger.warning("Could not remove stored session token: %s", exc)
        finally:
            if self._token is not None:
                logger.info("Logged out")
                self._set_token(None)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Call observer(is_authenticated) after every state transition.

        Returns a function that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _set_token(self, token: Optional[str]) -> None:
        was_authenticated = self.is_authenticated
        self._token = token or None
        if self.is_authenticated != was_authenticated or token:
            self._notify()

    def _notify(self) -> None:
        state = self.is_authenticated
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Session observer %r failed", observer)
