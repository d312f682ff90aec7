"""
factory - Composition root for the user directory client.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI) call this factory to get fully configured
services.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    factory = ServiceFactory(Settings.from_env())
    session = factory.session_store()        # restored from disk on first use
    await session.login(email, password)

    directory = factory.create_directory_controller()
    await directory.load_page(1)
"""

from __future__ import annotations

import logging
from typing import Optional

from application.services.directory import DirectoryController
from application.services.session import SessionStore
from infrastructure.config import Settings
from infrastructure.http.directory_client import DirectoryAPIClient
from infrastructure.persistence.token_store import FileTokenStorage

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root — wires all dependencies together.

    Holds the process-wide SessionStore; everything else is created on
    demand.
    """

    def __init__(self, config: Settings):
        self._config = config
        self._session: Optional[SessionStore] = None
        self._api_client: Optional[DirectoryAPIClient] = None

    @property
    def config(self) -> Settings:
        return self._config

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def session_store(self) -> SessionStore:
        """Return the single SessionStore, restoring any persisted token."""
        if self._session is None:
            self._session = SessionStore(
                auth_api=self.api_client(),
                storage=self.create_token_storage(),
            )
            self._session.restore()
            logger.debug(
                "SessionStore ready (authenticated=%s)",
                self._session.is_authenticated,
            )
        return self._session

    def create_directory_controller(self) -> DirectoryController:
        """Create a DirectoryController bound to the process-wide session."""
        return DirectoryController(
            api=self.api_client(),
            session=self.session_store(),
        )

    def create_token_storage(self) -> FileTokenStorage:
        return FileTokenStorage(self._config.session_file)

    def api_client(self) -> DirectoryAPIClient:
        """Return the shared HTTP client (one requests.Session per process)."""
        if self._api_client is None:
            self._api_client = DirectoryAPIClient(
                base_url=self._config.api_url,
                timeout=self._config.request_timeout,
                api_key=self._config.api_key,
                token_provider=self._current_token,
            )
        return self._api_client

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _current_token(self) -> Optional[str]:
        return self._session.token if self._session is not None else None
