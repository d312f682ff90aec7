"""
infrastructure.persistence.token_store - Local session token storage.

The token is stored in ~/.user-directory/session.json (configurable) under
the well-known key "auth_token", so the operator stays logged in between
CLI invocations without re-entering their password every time.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"


class FileTokenStorage:
    """JSON-file implementation of TokenStorage."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        """Return the stored token, or None if there is no usable one."""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            return None
        return token

    def save(self, token: str) -> None:
        """Persist the token to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps({TOKEN_KEY: token}, indent=2), encoding="utf-8"
        )
        logger.debug("Session token written to %s", self._path)

    def clear(self) -> None:
        """Delete the stored token (logout)."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove session file %s: %s", self._path, exc)
            return
        logger.debug("Session file %s removed", self._path)
