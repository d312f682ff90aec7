"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and an
optional .env file) or passed explicitly in tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_URL = "https://reqres.in/api"
DEFAULT_SESSION_FILE = Path.home() / ".user-directory" / "session.json"


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the user directory client.

    No module-level globals — construct via from_env() or pass explicitly
    in tests.
    """

    # Remote directory service
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    request_timeout: float = 10.0

    # Durable session token
    session_file: Path = DEFAULT_SESSION_FILE

    # CLI logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from environment variables (.env is honoured)."""
        from dotenv import load_dotenv
        load_dotenv()

        session_file = os.getenv("SESSION_FILE")
        return cls(
            api_url=os.getenv("DIRECTORY_API_URL", DEFAULT_API_URL),
            api_key=os.getenv("DIRECTORY_API_KEY", ""),
            request_timeout=float(os.getenv("DIRECTORY_API_TIMEOUT", "10")),
            session_file=(
                Path(session_file).expanduser() if session_file
                else DEFAULT_SESSION_FILE
            ),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )
