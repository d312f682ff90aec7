"""
infrastructure.http.directory_client - HTTP client for the remote user directory.

Implements AuthAPI and DirectoryAPI by calling the reqres-style REST API:

    POST   /login            {email, password} -> {token}
    GET    /users?page=N     -> {page, per_page, total, total_pages, data}
    PUT    /users/<id>       full record body
    DELETE /users/<id>       2xx (usually 204 No Content)

Uses requests via run_in_executor for async compat. Any non-2xx status,
connection error, timeout or malformed payload is raised as RemoteAPIError;
the application services decide what it means.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError

from domain.entities import UserRecord
from domain.exceptions import RemoteAPIError
from domain.models import DirectoryPage
from infrastructure.http.schemas import LoginBody, TokenResponse, UserOut, UserPageOut

logger = logging.getLogger(__name__)


class DirectoryAPIClient:
    """Call the remote directory service.

    Implements AuthAPI and DirectoryAPI (structural typing — no explicit
    inheritance).

    token_provider is called before each request; when it returns a token
    the request carries an ``Authorization: Bearer`` header.
    """

    def __init__(
        self,
        base_url: str = "https://reqres.in/api",
        timeout: float = 10.0,
        api_key: str = "",
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._api_key = api_key
        self._token_provider = token_provider
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # AuthAPI
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a session token."""
        body = LoginBody(email=email, password=password)
        data = await self._request("POST", "/login", json=body.model_dump())
        try:
            return TokenResponse.model_validate(data).token
        except ValidationError as exc:
            raise RemoteAPIError(f"Login response has no token: {exc}") from exc

    # ------------------------------------------------------------------
    # DirectoryAPI
    # ------------------------------------------------------------------

    async def fetch_page(self, page: int) -> DirectoryPage:
        """Fetch one 1-based page of users."""
        data = await self._request("GET", "/users", params={"page": page})
        try:
            parsed = UserPageOut.model_validate(data)
        except ValidationError as exc:
            raise RemoteAPIError(f"Malformed users page: {exc}") from exc

        logger.info(
            "Fetched users page %d/%d (%d record(s))",
            parsed.page, parsed.total_pages, len(parsed.data),
        )
        return parsed.to_page()

    async def update_user(self, record: UserRecord) -> None:
        """Send the full record to the update endpoint for record.id."""
        body = UserOut.from_record(record).model_dump()
        await self._request("PUT", f"/users/{record.id}", json=body)
        logger.info("Updated user %d", record.id)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user. Both 200 and 204 count as success."""
        await self._request("DELETE", f"/users/{user_id}")
        logger.info("Deleted user %d", user_id)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, lambda: self._send(method, path, **kwargs)
        )

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        """Synchronous HTTP call (runs in thread pool)."""
        url = self._base_url + path
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs,
            )
        except requests.exceptions.Timeout as exc:
            raise RemoteAPIError(
                f"{method} {url} timed out after {self._timeout}s"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise RemoteAPIError(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            logger.warning("%s %s returned HTTP %d", method, url, response.status_code)
            raise RemoteAPIError(
                f"{method} {url} returned HTTP {response.status_code}: "
                f"{response.text[:200]}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteAPIError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from exc

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
