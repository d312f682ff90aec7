"""Shared fixtures: an isolated token file and mocked remote ports."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from application.services.directory import DirectoryController
from application.services.session import SessionStore
from domain.entities import UserRecord
from domain.models import DirectoryPage
from infrastructure.persistence.token_store import FileTokenStorage


def make_user(user_id: int, first: str = "", last: str = "") -> UserRecord:
    first = first or f"First{user_id}"
    last = last or f"Last{user_id}"
    return UserRecord(
        id=user_id,
        email=f"{first.lower()}.{last.lower()}@reqres.in",
        first_name=first,
        last_name=last,
        avatar_url=f"https://reqres.in/img/faces/{user_id}-image.jpg",
    )


def make_page(page: int, total_pages: int, ids: list[int]) -> DirectoryPage:
    return DirectoryPage(
        page=page,
        total_pages=total_pages,
        per_page=6,
        total=6 * total_pages,
        records=tuple(make_user(i) for i in ids),
    )


@pytest.fixture
def token_file(tmp_path):
    return tmp_path / "session.json"


@pytest.fixture
def storage(token_file):
    return FileTokenStorage(token_file)


@pytest.fixture
def auth_api():
    api = MagicMock()
    api.login = AsyncMock(return_value="abc123")
    return api


@pytest.fixture
def directory_api():
    api = MagicMock()
    api.fetch_page = AsyncMock(return_value=make_page(1, 2, [1, 2, 3]))
    api.update_user = AsyncMock(return_value=None)
    api.delete_user = AsyncMock(return_value=None)
    return api


@pytest.fixture
def session(auth_api, storage):
    return SessionStore(auth_api=auth_api, storage=storage)


@pytest.fixture
def authed_session(session, storage):
    storage.save("abc123")
    session.restore()
    return session


@pytest.fixture
def controller(directory_api, authed_session):
    return DirectoryController(api=directory_api, session=authed_session)


@pytest.fixture
def notifications(controller):
    received = []
    controller.subscribe(received.append)
    return received
