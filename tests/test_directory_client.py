"""Tests for DirectoryAPIClient against a mocked requests.Session."""

from unittest.mock import MagicMock

import pytest
import requests

from domain.entities import UserRecord
from domain.exceptions import RemoteAPIError
from infrastructure.http.directory_client import DirectoryAPIClient

USERS_PAGE_2 = {
    "page": 2,
    "per_page": 6,
    "total": 12,
    "total_pages": 2,
    "data": [
        {
            "id": 7,
            "email": "michael.lawson@reqres.in",
            "first_name": "Michael",
            "last_name": "Lawson",
            "avatar": "https://reqres.in/img/faces/7-image.jpg",
        },
        {
            "id": 8,
            "email": "lindsay.ferguson@reqres.in",
            "first_name": "Lindsay",
            "last_name": "Ferguson",
            "avatar": "https://reqres.in/img/faces/8-image.jpg",
        },
    ],
}


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.content = b"" if payload is None and not text else b"{...}"
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return DirectoryAPIClient(
        base_url="https://reqres.test/api/",
        timeout=3.0,
        api_key="reqres-free-v1",
        session=http,
    )


@pytest.mark.asyncio
async def test_login_returns_token(client, http):
    http.request.return_value = _response(200, {"token": "QpwL5tke4Pnpja7X4"})

    token = await client.login("eve.holt@reqres.in", "cityslicka")

    assert token == "QpwL5tke4Pnpja7X4"
    method, url = http.request.call_args.args
    kwargs = http.request.call_args.kwargs
    assert (method, url) == ("POST", "https://reqres.test/api/login")
    assert kwargs["json"] == {"email": "eve.holt@reqres.in", "password": "cityslicka"}
    assert kwargs["timeout"] == 3.0
    assert kwargs["headers"]["x-api-key"] == "reqres-free-v1"
    assert "Authorization" not in kwargs["headers"]


@pytest.mark.asyncio
async def test_login_rejected(client, http):
    http.request.return_value = _response(400, {"error": "Missing password"})

    with pytest.raises(RemoteAPIError) as excinfo:
        await client.login("eve.holt@reqres.in", "")

    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_login_without_token_in_body(client, http):
    http.request.return_value = _response(200, {"id": 4})

    with pytest.raises(RemoteAPIError):
        await client.login("eve.holt@reqres.in", "cityslicka")


@pytest.mark.asyncio
async def test_fetch_page_maps_records(client, http):
    http.request.return_value = _response(200, USERS_PAGE_2)

    page = await client.fetch_page(2)

    assert http.request.call_args.kwargs["params"] == {"page": 2}
    assert page.page == 2
    assert page.total_pages == 2
    assert page.per_page == 6
    assert page.total == 12
    assert page.records[0] == UserRecord(
        id=7,
        email="michael.lawson@reqres.in",
        first_name="Michael",
        last_name="Lawson",
        avatar_url="https://reqres.in/img/faces/7-image.jpg",
    )
    assert [r.id for r in page.records] == [7, 8]


@pytest.mark.asyncio
async def test_fetch_page_malformed_payload(client, http):
    http.request.return_value = _response(200, {"data": "nope"})

    with pytest.raises(RemoteAPIError):
        await client.fetch_page(1)


@pytest.mark.asyncio
async def test_fetch_page_server_error(client, http):
    http.request.return_value = _response(500, text="Internal Server Error")

    with pytest.raises(RemoteAPIError) as excinfo:
        await client.fetch_page(1)

    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_update_sends_full_record(client, http):
    http.request.return_value = _response(200, {"updatedAt": "2026-10-19T10:00:00Z"})
    record = UserRecord(7, "m@reqres.in", "Mike", "Lawson", "https://x/7.jpg")

    await client.update_user(record)

    method, url = http.request.call_args.args
    assert (method, url) == ("PUT", "https://reqres.test/api/users/7")
    assert http.request.call_args.kwargs["json"] == {
        "id": 7,
        "email": "m@reqres.in",
        "first_name": "Mike",
        "last_name": "Lawson",
        "avatar": "https://x/7.jpg",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 204])
async def test_delete_accepts_ok_and_no_content(client, http, status_code):
    http.request.return_value = _response(status_code)

    await client.delete_user(7)

    method, url = http.request.call_args.args
    assert (method, url) == ("DELETE", "https://reqres.test/api/users/7")


@pytest.mark.asyncio
async def test_transport_failure(client, http):
    http.request.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(RemoteAPIError) as excinfo:
        await client.delete_user(7)

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_timeout(client, http):
    http.request.side_effect = requests.exceptions.Timeout()

    with pytest.raises(RemoteAPIError, match="timed out"):
        await client.fetch_page(1)


@pytest.mark.asyncio
async def test_bearer_token_from_provider(http):
    token = {"value": None}
    client = DirectoryAPIClient(
        base_url="https://reqres.test/api",
        session=http,
        token_provider=lambda: token["value"],
    )
    http.request.return_value = _response(204)

    await client.delete_user(1)
    assert "Authorization" not in http.request.call_args.kwargs["headers"]

    token["value"] = "abc123"
    await client.delete_user(1)
    assert http.request.call_args.kwargs["headers"]["Authorization"] == "Bearer abc123"
    assert "x-api-key" not in http.request.call_args.kwargs["headers"]
