"""Tests for app.client.users_api against a mock transport and against the real app (no network)."""

import unittest

import httpx

from app.client.user_list import UserListView
from app.client.users_api import UsersApiClient, UsersApiError
from app.main import create_app

BASE_URL = "http://testserver/api"
USERS = [{"id": 1, "name": "Alice Johnson", "email": "alice@example.com", "role": None, "created_at": "2023-01-15T00:00:00Z"}]


class RecordingHandler:
    """MockTransport handler returning queued responses and recording requests."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(handler: RecordingHandler, token: str | None = "tok") -> UsersApiClient:
    return UsersApiClient(BASE_URL, token, transport=httpx.MockTransport(handler))


class TestUsersApiClientReads(unittest.IsolatedAsyncioTestCase):
    async def test_list_users_sends_bearer_token(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=USERS))
        users = await _client(handler).list_users()
        self.assertEqual(users, USERS)
        request = handler.requests[0]
        self.assertEqual(request.url.path, "/api/users")
        self.assertEqual(request.headers["Authorization"], "Bearer tok")

    async def test_missing_token_fails_without_request(self) -> None:
        handler = RecordingHandler()
        with self.assertRaises(UsersApiError) as ctx:
            await _client(handler, token=None).list_users()
        self.assertEqual(ctx.exception.message, "Authentication token not found")
        self.assertEqual(handler.requests, [])

    async def test_server_error_is_retried_once(self) -> None:
        handler = RecordingHandler(
            httpx.Response(500, json={"detail": "Failed to retrieve users"}),
            httpx.Response(200, json=USERS),
        )
        users = await _client(handler).list_users()
        self.assertEqual(users, USERS)
        self.assertEqual(len(handler.requests), 2)

    async def test_connection_error_after_retry_raises(self) -> None:
        handler = RecordingHandler(
            httpx.ConnectError("refused"),
            httpx.ConnectError("refused"),
        )
        with self.assertRaises(UsersApiError):
            await _client(handler).list_users()
        self.assertEqual(len(handler.requests), 2)

    async def test_not_found_is_not_retried(self) -> None:
        handler = RecordingHandler(httpx.Response(404, json={"detail": "User not found"}))
        with self.assertRaises(UsersApiError) as ctx:
            await _client(handler).get_user(9)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("User not found", ctx.exception.message)
        self.assertEqual(len(handler.requests), 1)
        self.assertEqual(handler.requests[0].url.path, "/api/users/9")


class TestUsersApiClientAuth(unittest.IsolatedAsyncioTestCase):
    async def test_login_stores_token(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"token": "new-token"}))
        client = _client(handler, token=None)
        token = await client.login("alice@example.com", "password123")
        self.assertEqual(token, "new-token")
        self.assertEqual(client.token, "new-token")

    async def test_rejected_login_raises_with_status(self) -> None:
        handler = RecordingHandler(httpx.Response(400, json={"detail": "Invalid credentials."}))
        with self.assertRaises(UsersApiError) as ctx:
            await _client(handler, token=None).login("alice@example.com", "nope")
        self.assertEqual(ctx.exception.status_code, 400)


class TestListViewAgainstApp(unittest.IsolatedAsyncioTestCase):
    """Client and list view running against the FastAPI app in-process."""

    async def test_register_then_fetch_into_view(self) -> None:
        app = create_app()
        app.state.user_service.bcrypt_rounds = 4
        client = UsersApiClient(BASE_URL, transport=httpx.ASGITransport(app=app))
        await client.register("Bob Smith", "bob@example.com", "password123")
        await client.register("Alice Johnson", "alice@example.com", "password123")

        view = UserListView(client.list_users, debounce_seconds=0)
        await view.fetch()
        self.assertIsNone(view.error)
        self.assertEqual([u["name"] for u in view.users], ["Alice Johnson", "Bob Smith"])
        self.assertNotIn("password_hash", view.users[0])

    async def test_view_reports_failure_for_missing_token(self) -> None:
        client = UsersApiClient(BASE_URL, transport=httpx.ASGITransport(app=create_app()))
        view = UserListView(client.list_users, debounce_seconds=0)
        await view.fetch()
        self.assertEqual(view.error, "Failed to load users. Please try again later.")
        self.assertEqual(view.users, [])
