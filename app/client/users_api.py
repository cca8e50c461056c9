"""HTTP client for the users API, used as the data source of the users list view."""

import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class UsersApiError(Exception):
    """Raised when the users API cannot be reached or answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UsersApiClient:
    """
    Thin async client over /auth and /users.

    Reads are retried `retries` times on transport errors and 5xx responses.
    register() and login() store the returned token for later reads.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float | None = None,
        retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.USERS_API_BASE_URL).rstrip("/")
        self.token = token
        self.timeout = httpx.Timeout(timeout or settings.USERS_API_TIMEOUT_SEC)
        self.retries = retries
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    def _auth_headers(self) -> dict[str, str]:
        if not self.token:
            raise UsersApiError("Authentication token not found")
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

    async def _get(self, path: str) -> Any:
        headers = self._auth_headers()
        attempts = self.retries + 1
        async with self._client() as client:
            for attempt in range(1, attempts + 1):
                try:
                    resp = await client.get(path, headers=headers)
                except httpx.HTTPError as e:
                    if attempt < attempts:
                        logger.info("Users API request failed; retrying", extra={"path": path})
                        continue
                    raise UsersApiError(f"Users API request failed: {e}") from e
                if resp.status_code >= 500 and attempt < attempts:
                    logger.info(
                        "Users API returned server error; retrying",
                        extra={"path": path, "status_code": resp.status_code},
                    )
                    continue
                return self._parse(resp)
        raise UsersApiError("Users API request failed")

    @staticmethod
    def _parse(resp: httpx.Response) -> Any:
        if resp.status_code >= 400:
            raise UsersApiError(
                f"Error Code: {resp.status_code}\nMessage: {_error_detail(resp)}",
                resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise UsersApiError("Users API response body is not valid JSON.", resp.status_code) from e

    async def _post_for_token(self, path: str, payload: dict[str, str]) -> str:
        try:
            async with self._client() as client:
                resp = await client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise UsersApiError(f"Users API request failed: {e}") from e
        body = self._parse(resp)
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise UsersApiError("Users API response missing 'token' field.", resp.status_code)
        self.token = token
        return token

    async def register(self, name: str, email: str, password: str) -> str:
        return await self._post_for_token(
            "/auth/register", {"name": name, "email": email, "password": password}
        )

    async def login(self, email: str, password: str) -> str:
        return await self._post_for_token("/auth/login", {"email": email, "password": password})

    async def list_users(self) -> list[dict[str, Any]]:
        return await self._get("/users")

    async def get_user(self, user_id: int) -> dict[str, Any]:
        return await self._get(f"/users/{user_id}")


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason_phrase
    if isinstance(body, dict) and body.get("detail") is not None:
        return str(body["detail"])
    return str(body)[:200]
