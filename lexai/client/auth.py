"""Login, signup and the bearer token shared by the document endpoints.

The token lives in whatever mapping backs the TokenStore. The dashboard passes
NiceGUI's per-browser user storage so each browser keeps its own login.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

import httpx

from lexai.client.config import ClientConfig, get_client_config
from lexai.client.transport import LexAIClientError, open_client
from lexai.models.schemas import Credentials, TokenResponse

logger = logging.getLogger(__name__)


class AuthenticationError(LexAIClientError):
    """Raised when login fails or a protected call has no valid token."""


class TokenStore:
    """Holds the current access token in a mapping, in memory by default."""

    KEY = "access_token"

    def __init__(self, storage: MutableMapping[str, Any] | None = None) -> None:
        self._storage = storage if storage is not None else {}

    @property
    def token(self) -> str | None:
        return self._storage.get(self.KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def set(self, token: str) -> None:
        self._storage[self.KEY] = token

    def clear(self) -> None:
        self._storage.pop(self.KEY, None)

    def auth_headers(self) -> dict[str, str]:
        """Build the Authorization header.

        Raises:
            AuthenticationError: If no token is stored.
        """
        token = self.token
        if not token:
            raise AuthenticationError("Please login to access documents")
        return {"Authorization": f"Bearer {token}"}


class AuthClient:
    """Client for the /auth endpoints."""

    def __init__(
        self,
        tokens: TokenStore,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._tokens = tokens
        self._config = config or get_client_config()
        self._client = client

    async def login(self, username: str, password: str) -> str:
        """Log in and store the access token.

        Args:
            username: Account username.
            password: Account password.

        Returns:
            The access token.

        Raises:
            AuthenticationError: On rejected credentials, transport failure or
                a response without a token.
        """
        body = Credentials(username=username, password=password).model_dump()

        try:
            async with open_client(self._config, self._client) as client:
                response = await client.post(self._config.url("/auth/login"), json=body)
        except httpx.HTTPError as e:
            logger.error(f"Login request failed: {e}")
            raise AuthenticationError("Login failed. Please try again.") from e

        if not response.is_success:
            logger.warning(f"Login rejected for {username}: HTTP {response.status_code}")
            raise AuthenticationError("Invalid username or password. Please try again.")

        data = TokenResponse.model_validate(response.json())
        if not data.access_token:
            raise AuthenticationError("No access token received")

        self._tokens.set(data.access_token)
        logger.info(f"Logged in as {username}")
        return data.access_token

    async def signup(self, username: str, password: str) -> None:
        """Create an account. Does not log in.

        Raises:
            AuthenticationError: With the backend's message when signup is refused.
        """
        body = Credentials(username=username, password=password).model_dump()

        try:
            async with open_client(self._config, self._client) as client:
                response = await client.post(self._config.url("/auth/signup"), json=body)
        except httpx.HTTPError as e:
            logger.error(f"Signup request failed: {e}")
            raise AuthenticationError("Failed to create account. Please try again.") from e

        if not response.is_success:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.warning(f"Signup rejected for {username}: HTTP {response.status_code}")
            raise AuthenticationError(message or "Signup failed")

        logger.info(f"Account created: {username}")

    def logout(self) -> None:
        self._tokens.clear()
