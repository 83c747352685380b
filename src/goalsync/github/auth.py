"""Token providers for the GitHub API."""

from __future__ import annotations

import logging
import time
from typing import Protocol

import httpx
import jwt

from goalsync.github.exceptions import AuthenticationError
from goalsync.logging import sanitize_for_log

logger = logging.getLogger("goalsync.github.auth")

GITHUB_API_URL = "https://api.github.com"


class TokenProvider(Protocol):
    """Interface for objects that hand out GitHub tokens."""

    async def get_token(self) -> str:
        """Return a token usable as a bearer credential."""
        ...


class StaticTokenAuth:
    """Token provider for a pre-issued token (PAT or injected token)."""

    def __init__(self, token: str) -> None:
        self.token = token

    async def get_token(self) -> str:
        return self.token


class GitHubAppAuth:
    """Exchanges GitHub App credentials for an installation token.

    Installation tokens expire after an hour; a new one is requested for
    every call since each sync is a one-off.
    """

    def __init__(
        self,
        app_id: str,
        installation_id: str,
        private_key: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize App auth.

        Args:
            app_id: GitHub App ID (JWT issuer)
            installation_id: Installation ID of the App
            private_key: PEM encoded RSA private key of the App
            base_url: GitHub REST API base URL (for testing/enterprise)
            timeout: Request timeout in seconds
        """
        self.app_id = app_id
        self.installation_id = installation_id
        self.private_key = private_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport: httpx.AsyncBaseTransport | None = None

    def create_jwt(self, now: int | None = None) -> str:
        """Create the RS256 JWT that authenticates the App itself."""
        if now is None:
            now = int(time.time())
        payload = {
            # Backdated to tolerate clock drift with GitHub
            "iat": now - 60,
            "exp": now + 10 * 60,
            "iss": str(self.app_id),
        }
        try:
            return jwt.encode(payload, self.private_key, algorithm="RS256")
        except (jwt.PyJWTError, ValueError) as e:
            raise AuthenticationError(f"Failed to sign GitHub App JWT: {e}") from e

    async def get_token(self) -> str:
        """Request an installation access token.

        Raises:
            AuthenticationError: If the token exchange fails
        """
        app_jwt = self.create_jwt()
        url = f"{self.base_url}/app/installations/{self.installation_id}/access_tokens"
        async with httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {app_jwt}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(url)
            except httpx.HTTPError as e:
                logger.error("Installation token request failed: %s", e)
                raise AuthenticationError(
                    f"Failed to get installation token: {type(e).__name__}: {e}"
                ) from e

        if response.status_code != 201:
            body = sanitize_for_log(response.text)
            logger.error(
                "Installation token request failed: %d - %s", response.status_code, body
            )
            raise AuthenticationError(
                f"Failed to get installation token: {response.status_code} - {body}"
            )

        try:
            token = response.json().get("token")
        except (ValueError, AttributeError) as e:
            raise AuthenticationError("Installation token response is not a JSON object") from e
        if not token:
            raise AuthenticationError("Installation token missing from GitHub response")
        logger.debug("Obtained installation token for installation %s", self.installation_id)
        return str(token)
