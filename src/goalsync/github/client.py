"""GitHubGraphQLClient - executes GraphQL documents against the GitHub API."""

from __future__ import annotations

import logging
import re
from typing import Any, Protocol

import httpx

from goalsync.github.exceptions import GraphQLRequestError, GraphQLResponseError
from goalsync.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("goalsync.github")

GRAPHQL_URL = "https://api.github.com/graphql"

# Sub-issues and issue types are still behind feature flags on the GraphQL API
GRAPHQL_FEATURES = "sub_issues,issue_types"

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")


def operation_name(query: str) -> str:
    """Return the name of the first operation in a GraphQL document."""
    match = _OPERATION_RE.search(query)
    return match.group(2) if match else "anonymous"


class GraphQLExecutor(Protocol):
    """Interface for anything that can run a GraphQL document."""

    async def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run the document and return its data object."""
        ...


class GitHubGraphQLClient:
    """Async GraphQL client for the GitHub API.

    No retries are attempted: any failure surfaces to the caller.
    """

    def __init__(
        self,
        token: str,
        base_url: str = GRAPHQL_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token (PAT or App installation token)
            base_url: GitHub GraphQL API URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client for GraphQL API."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                    "GraphQL-Features": GRAPHQL_FEATURES,
                },
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubGraphQLClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query or mutation.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response's data object

        Raises:
            GraphQLRequestError: If the request fails in transport or the
                endpoint answers with a non-200 status
            GraphQLResponseError: If the response is not a JSON object or
                carries GraphQL errors
        """
        name = operation_name(query)
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("GraphQL %s %s", name, variables or {})
        try:
            response = await self.client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            logger.error("GraphQL %s request failed: %s", name, e)
            raise GraphQLRequestError(
                f"GraphQL request {name} failed: {type(e).__name__}: {e}", status_code=0
            ) from e

        if response.status_code != 200:
            body = sanitize_for_log(truncate_output(response.text))
            logger.error("GraphQL %s failed with HTTP %d: %s", name, response.status_code, body)
            raise GraphQLRequestError(
                f"GraphQL request {name} failed: {response.status_code} - {body}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            body = sanitize_for_log(truncate_output(response.text, max_length=200))
            logger.error("GraphQL %s returned a non-JSON body: %s", name, body)
            raise GraphQLResponseError(
                f"GraphQL response to {name} is not a JSON object: {body}", errors=[]
            )
        if data.get("errors"):
            errors = data["errors"]
            messages = "; ".join(str(err.get("message", err)) for err in errors)
            logger.error("GraphQL %s returned errors: %s", name, messages)
            raise GraphQLResponseError(f"GraphQL errors in {name}: {messages}", errors=errors)

        return dict(data.get("data") or {})
