"""Unit tests for GitHubGraphQLClient."""

import json

import httpx
import pytest

from goalsync.github import GitHubGraphQLClient, GraphQLRequestError, GraphQLResponseError
from goalsync.github.client import GRAPHQL_URL, operation_name


def _client_with(handler) -> GitHubGraphQLClient:
    """Create a client whose HTTP transport is served by `handler`."""
    client = GitHubGraphQLClient(token="ghs_test")
    client._client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        headers={"Authorization": "Bearer ghs_test", "GraphQL-Features": "sub_issues,issue_types"},
    )
    return client


@pytest.mark.unit
class TestOperationName:
    """Tests for operation_name."""

    def test_query_name(self) -> None:
        """Finds the name of a query after fragments."""
        doc = "fragment F on Issue { id }\nquery getSubIssues($id: ID!) { node(id: $id) { id } }"

        assert operation_name(doc) == "getSubIssues"

    def test_mutation_name(self) -> None:
        """Finds the name of a mutation."""
        assert operation_name("mutation addProjectToIssue { x }") == "addProjectToIssue"

    def test_anonymous(self) -> None:
        """Unnamed documents are anonymous."""
        assert operation_name("{ viewer { login } }") == "anonymous"


@pytest.mark.unit
class TestExecute:
    """Tests for execute."""

    @pytest.mark.asyncio
    async def test_returns_data(self) -> None:
        """Posts query and variables and returns the data object."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": {"node": {"id": "I_1"}}})

        client = _client_with(handler)
        data = await client.execute("query getX($id: ID!) { node(id: $id) { id } }", {"id": "I_1"})
        await client.close()

        assert data == {"node": {"id": "I_1"}}
        assert seen["url"] == GRAPHQL_URL
        assert seen["body"]["variables"] == {"id": "I_1"}

    @pytest.mark.asyncio
    async def test_http_error_raises(self) -> None:
        """Non-200 responses raise GraphQLRequestError."""
        client = _client_with(lambda request: httpx.Response(401, text="Bad credentials"))

        with pytest.raises(GraphQLRequestError) as exc_info:
            await client.execute("query q { viewer { login } }")

        assert exc_info.value.status_code == 401
        assert "Bad credentials" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_graphql_errors_raise(self) -> None:
        """An errors array raises GraphQLResponseError with the messages."""
        client = _client_with(
            lambda request: httpx.Response(
                200,
                json={"data": None, "errors": [{"message": "Could not resolve to a node"}]},
            )
        )

        with pytest.raises(GraphQLResponseError) as exc_info:
            await client.execute("query getParentIssue { node { id } }")

        assert "Could not resolve to a node" in str(exc_info.value)
        assert "getParentIssue" in str(exc_info.value)
        assert exc_info.value.errors == [{"message": "Could not resolve to a node"}]

    @pytest.mark.asyncio
    async def test_connection_error_raises_request_error(self) -> None:
        """Transport failures surface as GraphQLRequestError without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = GitHubGraphQLClient(token="ghs_test", transport=httpx.MockTransport(handler))

        with pytest.raises(GraphQLRequestError) as exc_info:
            await client.execute("query getSubIssues { node { id } }")
        await client.close()

        assert exc_info.value.status_code == 0
        assert "getSubIssues" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_non_json_body_raises_response_error(self) -> None:
        """A 200 answer that isn't JSON raises GraphQLResponseError."""
        client = _client_with(
            lambda request: httpx.Response(200, text="<html>Unicorn!</html>")
        )

        with pytest.raises(GraphQLResponseError) as exc_info:
            await client.execute("query getProject { node { id } }")

        assert "not a JSON object" in str(exc_info.value)
        assert exc_info.value.errors == []


@pytest.mark.unit
class TestClientLifecycle:
    """Tests for client creation and closing."""

    def test_client_sends_auth_and_feature_headers(self) -> None:
        """Lazily created client carries the bearer token and feature flags."""
        client = GitHubGraphQLClient(token="ghs_abc")

        headers = client.client.headers

        assert headers["Authorization"] == "Bearer ghs_abc"
        assert headers["GraphQL-Features"] == "sub_issues,issue_types"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        """Leaving the context closes the HTTP client."""
        async with GitHubGraphQLClient(token="t") as client:
            _ = client.client

        assert client._client is None
