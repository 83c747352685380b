"""Custom exceptions for the GitHub layer."""


class GitHubError(Exception):
    """Base exception for GitHub API errors."""


class GraphQLRequestError(GitHubError):
    """The GraphQL request failed.

    status_code is the HTTP status, or 0 when no response was received.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class GraphQLResponseError(GitHubError):
    """The GraphQL response carried an errors array."""

    def __init__(self, message: str, errors: list[dict]) -> None:
        super().__init__(message)
        self.errors = errors


class IssueNotFoundError(GitHubError):
    """Issue with given node ID does not exist or is not an issue."""


class AuthenticationError(GitHubError):
    """Could not obtain a GitHub token."""
