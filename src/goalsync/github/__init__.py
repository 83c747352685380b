"""GitHub layer - GraphQL access to issues and Projects (V2) boards."""

from goalsync.github.auth import GitHubAppAuth, StaticTokenAuth, TokenProvider
from goalsync.github.client import GitHubGraphQLClient, GraphQLExecutor
from goalsync.github.exceptions import (
    AuthenticationError,
    GitHubError,
    GraphQLRequestError,
    GraphQLResponseError,
    IssueNotFoundError,
)
from goalsync.github.fields import ProjectFieldCatalog
from goalsync.github.issues import IssueTreeClient
from goalsync.github.models import (
    Issue,
    ProjectFields,
    ProjectItem,
    SingleSelectField,
    SingleSelectValue,
)
from goalsync.github.writer import ProjectItemWriter

__all__ = [
    "AuthenticationError",
    "GitHubAppAuth",
    "GitHubError",
    "GitHubGraphQLClient",
    "GraphQLExecutor",
    "GraphQLRequestError",
    "GraphQLResponseError",
    "Issue",
    "IssueNotFoundError",
    "IssueTreeClient",
    "ProjectFieldCatalog",
    "ProjectFields",
    "ProjectItem",
    "ProjectItemWriter",
    "SingleSelectField",
    "SingleSelectValue",
    "StaticTokenAuth",
    "TokenProvider",
]
