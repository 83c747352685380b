"""Shared pytest fixtures and configuration."""

import pytest

from fakes import PROJECT_ID, FakeGitHub


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: tests against the real GitHub API (local only)")


# Shared fixtures


@pytest.fixture
def github() -> FakeGitHub:
    """In-memory GitHub with one project board."""
    return FakeGitHub(project_id=PROJECT_ID)


@pytest.fixture
def project_id() -> str:
    """Node ID of the fake project board."""
    return PROJECT_ID
