"""goalsync - keeps GitHub Project fields in sync with the issue hierarchy."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
