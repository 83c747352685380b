"""Sync engine - keeps board fields in line with the issue hierarchy."""

from goalsync.sync.models import AncestorClassification, IssueType, SyncResult, SyncStatus
from goalsync.sync.orchestrator import SyncOrchestrator
from goalsync.sync.propagator import DescendantPropagator
from goalsync.sync.resolver import AncestorResolver
from goalsync.sync.teams import DEFAULT_TEAM_MAP, TeamResolver

__all__ = [
    "DEFAULT_TEAM_MAP",
    "AncestorClassification",
    "AncestorResolver",
    "DescendantPropagator",
    "IssueType",
    "SyncOrchestrator",
    "SyncResult",
    "SyncStatus",
    "TeamResolver",
]
