"""Webhook API for goalsync."""

from goalsync.api.app import AppSyncRunner, create_app
from goalsync.api.models import WebhookResponse
from goalsync.api.signature import compute_signature, verify_signature

__all__ = [
    "AppSyncRunner",
    "WebhookResponse",
    "compute_signature",
    "create_app",
    "verify_signature",
]
