"""Webhook signature verification."""

from __future__ import annotations

import hashlib
import hmac


def compute_signature(secret: str, body: bytes) -> str:
    """Return the X-Hub-Signature-256 value GitHub sends for a body."""
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check a delivery's X-Hub-Signature-256 header against the raw body."""
    if not signature:
        return False
    return hmac.compare_digest(signature, compute_signature(secret, body))
