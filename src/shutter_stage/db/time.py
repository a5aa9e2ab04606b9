# src/shutter_stage/db/time.py
"""Timestamp defaults for post and audit rows."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    # Audit recency is decided by id, so this only feeds display timestamps.
    return datetime.now(UTC)
