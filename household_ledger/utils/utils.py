"""Generic project helpers."""

from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4


def get_project_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).resolve().parents[2]


def utc_now() -> datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Return a fresh entity identifier."""
    return uuid4().hex


__all__ = ["get_project_root", "utc_now", "new_id"]
