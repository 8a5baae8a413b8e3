"""Snapshot serialization for change-audit rows."""

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


def _default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def serialize_snapshot(entity) -> str | None:
    """Serialize an entity dataclass into a JSON snapshot.

    Args:
        entity: Dataclass instance, mapping, or None.

    Returns:
        str | None: Sorted-key JSON document, or None for a missing entity.
    """
    if entity is None:
        return None
    payload = asdict(entity) if is_dataclass(entity) else dict(entity)
    return json.dumps(payload, default=_default, sort_keys=True)


__all__ = ["serialize_snapshot"]
