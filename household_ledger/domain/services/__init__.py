"""Domain services package."""

from .allocation import Allocation, allocation_weights, compute_allocations
from .serialization import serialize_snapshot
from .statistics import compute_statistics, month_key
from .validation import (
    coerce_enum,
    optional_positive_amount,
    require_positive_amount,
    require_text,
)

__all__ = [
    "Allocation",
    "allocation_weights",
    "compute_allocations",
    "serialize_snapshot",
    "compute_statistics",
    "month_key",
    "coerce_enum",
    "optional_positive_amount",
    "require_positive_amount",
    "require_text",
]
