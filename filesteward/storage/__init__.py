"""Storage collaborator layer used by the steward.

``blocking`` and ``nonblocking`` expose the same primitives; both report
outcomes as ``StorageResult`` values instead of raising for OS failures.
"""

from __future__ import annotations

from . import blocking, nonblocking
from .results import StorageResult, attempt

__all__ = [
    "StorageResult",
    "attempt",
    "blocking",
    "nonblocking",
]
