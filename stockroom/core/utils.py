"""
Shared utility functions for the stockroom service.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    """
    Generate a unique entity ID.

    Returns:
        A UUID4 string like "3f2b8c1e-..."
    """
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)
