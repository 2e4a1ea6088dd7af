from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Return a fresh record identifier (UUID4, string form)."""
    return str(uuid4())
