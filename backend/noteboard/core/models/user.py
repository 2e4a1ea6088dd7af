from __future__ import annotations

from pydantic import Field

from noteboard.utils.ids import new_id

from .base import RecordModel

MIN_PASSWORD_LENGTH = 6


class User(RecordModel):
    """Registered account as stored in the `users` collection."""

    id: str = Field(default_factory=new_id)
    email: str
    password: str
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str | None = None
