from __future__ import annotations

from noteboard.core.models.base import AppBaseModel
from noteboard.core.models.user import User  # noqa: TCH001


class SessionUser(AppBaseModel):
    """Identity attached to a session. Never carries the password."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str | None = None

    @classmethod
    def from_user(cls, user: User) -> SessionUser:
        return cls.model_validate(user.model_dump(exclude={"password"}))


class AuthResult(AppBaseModel):
    """Outcome of a login or registration attempt."""

    success: bool
    message: str
    user: SessionUser | None = None
    token: str | None = None
