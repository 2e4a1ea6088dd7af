from __future__ import annotations

from typing import TYPE_CHECKING

from noteboard.core.errors import AuthError, BackendError
from noteboard.core.models.user import User
from noteboard.core.resources import Collection
from noteboard.core.schemas.auth import AuthResult, SessionUser
from noteboard.core.services.base import require_user
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from noteboard.api.v1.schemas.auth import ProfileUpdate, RegisterRequest
    from noteboard.core.repositories.record_store import RecordStore
    from noteboard.core.session import SessionHolder


logger = get_logger(__name__)

USERS = Collection.USERS.value


def normalize_email(email: str) -> str:
    return email.lower().strip()


class AuthService:
    """Credential checks against the `users` collection plus session bookkeeping."""

    def __init__(self, store: RecordStore, sessions: SessionHolder) -> None:
        self._store = store
        self._sessions = sessions

    async def login(self, email: str, password: str) -> AuthResult:
        """Sign in by case-insensitive email and exact password.

        A wrong password is a failed result, not an error; only store failures raise.
        """
        email = normalize_email(email)
        if not email or not password:
            return AuthResult(success=False, message="Email and password are required")

        try:
            rows = await self._users_with_email(email)
        except BackendError as err:
            logger.warning("Sign in failed", extra={"email": email, "error_type": type(err).__name__})
            raise AuthError("Login failed. Please try again.") from err

        matches = [
            user for user in (User.model_validate(r) for r in rows)
            if user.password == password
        ]
        if len(matches) != 1:
            if len(matches) > 1:
                logger.error("Duplicate accounts share one email", extra={"email": email})
            return AuthResult(success=False, message="Invalid email or password")

        session_user = SessionUser.from_user(matches[0])
        token = self._sessions.open(session_user)
        logger.info("User signed in successfully", extra={"user_id": session_user.id})
        return AuthResult(success=True, message="Login successful", user=session_user, token=token)

    async def register(self, payload: RegisterRequest) -> AuthResult:
        """Create an account if the email is free, then sign it in."""
        email = normalize_email(payload.email)
        try:
            if await self._email_taken(email):
                return AuthResult(success=False, message="Email already exists")

            user = User(
                email=email,
                password=payload.password,
                first_name=payload.first_name.strip(),
                last_name=payload.last_name.strip(),
                date_of_birth=payload.date_of_birth,
            )
            row = await self._store.create(USERS, user.to_row())
        except BackendError as err:
            logger.warning("Sign up failed", extra={"email": email, "error_type": type(err).__name__})
            raise AuthError("Registration failed. Please try again.") from err

        session_user = SessionUser.from_user(User.model_validate(row))
        token = self._sessions.open(session_user)
        logger.info("User signed up successfully", extra={"user_id": session_user.id})
        return AuthResult(success=True, message="Registration successful", user=session_user, token=token)

    def logout(self, token: str | None) -> None:
        user = self._sessions.close(token)
        if user is not None:
            logger.info("User signed out successfully", extra={"user_id": user.id})

    async def update_profile(
        self, user: SessionUser | None, changes: ProfileUpdate, token: str | None = None
    ) -> AuthResult:
        user = require_user(user)
        data = changes.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)
        try:
            if "email" in data:
                data["email"] = normalize_email(data["email"])
                if data["email"] != user.email and await self._email_taken(data["email"]):
                    return AuthResult(success=False, message="Email already exists")
            row = await self._store.update(USERS, user.id, data) if data else await self._store.get(USERS, user.id)
        except BackendError as err:
            logger.error("Profile update error", extra={"user_id": user.id, "error": str(err)})
            raise AuthError("Failed to update profile.") from err
        if row is None:
            raise AuthError("Failed to update profile.")

        updated = SessionUser.from_user(User.model_validate(row))
        self._sessions.refresh(updated)
        return AuthResult(success=True, message="Profile updated successfully", user=updated, token=token)

    async def change_password(self, user: SessionUser | None, new_password: str) -> AuthResult:
        user = require_user(user)
        try:
            row = await self._store.update(USERS, user.id, {"password": new_password})
        except BackendError as err:
            logger.error("Password change error", extra={"user_id": user.id, "error": str(err)})
            raise AuthError("Failed to change password.") from err
        if row is None:
            raise AuthError("Failed to change password.")
        return AuthResult(success=True, message="Password changed successfully", user=user)

    async def delete_account(self, user: SessionUser | None) -> AuthResult:
        """Delete the account and end all of its sessions."""
        user = require_user(user)
        try:
            deleted = await self._store.delete(USERS, user.id)
        except BackendError as err:
            logger.error("Account deletion error", extra={"user_id": user.id, "error": str(err)})
            raise AuthError("Failed to delete account.") from err
        if not deleted:
            raise AuthError("Failed to delete account.")
        self._sessions.close_user(user.id)
        return AuthResult(success=True, message="Account deleted successfully")

    async def _users_with_email(self, email: str) -> list[dict]:
        """Rows whose normalized email equals `email`."""
        rows = await self._store.list(USERS, filters={"email": email})
        matches = [r for r in rows if normalize_email(str(r.get("email", ""))) == email]
        if matches:
            return matches
        # Exact-match filters miss rows stored with mixed-case emails
        rows = await self._store.list(USERS)
        return [r for r in rows if normalize_email(str(r.get("email", ""))) == email]

    async def _email_taken(self, email: str) -> bool:
        return bool(await self._users_with_email(email))
