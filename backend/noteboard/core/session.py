from __future__ import annotations

import json
import secrets
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from noteboard.core.schemas.auth import SessionUser
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    SessionListener = Callable[[str, SessionUser], None]

logger = get_logger(__name__)

LOGIN = "login"
LOGOUT = "logout"


class SessionHolder:
    """Maps opaque session tokens to the signed-in user.

    Sessions are written to `storage_path` (when given) after every change and
    restored from it on construction, so a restart does not sign users out.
    Listeners registered with `subscribe` are called with `(event, user)` on
    login and logout.
    """

    def __init__(self, storage_path: str | Path | None = None) -> None:
        self._path = Path(storage_path) if storage_path else None
        self._sessions: dict[str, SessionUser] = {}
        self._listeners: list[SessionListener] = []
        self._load()

    def open(self, user: SessionUser) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user
        self._save()
        self._notify(LOGIN, user)
        return token

    def resolve(self, token: str | None) -> SessionUser | None:
        if not token:
            return None
        return self._sessions.get(token)

    def close(self, token: str | None) -> SessionUser | None:
        user = self._sessions.pop(token, None) if token else None
        if user is not None:
            self._save()
            self._notify(LOGOUT, user)
        return user

    def refresh(self, user: SessionUser) -> None:
        """Replace the cached identity in every session of `user.id`."""
        changed = False
        for token, current in self._sessions.items():
            if current.id == user.id:
                self._sessions[token] = user
                changed = True
        if changed:
            self._save()

    def close_user(self, user_id: str) -> int:
        """End every session of a user; returns how many were closed."""
        tokens = [t for t, u in self._sessions.items() if u.id == user_id]
        for token in tokens:
            self.close(token)
        return len(tokens)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def __len__(self) -> int:
        return len(self._sessions)

    def _notify(self, event: str, user: SessionUser) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, user)
            except Exception:
                logger.exception("Session listener failed", extra={"event": event})

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            self._sessions = {
                token: SessionUser.model_validate(data) for token, data in raw.items()
            }
        except (OSError, ValueError, AttributeError, ValidationError) as err:
            logger.error("Error parsing stored sessions: %s", err)
            self._sessions = {}
            self._path.unlink(missing_ok=True)
            return
        logger.info("Restored sessions", extra={"count": len(self._sessions)})

    def _save(self) -> None:
        if self._path is None:
            return
        payload = {token: user.model_dump() for token, user in self._sessions.items()}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload), encoding="utf-8")
