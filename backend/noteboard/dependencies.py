from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from noteboard.config import settings
from noteboard.core.services.auth_service import AuthService
from noteboard.core.services.folder_service import FolderService
from noteboard.core.services.note_service import NoteService
from noteboard.core.services.search_service import SearchService
from noteboard.core.services.tag_service import TagService
from noteboard.core.services.team_member_service import TeamMemberService
from noteboard.core.services.team_service import TeamService
from noteboard.utils.logging import get_logger

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

if TYPE_CHECKING:
    from noteboard.core.events import ChangeBus
    from noteboard.core.repositories.record_store import RecordStore
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.session import SessionHolder


# In-memory rate limiting
_login_attempts: dict[str, list[float]] = {}


def _is_rate_limited(identifier: str) -> bool:
    """Check if the identifier is rate limited."""
    if not settings.enable_rate_limiting:
        return False
    now = time.time()
    window_start = now - settings.login_attempt_window
    attempts = [a for a in _login_attempts.get(identifier, []) if a > window_start]
    if len(attempts) >= settings.max_login_attempts:
        _login_attempts[identifier] = attempts
        return True
    attempts.append(now)
    _login_attempts[identifier] = attempts
    return False


def rate_limit_by_ip(request: Request, operation: str = "default") -> None:
    """Reject the request with 429 once an IP exceeds its attempts for `operation`."""
    client_ip = request.client.host if request.client else "unknown"
    identifier = f"{operation}:{client_ip}"
    if not _is_rate_limited(identifier):
        return

    logger.warning(f"Rate limited {operation} attempt", extra={"ip": client_ip})
    attempts = _login_attempts.get(identifier, [])
    now = time.time()
    earliest_attempt = min(attempts) if attempts else now
    seconds_until_reset = max(1, math.ceil(settings.login_attempt_window - (now - earliest_attempt)))
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many {operation} attempts. Please try again later.",
        headers={
            "Retry-After": str(seconds_until_reset),
            "RateLimit-Limit": str(settings.max_login_attempts),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(seconds_until_reset),
        },
    )


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_session_holder(request: Request) -> SessionHolder:
    return request.app.state.sessions


def get_change_bus(request: Request) -> ChangeBus:
    return request.app.state.change_bus


def get_session_token(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> str | None:
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


def get_optional_user(
    token: str | None = Depends(get_session_token),
    sessions: SessionHolder = Depends(get_session_holder),
) -> SessionUser | None:
    """Resolve the bearer token at request time; a closed session yields None."""
    return sessions.resolve(token)


def get_current_user(user: SessionUser | None = Depends(get_optional_user)) -> SessionUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_auth_service(
    store: RecordStore = Depends(get_record_store),
    sessions: SessionHolder = Depends(get_session_holder),
) -> AuthService:
    return AuthService(store, sessions)


def get_note_service(
    store: RecordStore = Depends(get_record_store),
    bus: ChangeBus = Depends(get_change_bus),
) -> NoteService:
    return NoteService(store, bus)


def get_folder_service(
    store: RecordStore = Depends(get_record_store),
    bus: ChangeBus = Depends(get_change_bus),
) -> FolderService:
    return FolderService(store, bus)


def get_tag_service(
    store: RecordStore = Depends(get_record_store),
    bus: ChangeBus = Depends(get_change_bus),
) -> TagService:
    return TagService(store, bus)


def get_team_service(
    store: RecordStore = Depends(get_record_store),
    bus: ChangeBus = Depends(get_change_bus),
) -> TeamService:
    return TeamService(store, bus)


def get_team_member_service(store: RecordStore = Depends(get_record_store)) -> TeamMemberService:
    return TeamMemberService(store)


def get_search_service(
    notes: NoteService = Depends(get_note_service),
    tags: TagService = Depends(get_tag_service),
    teams: TeamService = Depends(get_team_service),
    members: TeamMemberService = Depends(get_team_member_service),
) -> SearchService:
    return SearchService(notes, tags, teams, members)
