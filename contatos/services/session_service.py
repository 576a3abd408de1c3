"""Session helpers (issue tokens, resolve bearer tokens, revoke)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request

from contatos.core.config import get_settings
from contatos.core.security import new_session_token
from contatos.repositories.sql_repository import SQLRepository

_repo = SQLRepository()


def issue_session(user_id: int) -> str:
    """Create a new session token and persist it in the SQL store."""
    token = new_session_token()
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    _repo.create_user_session(token, user_id, expires_at)
    return token


def bearer_token(request: Request) -> Optional[str]:
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    header = request.headers.get("authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def resolve_session(token: Optional[str]) -> Optional[int]:
    """Return the user id bound to a live session token, if any."""
    if not token:
        return None
    entity = _repo.get_user_session(token)
    if not entity:
        return None
    expires_at = entity.expires_at
    if expires_at is not None and expires_at.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC.
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at is not None and expires_at < datetime.now(timezone.utc):
        _repo.delete_user_session(token)
        return None
    return entity.user_id


def current_user_id(request: Request) -> Optional[int]:
    return resolve_session(bearer_token(request))


def delete_session(token: str) -> None:
    """Remove a session token from the persistent store."""
    if not token:
        return
    _repo.delete_user_session(token)
