"""Shared FastAPI dependencies."""
from __future__ import annotations

from fastapi import Request

from contatos.services.errors import UnauthorizedError
from contatos.services.session_service import current_user_id


def require_user(request: Request) -> int:
    """Resolve the authenticated user id or answer 401."""
    user_id = current_user_id(request)
    if user_id is None:
        raise UnauthorizedError("Usuário não autenticado")
    return user_id
