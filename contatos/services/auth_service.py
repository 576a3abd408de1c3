"""
Authentication and identity related use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from contatos.core.security import hash_password, needs_rehash, verify_password
from contatos.repositories.sql_repository import SQLRepository
from contatos.services.errors import ConflictError, InvalidInputError, UnauthorizedError
from contatos.services.session_service import delete_session, issue_session

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class InvalidCredentialsError(UnauthorizedError):
    pass


@dataclass
class UserView:
    id: int
    name: str
    email: str


@dataclass
class LoginResult:
    token: str
    user: UserView
    token_type: str = "Bearer"


@dataclass
class AuthService:
    """Handles registration, login and logout."""

    repository: Optional[SQLRepository] = None

    def __post_init__(self):
        self.repository = self.repository or SQLRepository()

    def _normalize_email(self, email: str) -> str:
        return (email or "").strip().lower()

    def email_exists(self, email: str) -> bool:
        raw = self._normalize_email(email)
        if not raw:
            return False
        return self.repository.email_exists(raw)

    # -------------------------------------- registro --------------------------------------
    def register(self, name: str, email: str, password: str) -> UserView:
        raw_name = (name or "").strip()
        if not raw_name:
            raise InvalidInputError("Nome obrigatorio")
        raw_email = self._normalize_email(email)
        if not raw_email:
            raise InvalidInputError("Email obrigatorio")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(f"Senha muito curta. Use no minimo {MIN_PASSWORD_LENGTH} caracteres")
        if self.repository.email_exists(raw_email):
            raise ConflictError("Email já cadastrado")
        user = self.repository.create_user(raw_name, raw_email, hash_password(password))
        logger.info("User %s registered", user.id)
        return UserView(id=user.id, name=user.name, email=user.email)

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str) -> LoginResult:
        raw_email = self._normalize_email(email)
        if not raw_email:
            raise InvalidCredentialsError("Credenciais invalidas")
        user = self.repository.get_user_by_email(raw_email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Credenciais invalidas")
        if needs_rehash(user.password_hash):
            self.repository.update_user_password(user.id, hash_password(password))
        token = issue_session(user.id)
        return LoginResult(token=token, user=UserView(id=user.id, name=user.name, email=user.email))

    def logout(self, session_token: Optional[str]) -> None:
        if not session_token:
            return
        delete_session(session_token)
