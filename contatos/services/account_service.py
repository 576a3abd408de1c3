"""Account maintenance (self-service deletion)."""

from __future__ import annotations

import logging

from contatos.core.security import verify_password
from contatos.repositories.sql_repository import SQLRepository
from contatos.services.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def delete_account(self, user_id: int, password: str) -> None:
        """Remove the user, their sessions and every contact they own."""
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")
        if not verify_password(password, user.password_hash):
            raise InvalidInputError("Senha inválida")
        self.repository.delete_user(user_id)
        logger.info("User %s deleted their account", user_id)
