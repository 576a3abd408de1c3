#!/usr/bin/env python3
"""
Cadastrar um novo usuario diretamente no banco.

Uso:
  python scripts/add_user.py --email maria@exemplo.com --name "Maria Souza" [--password segredo123]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from contatos.db.create_tables import create_all
from contatos.services.auth_service import AuthService
from contatos.services.errors import ServiceError


def gen_password(length: int = 12) -> str:
    return secrets.token_urlsafe(length)[:length]


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar usuario")
    ap.add_argument("--email", required=True, help="Email de login")
    ap.add_argument("--name", required=True, help="Nome completo")
    ap.add_argument("--password", help="Senha (default: aleatoria de 12 caracteres)")
    args = ap.parse_args()

    create_all()
    password = (args.password or "").strip() or gen_password()
    try:
        user = AuthService().register(args.name, args.email, password)
    except ServiceError as exc:
        raise SystemExit(exc.message)
    print("OK: usuario cadastrado")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")
    if not args.password:
        print(f"  Senha: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
