"""Pure domain helpers (CPF checksum, contact value objects)."""

from .cpf import is_valid_cpf

__all__ = ["is_valid_cpf"]
