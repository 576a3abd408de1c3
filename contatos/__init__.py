"""Contatos: per-user address book API with CPF validation and geocoding."""

__version__ = "0.1.0"
