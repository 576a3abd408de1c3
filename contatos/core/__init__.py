"""
Core utilities shared across the Contatos API.

This package hosts configuration helpers, logging setup, password hashing and
rate limit helpers. Services and routers depend on these primitives instead of
reading environment variables or configuring handlers themselves.
"""
