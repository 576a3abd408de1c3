"""SQLAlchemy engine, session factory and models for users, sessions and contacts."""

from .session import Base, get_engine, get_session

__all__ = ["Base", "get_engine", "get_session"]
