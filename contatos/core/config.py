"""
Configuration helpers for the Contatos backend.

Routers/services read settings through get_settings() instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    google_maps_api_key: str
    geocoding_timeout_seconds: float
    viacep_base_url: str
    address_lookup_timeout_seconds: float
    session_ttl_seconds: int
    cors_origins: tuple[str, ...]
    log_level: str
    default_page_size: int
    max_page_size: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(item.strip().rstrip("/") for item in value.split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./contatos.db"),
        google_maps_api_key=(os.getenv("GOOGLE_MAPS_API_KEY") or "").strip(),
        geocoding_timeout_seconds=_float(os.getenv("GEOCODING_TIMEOUT_SECONDS", "10"), 10.0),
        viacep_base_url=os.getenv("VIACEP_BASE_URL", "https://viacep.com.br/ws").rstrip("/"),
        address_lookup_timeout_seconds=_float(os.getenv("ADDRESS_LOOKUP_TIMEOUT_SECONDS", "10"), 10.0),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        default_page_size=_int(os.getenv("DEFAULT_PAGE_SIZE", "10"), 10),
        max_page_size=_int(os.getenv("MAX_PAGE_SIZE", "100"), 100),
    )
