from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote contatos seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from contatos.core import config as core_config  # noqa: E402
from contatos.core.rate_limiter import reset_rate_limits  # noqa: E402
from contatos.db import create_tables  # noqa: E402
from contatos.db import session as db_session  # noqa: E402
from contatos.services.geocoding_service import Coordinates, GeocodingError  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporário e reseta caches de settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    reset_rate_limits()

    engine = db_session.get_engine()
    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()


class FakeGeocoder:
    """Records every address and answers with fixed coordinates (or fails)."""

    def __init__(self, lat: float = -23.561414, lng: float = -46.656071, fail: bool = False):
        self.coords = Coordinates(lat=lat, lng=lng)
        self.fail = fail
        self.calls: list[str] = []

    def resolve(self, address: str) -> Coordinates:
        self.calls.append(address)
        if self.fail:
            raise GeocodingError("Google Maps API key não configurada")
        return self.coords


@pytest.fixture()
def geocoder():
    return FakeGeocoder()
