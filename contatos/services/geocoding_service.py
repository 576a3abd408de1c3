"""HTTP client for the Google Geocoding API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from contatos.core.config import get_settings

GEOCODING_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when an address cannot be turned into coordinates."""


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


class Geocoder(Protocol):
    def resolve(self, address: str) -> Coordinates:
        """Return the coordinates of a postal address or raise GeocodingError."""
        ...


class GoogleMapsGeocoder:
    """Resolves addresses through the Geocoding API. One request per call, no retries."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self._transport = transport

    def resolve(self, address: str) -> Coordinates:
        if not self.api_key:
            raise GeocodingError("Google Maps API key não configurada")
        params = {"address": address, "key": self.api_key}
        try:
            with httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self._transport) as client:
                response = client.get(GEOCODING_API_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding request failed: %s", type(exc).__name__)
            raise GeocodingError(f"Erro ao buscar coordenadas: {type(exc).__name__}") from exc

        if not isinstance(data, dict):
            raise GeocodingError("Resposta de geocodificação inválida")
        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.warning("Geocoding returned status %s with %d result(s)", status, len(results))
            raise GeocodingError("Não foi possível obter coordenadas para o endereço fornecido")
        try:
            location = results[0]["geometry"]["location"]
            coords = Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError("Resposta de geocodificação inválida") from exc
        logger.debug("Geocoding resolved address to %.6f, %.6f", coords.lat, coords.lng)
        return coords
