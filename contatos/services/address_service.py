"""
Postal-code lookups through ViaCEP.

Lookup by CEP is strict (unknown CEP -> NotFoundError). Street search is
best-effort: any upstream failure yields an empty list.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

from contatos.core.config import get_settings
from contatos.services.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

CEP_RE = re.compile(r"[0-9]{8}")


@dataclass
class AddressLookup:
    postal_code: str
    street: str
    complement: str
    neighborhood: str
    city: str
    region: str
    ibge: str = ""
    ddd: str = ""

    @classmethod
    def from_viacep(cls, payload: dict) -> "AddressLookup":
        return cls(
            postal_code=(payload.get("cep") or "").replace("-", ""),
            street=payload.get("logradouro") or "",
            complement=payload.get("complemento") or "",
            neighborhood=payload.get("bairro") or "",
            city=payload.get("localidade") or "",
            region=payload.get("uf") or "",
            ibge=payload.get("ibge") or "",
            ddd=payload.get("ddd") or "",
        )


class AddressService:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.viacep_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.address_lookup_timeout_seconds
        self._transport = transport

    def _get_json(self, path: str):
        with httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self._transport) as client:
            response = client.get(f"{self.base_url}/{path}/json/")
            response.raise_for_status()
            return response.json()

    def lookup(self, cep: str) -> AddressLookup:
        cep_value = (cep or "").strip().replace("-", "")
        if not CEP_RE.fullmatch(cep_value):
            raise InvalidInputError("CEP deve conter 8 dígitos")
        try:
            payload = self._get_json(cep_value)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("CEP lookup failed: %s", type(exc).__name__)
            raise NotFoundError("CEP não encontrado") from exc
        # ViaCEP answers 200 {"erro": true} for well-formed but unknown CEPs
        if not isinstance(payload, dict) or payload.get("erro") or not payload.get("cep"):
            raise NotFoundError("CEP não encontrado")
        return AddressLookup.from_viacep(payload)

    def search(self, uf: str, city: str, street: str) -> list[AddressLookup]:
        uf_value = (uf or "").strip().upper()
        city_value = (city or "").strip()
        street_value = (street or "").strip()
        if len(uf_value) != 2 or not city_value or len(street_value) < 3:
            return []
        path = "/".join(quote(part, safe="") for part in (uf_value, city_value, street_value))
        try:
            payload = self._get_json(path)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Address search failed: %s", type(exc).__name__)
            return []
        if not isinstance(payload, list):
            return []
        return [AddressLookup.from_viacep(item) for item in payload if isinstance(item, dict)]
