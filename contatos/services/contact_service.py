"""
Contact use cases: list/search, get, create, update, delete.

Every operation receives the owner id explicitly; nothing here reads the
request or the session token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError

from contatos.core.config import get_settings
from contatos.db.models import Contact
from contatos.domain.contacts import (
    SORT_ALIASES,
    SORTABLE_FIELDS,
    AccessDenied,
    ContactData,
    ContactMissing,
    ContactView,
    CoordinateSource,
    Page,
    PageRequest,
    Resolved,
    Supplied,
    Unresolved,
    check_access,
)
from contatos.domain.cpf import is_valid_cpf
from contatos.repositories.sql_repository import SQLRepository
from contatos.services.errors import (
    ConflictError,
    ExternalDependencyError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from contatos.services.geocoding_service import Geocoder, GeocodingError, GoogleMapsGeocoder

logger = logging.getLogger(__name__)

CPF_INVALID = "CPF inválido"
CPF_TAKEN = "CPF já cadastrado"
GEOCODING_FAILED = (
    "Não foi possível obter coordenadas para o endereço fornecido. "
    "Configure a chave da API do Google Maps ou forneça as coordenadas manualmente."
)


class ContactService:
    """Enforces the contact invariants and mediates between store and geocoder."""

    def __init__(self, repository: Optional[SQLRepository] = None, geocoder: Optional[Geocoder] = None) -> None:
        self.repository = repository or SQLRepository()
        self.geocoder = geocoder or GoogleMapsGeocoder()

    # -------------------------------------- helpers --------------------------------------
    def page_request(self, page: int = 0, size: int | None = None, sort: str = "name,asc") -> PageRequest:
        """Build a PageRequest from API-style values ("field,direction")."""
        settings = get_settings()
        if page < 0:
            raise InvalidInputError("Página deve ser maior ou igual a zero")
        size = settings.default_page_size if size is None else size
        if size < 1 or size > settings.max_page_size:
            raise InvalidInputError(f"Tamanho da página deve estar entre 1 e {settings.max_page_size}")
        parts = [p.strip() for p in (sort or "name").split(",")]
        field_name = _snake_case(parts[0] or "name")
        field_name = SORT_ALIASES.get(field_name, field_name)
        if field_name not in SORTABLE_FIELDS:
            raise InvalidInputError(f"Campo de ordenação inválido: {parts[0]}")
        descending = len(parts) > 1 and parts[1].lower() == "desc"
        return PageRequest(page=page, size=size, sort_field=field_name, descending=descending)

    def _load_owned(self, owner_id: int, contact_id: int) -> Contact:
        access = check_access(self.repository.get_contact(contact_id), contact_id, owner_id)
        if isinstance(access, ContactMissing):
            raise NotFoundError("Contato não encontrado")
        if isinstance(access, AccessDenied):
            raise ForbiddenError("Acesso negado")
        return access.contact

    def _ensure_cpf(self, owner_id: int, cpf: str, *, exclude_id: int | None = None) -> None:
        if not is_valid_cpf(cpf):
            raise InvalidInputError(CPF_INVALID)
        if self.repository.contact_cpf_exists(owner_id, cpf, exclude_id=exclude_id):
            raise ConflictError(CPF_TAKEN)

    def _coordinate_source(self, data: ContactData, *, address_changed: bool = False) -> CoordinateSource:
        if data.has_coordinates() and not address_changed:
            return Supplied(lat=data.latitude, lng=data.longitude)
        try:
            coords = self.geocoder.resolve(data.full_address())
        except GeocodingError as exc:
            return Unresolved(reason=str(exc))
        return Resolved(lat=coords.lat, lng=coords.lng)

    def _coordinates(self, data: ContactData, *, address_changed: bool = False) -> tuple[float, float]:
        source = self._coordinate_source(data, address_changed=address_changed)
        if isinstance(source, Unresolved):
            logger.warning("Coordinates unresolved: %s", source.reason)
            raise ExternalDependencyError(GEOCODING_FAILED)
        return source.lat, source.lng

    def _persist(self, contact: Contact) -> Contact:
        try:
            return self.repository.save_contact(contact)
        except IntegrityError as exc:
            # A concurrent request registered the same (owner, cpf) pair.
            raise ConflictError(CPF_TAKEN) from exc

    # -------------------------------------- queries --------------------------------------
    def list_contacts(
        self,
        owner_id: int,
        search: str | None = None,
        page_request: PageRequest | None = None,
    ) -> Page[ContactView]:
        page_request = page_request or PageRequest(size=get_settings().default_page_size)
        term = (search or "").strip()
        if term:
            page = self.repository.search_contacts_by_owner(owner_id, term, page_request)
        else:
            page = self.repository.find_contacts_by_owner(owner_id, page_request)
        return page.map(ContactView.from_entity)

    def get_contact(self, owner_id: int, contact_id: int) -> ContactView:
        return ContactView.from_entity(self._load_owned(owner_id, contact_id))

    def cpf_exists(self, owner_id: int, cpf: str) -> bool:
        if not is_valid_cpf(cpf):
            return False
        return self.repository.contact_cpf_exists(owner_id, cpf)

    # -------------------------------------- mutations --------------------------------------
    def create_contact(self, owner_id: int, data: ContactData) -> ContactView:
        self._ensure_cpf(owner_id, data.cpf)
        latitude, longitude = self._coordinates(data)
        now = datetime.now(timezone.utc)
        contact = Contact(
            owner_id=owner_id,
            name=data.name,
            cpf=data.cpf,
            phone=data.phone,
            postal_code=data.postal_code,
            street=data.street,
            number=data.number,
            complement=data.complement,
            neighborhood=data.neighborhood,
            city=data.city,
            region=data.region,
            latitude=latitude,
            longitude=longitude,
            created_at=now,
            updated_at=now,
        )
        contact = self._persist(contact)
        logger.info("Contact %s created for user %s", contact.id, owner_id)
        return ContactView.from_entity(contact)

    def update_contact(self, owner_id: int, contact_id: int, data: ContactData) -> ContactView:
        contact = self._load_owned(owner_id, contact_id)
        self._ensure_cpf(owner_id, data.cpf, exclude_id=contact.id)
        latitude, longitude = self._coordinates(data, address_changed=data.address_differs(contact))

        contact.name = data.name
        contact.cpf = data.cpf
        contact.phone = data.phone
        contact.postal_code = data.postal_code
        contact.street = data.street
        contact.number = data.number
        contact.complement = data.complement
        contact.neighborhood = data.neighborhood
        contact.city = data.city
        contact.region = data.region
        contact.latitude = latitude
        contact.longitude = longitude
        contact.updated_at = datetime.now(timezone.utc)
        contact = self._persist(contact)
        logger.info("Contact %s updated by user %s", contact.id, owner_id)
        return ContactView.from_entity(contact)

    def delete_contact(self, owner_id: int, contact_id: int) -> None:
        contact = self._load_owned(owner_id, contact_id)
        self.repository.delete_contact(contact)
        logger.info("Contact %s deleted by user %s", contact_id, owner_id)


def _snake_case(value: str) -> str:
    """Accept camelCase sort fields from API clients ("createdAt" -> "created_at")."""
    out = []
    for ch in value:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")
