"""Value objects and tagged results used by the contact use cases."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")

ADDRESS_FIELDS = ("street", "number", "neighborhood", "city", "region", "postal_code")
SORT_ALIASES = {"taxpayer_id": "cpf", "cep": "postal_code"}
SORTABLE_FIELDS = {
    "id",
    "name",
    "cpf",
    "phone",
    "postal_code",
    "neighborhood",
    "city",
    "region",
    "created_at",
    "updated_at",
}


@dataclass
class ContactData:
    """Caller-supplied fields for create/update (already shape-validated)."""

    name: str
    cpf: str
    phone: str
    postal_code: str
    street: str
    number: str
    neighborhood: str
    city: str
    region: str
    complement: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def full_address(self) -> str:
        return (
            f"{self.street}, {self.number} - {self.neighborhood}, "
            f"{self.city} - {self.region}, Brazil, {self.postal_code}"
        )

    def address_differs(self, stored) -> bool:
        """True when any address component differs from the stored record."""
        return any(getattr(self, name) != getattr(stored, name) for name in ADDRESS_FIELDS)

    def has_coordinates(self) -> bool:
        # 0.0 is the default many clients send for "not filled in".
        return bool(self.latitude) and bool(self.longitude)


@dataclass(frozen=True)
class ContactView:
    id: int
    name: str
    cpf: str
    phone: str
    postal_code: str
    street: str
    number: str
    complement: Optional[str]
    neighborhood: str
    city: str
    region: str
    latitude: float
    longitude: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity) -> "ContactView":
        return cls(
            id=entity.id,
            name=entity.name,
            cpf=entity.cpf,
            phone=entity.phone,
            postal_code=entity.postal_code,
            street=entity.street,
            number=entity.number,
            complement=entity.complement,
            neighborhood=entity.neighborhood,
            city=entity.city,
            region=entity.region,
            latitude=entity.latitude,
            longitude=entity.longitude,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


# ----------------------------- coordinate sources -----------------------------
@dataclass(frozen=True)
class Supplied:
    lat: float
    lng: float


@dataclass(frozen=True)
class Resolved:
    lat: float
    lng: float


@dataclass(frozen=True)
class Unresolved:
    reason: str


CoordinateSource = Union[Supplied, Resolved, Unresolved]


# ------------------------------- access guard -------------------------------
@dataclass(frozen=True)
class AccessGranted:
    contact: object


@dataclass(frozen=True)
class ContactMissing:
    contact_id: int


@dataclass(frozen=True)
class AccessDenied:
    contact_id: int


AccessCheck = Union[AccessGranted, ContactMissing, AccessDenied]


def check_access(contact, contact_id: int, owner_id: int) -> AccessCheck:
    """Decide whether owner_id may act on the (possibly missing) contact."""
    if contact is None:
        return ContactMissing(contact_id=contact_id)
    if contact.owner_id != owner_id:
        return AccessDenied(contact_id=contact_id)
    return AccessGranted(contact=contact)


# -------------------------------- pagination --------------------------------
@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort_field: str = "name"
    descending: bool = False

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total_elements / self.size) if self.size else 0

    def map(self, func) -> "Page":
        return Page(items=[func(item) for item in self.items], page=self.page, size=self.size, total_elements=self.total_elements)
