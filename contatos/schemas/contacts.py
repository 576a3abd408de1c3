"""Contact API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from contatos.domain.contacts import ContactData, ContactView, Page


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactRequest(CamelModel):
    name: str = Field(min_length=1, description="Nome completo do contato", examples=["João da Silva"])
    cpf: str = Field(
        alias="taxpayerId",
        pattern=r"^[0-9]{11}$",
        description="CPF do contato (apenas números)",
        examples=["12345678909"],
    )
    phone: str = Field(min_length=1, description="Telefone com DDD", examples=["11987654321"])
    postal_code: str = Field(pattern=r"^[0-9]{8}$", description="CEP (apenas números)", examples=["01310100"])
    street: str = Field(min_length=1, examples=["Avenida Paulista"])
    number: str = Field(min_length=1, examples=["1578"])
    complement: Optional[str] = Field(default=None, examples=["Apto 101"])
    neighborhood: str = Field(min_length=1, examples=["Bela Vista"])
    city: str = Field(min_length=1, examples=["São Paulo"])
    region: str = Field(min_length=2, max_length=2, description="Sigla do estado (UF)", examples=["SP"])
    latitude: Optional[float] = Field(default=None, description="Preenchida automaticamente se ausente ou 0")
    longitude: Optional[float] = Field(default=None, description="Preenchida automaticamente se ausente ou 0")

    @field_validator("name", "phone", "street", "number", "neighborhood", "city", "region")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("campo obrigatório")
        return value

    def to_data(self) -> ContactData:
        return ContactData(
            name=self.name,
            cpf=self.cpf,
            phone=self.phone,
            postal_code=self.postal_code,
            street=self.street,
            number=self.number,
            complement=self.complement,
            neighborhood=self.neighborhood,
            city=self.city,
            region=self.region,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class ContactResponse(CamelModel):
    id: int
    name: str
    cpf: str = Field(alias="taxpayerId")
    phone: str
    postal_code: str
    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    region: str
    latitude: float
    longitude: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ContactView) -> "ContactResponse":
        return cls(
            id=view.id,
            name=view.name,
            cpf=view.cpf,
            phone=view.phone,
            postal_code=view.postal_code,
            street=view.street,
            number=view.number,
            complement=view.complement,
            neighborhood=view.neighborhood,
            city=view.city,
            region=view.region,
            latitude=view.latitude,
            longitude=view.longitude,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class ContactPageResponse(CamelModel):
    items: List[ContactResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[ContactView]) -> "ContactPageResponse":
        return cls(
            items=[ContactResponse.from_view(view) for view in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )


class ExistsResponse(BaseModel):
    exists: bool
