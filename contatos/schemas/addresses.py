"""Postal lookup API schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AddressResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    postal_code: str
    street: str
    complement: str
    neighborhood: str
    city: str
    region: str
