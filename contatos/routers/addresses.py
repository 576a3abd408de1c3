from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request

from contatos.routers.deps import require_user
from contatos.schemas.addresses import AddressResponse
from contatos.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"], dependencies=[Depends(require_user)])


def _get_address_service(request: Request) -> AddressService:
    svc = getattr(getattr(request.app, "state", None), "address_service", None)
    if not svc:
        raise RuntimeError("AddressService nao configurado")
    return svc


@router.get("/cep/{cep}", response_model=AddressResponse)
def lookup_cep(cep: str, svc: AddressService = Depends(_get_address_service)) -> AddressResponse:
    return AddressResponse.model_validate(svc.lookup(cep))


@router.get("/search", response_model=List[AddressResponse])
def search_addresses(
    uf: str = Query(..., min_length=2, max_length=2, description="Sigla do estado (UF)"),
    city: str = Query(..., min_length=1),
    street: str = Query(..., min_length=3, description="Nome do logradouro (mínimo 3 caracteres)"),
    svc: AddressService = Depends(_get_address_service),
) -> List[AddressResponse]:
    return [AddressResponse.model_validate(item) for item in svc.search(uf, city, street)]
