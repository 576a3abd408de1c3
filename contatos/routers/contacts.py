from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from contatos.routers.deps import require_user
from contatos.schemas.contacts import (
    ContactPageResponse,
    ContactRequest,
    ContactResponse,
    ExistsResponse,
)
from contatos.services.contact_service import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])


def _get_contact_service(request: Request) -> ContactService:
    svc = getattr(getattr(request.app, "state", None), "contact_service", None)
    if not svc:
        raise RuntimeError("ContactService nao configurado")
    return svc


@router.get("", response_model=ContactPageResponse)
def list_contacts(
    search: Optional[str] = Query(default=None, description="Buscar por nome ou CPF"),
    page: int = Query(default=0, description="Número da página (inicia em 0)"),
    size: Optional[int] = Query(default=None, description="Quantidade de itens por página"),
    sort: str = Query(default="name,asc", description="Campo e direção de ordenação (ex: name,asc)"),
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> ContactPageResponse:
    page_request = svc.page_request(page=page, size=size, sort=sort)
    return ContactPageResponse.from_page(svc.list_contacts(owner_id, search, page_request))


@router.get("/cpf-exists", response_model=ExistsResponse)
def cpf_exists(
    cpf: str = Query(..., description="CPF (apenas números)"),
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> ExistsResponse:
    return ExistsResponse(exists=svc.cpf_exists(owner_id, cpf))


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: int,
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> ContactResponse:
    return ContactResponse.from_view(svc.get_contact(owner_id, contact_id))


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: ContactRequest,
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> ContactResponse:
    return ContactResponse.from_view(svc.create_contact(owner_id, payload.to_data()))


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    payload: ContactRequest,
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> ContactResponse:
    return ContactResponse.from_view(svc.update_contact(owner_id, contact_id, payload.to_data()))


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(
    contact_id: int,
    owner_id: int = Depends(require_user),
    svc: ContactService = Depends(_get_contact_service),
) -> Response:
    svc.delete_contact(owner_id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
