from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from contatos.routers.deps import require_user
from contatos.schemas.auth import DeleteAccountRequest
from contatos.services.account_service import AccountService

router = APIRouter(prefix="/account", tags=["account"])
account_service = AccountService()


@router.post("/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(payload: DeleteAccountRequest, user_id: int = Depends(require_user)) -> Response:
    account_service.delete_account(user_id, payload.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
