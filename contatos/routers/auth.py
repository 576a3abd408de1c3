from __future__ import annotations

from fastapi import APIRouter, Query, Request, Response, status

from contatos.core.rate_limiter import rate_limit_ip
from contatos.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from contatos.schemas.contacts import ExistsResponse
from contatos.services.auth_service import AuthService
from contatos.services.session_service import bearer_token

router = APIRouter(prefix="/auth", tags=["auth"])
auth_service = AuthService()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request) -> UserResponse:
    rate_limit_ip(request, "auth:register", limit=10, window_seconds=300)
    user = auth_service.register(payload.name, payload.email, payload.password)
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, request: Request) -> LoginResponse:
    rate_limit_ip(request, "auth:login", limit=10, window_seconds=60)
    result = auth_service.login(payload.email, payload.password)
    return LoginResponse(
        token=result.token,
        type=result.token_type,
        user=UserResponse(id=result.user.id, name=result.user.name, email=result.user.email),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request) -> Response:
    auth_service.logout(bearer_token(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/email-exists", response_model=ExistsResponse)
def email_exists(email: str = Query(..., min_length=1)) -> ExistsResponse:
    return ExistsResponse(exists=auth_service.email_exists(email))
