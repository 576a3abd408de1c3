"""Auth and account API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, examples=["Maria Souza"])
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$", examples=["maria@exemplo.com"])
    password: str = Field(min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str


class LoginResponse(BaseModel):
    token: str
    type: str = "Bearer"
    user: UserResponse


class DeleteAccountRequest(BaseModel):
    password: str = Field(min_length=1)
