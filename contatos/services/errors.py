"""Errors raised by the service layer and rendered by the API."""
from __future__ import annotations


class ServiceError(Exception):
    code = "error"
    status_code = 400

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(ServiceError):
    code = "invalid_input"
    status_code = 400


class ConflictError(ServiceError):
    code = "conflict"
    status_code = 409


class NotFoundError(ServiceError):
    code = "not_found"
    status_code = 404


class ForbiddenError(ServiceError):
    code = "forbidden"
    status_code = 403


class UnauthorizedError(ServiceError):
    code = "unauthorized"
    status_code = 401


class ExternalDependencyError(ServiceError):
    code = "external_dependency"
    status_code = 502
