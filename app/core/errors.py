"""Erreurs applicatives et handlers FastAPI associés"""

import logging
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# sous-types d'AuthError -> (code machine, message)
AUTH_ERRORS = {
    "missing": ("AUTH_TOKEN_MISSING", "No token, authorization denied"),
    "expired": ("TOKEN_EXPIRED", "Token has expired"),
    "invalid": ("INVALID_TOKEN", "Invalid token"),
    "failed": ("TOKEN_VERIFICATION_FAILED", "Token verification failed"),
}

_LOCATIONS = ("body", "query", "path", "header")


class AuthError(Exception):
    """Credential absent, expiré, malformé ou non vérifiable"""

    def __init__(self, kind: str):
        if kind not in AUTH_ERRORS:
            raise ValueError(f"Unknown auth error kind: {kind}")
        self.kind = kind
        self.code, self.message = AUTH_ERRORS[kind]
        super().__init__(self.message)


class ValidationError(Exception):
    """Une ou plusieurs violations de champ, listées une par une"""

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


class NotFoundError(Exception):
    def __init__(self, message: str = "Task not found"):
        self.message = message
        super().__init__(message)


class StoreError(Exception):
    """La couche de persistance a échoué (détail jamais exposé au client)"""


def format_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Convertit les erreurs pydantic en liste [{field, message}]"""
    items = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATIONS and len(loc) > 1:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        items.append({"field": field, "message": err.get("msg", "Invalid value")})
    return items


async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message, "error": exc.code},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # même format que les erreurs levées par le service
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": format_errors(exc.errors())},
    )


async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
