"""Interface layer errors.

Maps domain error kinds to HTTP status codes. Every error body has the
shape ``{"kind": ..., "message": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from portal.domain.error import AccessDeniedError, DomainError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "weak_password": status.HTTP_400_BAD_REQUEST,
    "invalid_token": status.HTTP_404_NOT_FOUND,
    "not_found": status.HTTP_404_NOT_FOUND,
    "company_not_found": status.HTTP_404_NOT_FOUND,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "duplicate_pending_invitation": status.HTTP_409_CONFLICT,
    "not_pending": status.HTTP_409_CONFLICT,
    "identity_conflict": status.HTTP_409_CONFLICT,
    "expired": status.HTTP_410_GONE,
    "access_denied": status.HTTP_403_FORBIDDEN,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "delivery_failed": status.HTTP_502_BAD_GATEWAY,
    "provider_unavailable": status.HTTP_502_BAD_GATEWAY,
    "exchange_failed": status.HTTP_502_BAD_GATEWAY,
    "provisioning_failed": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "compensation_failed": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_kind(error: DomainError) -> str:
    """Stable kind reported to clients; denials report the policy reason."""
    if isinstance(error, AccessDeniedError):
        return error.reason
    return error.kind


def error_response(error: DomainError, status_code: int | None = None) -> JSONResponse:
    """Build the JSON error response for a domain error.

    Args:
        error: Domain error to report
        status_code: Overrides the default status for the error's kind
    """
    code = status_code or STATUS_BY_KIND.get(
        error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(
        status_code=code,
        content={"kind": error_kind(error), "message": error.message},
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    response = error_response(exc)
    if response.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return response


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = {
        ".".join(str(part) for part in err["loc"] if part != "body"): err["msg"]
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "kind": "validation_error",
            "message": "Invalid request",
            "fields": fields,
        },
    )


async def handle_pydantic_validation_error(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    fields = {
        ".".join(str(part) for part in err["loc"]) or "value": err["msg"]
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "kind": "validation_error",
            "message": "Invalid request",
            "fields": fields,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(PydanticValidationError, handle_pydantic_validation_error)
