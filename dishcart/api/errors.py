"""Mapping of domain exceptions onto HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dishcart.domain.errors import (
    DishcartError,
    EntityConflict,
    GatewayRejected,
    GatewayUnavailable,
    InvalidReference,
    NotAuthenticated,
    NotFound,
    StoreUnavailable,
)
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)

#kolejnosc ma znaczenie: pierwsze dopasowanie wygrywa
_STATUS_CODES = (
    (NotAuthenticated, status.HTTP_401_UNAUTHORIZED),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (InvalidReference, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EntityConflict, status.HTTP_409_CONFLICT),
    (GatewayRejected, status.HTTP_402_PAYMENT_REQUIRED),
    (GatewayUnavailable, status.HTTP_502_BAD_GATEWAY),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_code_for(exc: DishcartError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def dishcart_error_handler(request: Request, exc: DishcartError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    headers = {"WWW-Authenticate": "X-User-Id"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content={"detail": exc.message, "operation": exc.operation},
        headers=headers,
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DishcartError, dishcart_error_handler)
