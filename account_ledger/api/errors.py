"""
Mapping from engine errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from account_ledger.errors import (
    AccountNotFound,
    InsufficientFunds,
    InvalidTransaction,
    InvalidTransactionType,
    LedgerError,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    AccountNotFound: 404,
    InsufficientFunds: 422,
    InvalidTransactionType: 400,
    InvalidTransaction: 400,
    StoreUnavailable: 503,
}


def status_for(error: LedgerError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status_code
    return 500


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc)},
        headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client errors, the same as an unknown kind."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
