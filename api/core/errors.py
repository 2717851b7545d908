"""
Gateway error kinds and their HTTP rendering.

Every error body carries an `error` field. Store failures also pass the
driver's own message through (`message` for datastores, `details` for object
storage) so operators can see what the backend said.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .audit import AuditLogger

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, **details: Any) -> None:
        super().__init__(error)
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, **self.details}


class ValidationError(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreUnavailableError(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConnectivityError(StoreUnavailableError):
    pass


@contextmanager
def translate_store_errors(
    error: str,
    driver_errors: tuple[type[BaseException], ...],
    *,
    detail_key: str = "message",
) -> Iterator[None]:
    """
    Re-raise driver exceptions as `StoreUnavailableError(error)`.

    Gateway errors raised inside the block pass through untouched.
    """
    try:
        yield
    except GatewayError:
        raise
    except driver_errors as exc:
        raise StoreUnavailableError(error, **{detail_key: str(exc)}) from exc


def _audit(request: Request) -> AuditLogger:
    audit = getattr(request.app.state, "audit", None)
    return audit if isinstance(audit, AuditLogger) else AuditLogger()


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    _audit(request).error(exc.error, request, exc)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _audit(request).error("Invalid request.", request, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request.", "details": jsonable_encoder(exc.errors())},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    _audit(request).error("Internal server error.", request, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error.", "message": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
