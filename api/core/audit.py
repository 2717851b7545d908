"""
Audit trail for request outcomes.

One line per outcome on the `audit` logger. Writing the entry is best-effort:
a broken handler or an unserializable payload never reaches the caller.
"""

from __future__ import annotations

import json
import logging
from contextlib import suppress
from typing import Any

from fastapi import Request

AUDIT_LOGGER_NAME = "audit"

# Large listings are logged as a preview only.
MAX_DATA_CHARS = 2000


def _dump(data: Any) -> str:
    text = json.dumps(data, default=str, ensure_ascii=False)
    if len(text) > MAX_DATA_CHARS:
        return text[:MAX_DATA_CHARS] + "..."
    return text


class AuditLogger:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def info(self, message: str, request: Request | None, data: Any = None) -> None:
        with suppress(Exception):
            self._logger.info(
                "audit level=info method=%s path=%s message=%s data=%s",
                *_request_fields(request),
                message,
                _dump(data) if data is not None else "-",
            )

    def error(self, message: str, request: Request | None, exc: BaseException | None = None) -> None:
        with suppress(Exception):
            self._logger.error(
                "audit level=error method=%s path=%s message=%s error=%s",
                *_request_fields(request),
                message,
                repr(exc) if exc is not None else "-",
            )


def _request_fields(request: Request | None) -> tuple[str, str]:
    if request is None:
        return "-", "-"
    return request.method, request.url.path
