"""
Request body limit for upload routes.

Starlette spools multipart file parts to disk without a size limit, so the
cap has to be applied before the form is parsed:
- a declared `Content-Length` above the limit is answered with 400 at once
- a body without a length is counted while it streams and cut off
  once it passes the limit
"""

from __future__ import annotations

import logging
import re

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import ValidationError

logger = logging.getLogger(__name__)

# Boundaries, part headers and the `fileName` field around the file bytes.
MULTIPART_OVERHEAD_BYTES = 64 * 1024

UPLOAD_PATH = re.compile(r"^/buckets/[^/]+/upload/?$")


class UploadSizeLimitMiddleware:
    def __init__(self, app: ASGIApp, *, max_upload_bytes: int) -> None:
        self.app = app
        self.max_upload_bytes = max_upload_bytes
        self.max_body_bytes = max_upload_bytes + MULTIPART_OVERHEAD_BYTES

    def _applies(self, scope: Scope) -> bool:
        return (
            scope["type"] == "http"
            and scope.get("method") == "POST"
            and UPLOAD_PATH.match(scope.get("path", "")) is not None
        )

    def _too_large(self) -> ValidationError:
        return ValidationError("File too large.", message=f"Max is {self.max_upload_bytes} bytes.")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not self._applies(scope):
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None and declared > self.max_body_bytes:
            logger.info("upload_rejected path=%s content_length=%s", scope.get("path"), declared)
            exc = self._too_large()
            response = JSONResponse(status_code=exc.status_code, content=exc.to_body())
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise self._too_large()
            return message

        await self.app(scope, limited_receive, send)


def _content_length(scope: Scope) -> int | None:
    for name, value in scope.get("headers") or []:
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
