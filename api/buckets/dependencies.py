"""
Upload parsing for bucket routes.

The multipart body is parsed and size-checked here, so an oversized or
missing file is rejected before the route handler touches the store.
"""

from __future__ import annotations

from fastapi import Depends, File, Form, UploadFile

from core.connections import get_settings
from core.settings import Settings

from . import service


async def get_uploaded_object(
    file: UploadFile | None = File(default=None),
    file_name: str | None = Form(default=None, alias="fileName"),
    settings: Settings = Depends(get_settings),
) -> service.UploadedObject:
    try:
        return await service.buffer_upload(
            file,
            file_name=(file_name or "").strip() or None,
            max_bytes=settings.max_upload_bytes,
        )
    finally:
        if file is not None:
            await file.close()
