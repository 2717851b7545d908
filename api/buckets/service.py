"""
Object storage "service layer".

- list buckets / objects (first provider page only, no continuation)
- buffer one uploaded file in memory with a size limit, then store it
- delete an object after probing that it exists

The boto3 client is blocking, so every call goes through
`run_in_threadpool`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from botocore.client import BaseClient
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from core.errors import NotFoundError, StoreUnavailableError, ValidationError, translate_store_errors
from core.storage import DRIVER_ERRORS, is_not_found, object_location

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadedObject:
    key: str
    content_type: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.

    A payload of exactly `max_bytes` is accepted; one more byte is rejected.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise ValidationError(
                "File too large.",
                message=f"Max is {max_bytes} bytes.",
            )

    return bytes(buf)


async def buffer_upload(
    file: UploadFile | None,
    *,
    file_name: str | None,
    max_bytes: int,
) -> UploadedObject:
    if file is None:
        raise ValidationError("No file provided.")

    # Key is used verbatim; path-like names stay path-like.
    key = file_name or file.filename or ""
    if not key:
        raise ValidationError("Missing file name.")

    data = await read_upload_bytes(file, max_bytes=max_bytes)
    return UploadedObject(
        key=key,
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        data=data,
    )


async def list_buckets(client: BaseClient) -> list[dict[str, Any]]:
    with translate_store_errors("Error listing buckets.", DRIVER_ERRORS, detail_key="details"):
        resp = await run_in_threadpool(client.list_buckets)
    return list(resp.get("Buckets") or [])


async def list_objects(client: BaseClient, bucket: str) -> list[dict[str, Any]]:
    # Only the first page (provider default, up to 1000 keys) is returned.
    with translate_store_errors("Error listing bucket objects.", DRIVER_ERRORS, detail_key="details"):
        resp = await run_in_threadpool(client.list_objects_v2, Bucket=bucket)
    return list(resp.get("Contents") or [])


async def upload_object(client: BaseClient, bucket: str, upload: UploadedObject) -> dict[str, Any]:
    with translate_store_errors("Error uploading file.", DRIVER_ERRORS, detail_key="details"):
        resp = await run_in_threadpool(
            client.put_object,
            Bucket=bucket,
            Key=upload.key,
            Body=upload.data,
            ContentType=upload.content_type,
        )
    return {
        "message": "File uploaded.",
        "fileName": upload.key,
        "location": object_location(client, bucket, upload.key),
        "etag": resp.get("ETag"),
    }


async def delete_object(client: BaseClient, bucket: str, key: str) -> dict[str, Any]:
    """
    Check existence with HeadObject, then delete.

    Not atomic: an object removed between the check and the delete surfaces
    as a store error (500), not as 404.
    """
    try:
        await run_in_threadpool(client.head_object, Bucket=bucket, Key=key)
    except DRIVER_ERRORS as exc:
        if is_not_found(exc):
            raise NotFoundError("File not found.", fileName=key, bucketName=bucket) from exc
        raise StoreUnavailableError("Error deleting file.", details=str(exc)) from exc

    with translate_store_errors("Error deleting file.", DRIVER_ERRORS, detail_key="details"):
        await run_in_threadpool(client.delete_object, Bucket=bucket, Key=key)
    return {
        "message": "File deleted.",
        "fileName": key,
        "bucketName": bucket,
    }
