"""
Object storage endpoints.
"""

from __future__ import annotations

from botocore.client import BaseClient
from fastapi import APIRouter, Depends, Request

from core.audit import AuditLogger
from core.connections import get_audit, get_object_store

from . import dependencies, service

router = APIRouter()


@router.get("/buckets")
async def list_buckets(
    request: Request,
    client: BaseClient = Depends(get_object_store),
    audit: AuditLogger = Depends(get_audit),
) -> list[dict]:
    buckets = await service.list_buckets(client)
    audit.info("Buckets listed.", request, {"count": len(buckets)})
    return buckets


@router.get("/buckets/{bucket_name}")
async def list_objects(
    bucket_name: str,
    request: Request,
    client: BaseClient = Depends(get_object_store),
    audit: AuditLogger = Depends(get_audit),
) -> list[dict]:
    objects = await service.list_objects(client, bucket_name)
    audit.info("Bucket objects listed.", request, {"bucketName": bucket_name, "count": len(objects)})
    return objects


@router.post("/buckets/{bucket_name}/upload")
async def upload_file(
    bucket_name: str,
    request: Request,
    upload: service.UploadedObject = Depends(dependencies.get_uploaded_object),
    client: BaseClient = Depends(get_object_store),
    audit: AuditLogger = Depends(get_audit),
) -> dict:
    """
    Multipart upload: field `file`, optional field `fileName` to override the key.
    """
    result = await service.upload_object(client, bucket_name, upload)
    audit.info(
        "File uploaded.",
        request,
        {
            "fileName": upload.key,
            "bucketName": bucket_name,
            "size_bytes": upload.size_bytes,
            "location": result["location"],
        },
    )
    return result


@router.delete("/buckets/{bucket_name}/file/{file_name:path}")
async def delete_file(
    bucket_name: str,
    file_name: str,
    request: Request,
    client: BaseClient = Depends(get_object_store),
    audit: AuditLogger = Depends(get_audit),
) -> dict:
    result = await service.delete_object(client, bucket_name, file_name)
    audit.info("File deleted.", request, {"fileName": file_name, "bucketName": bucket_name})
    return result
