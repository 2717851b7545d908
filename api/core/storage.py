"""
Object storage client (S3 API) using boto3.

boto3 clients are thread-safe and blocking, so callers run them through
`run_in_threadpool`. There is no pooling on our side; each call is
independent.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from .settings import Settings

DRIVER_ERRORS: tuple[type[BaseException], ...] = (BotoCoreError, ClientError)

# HeadObject returns an empty body, so the error code is the bare status.
NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchKey"})


def build_s3_client(settings: Settings) -> BaseClient:
    return boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        aws_session_token=settings.aws_session_token,
        region_name=settings.aws_region,
        endpoint_url=settings.s3_endpoint_url,
    )


def is_not_found(exc: BaseException) -> bool:
    if not isinstance(exc, ClientError):
        return False
    error: dict[str, Any] = exc.response.get("Error") or {}
    return str(error.get("Code") or "") in NOT_FOUND_CODES


def object_location(client: BaseClient, bucket: str, key: str) -> str:
    """
    Public URL of an object, in the same shape S3's managed upload reports.
    """
    endpoint = str(client.meta.endpoint_url).rstrip("/")
    return f"{endpoint}/{quote(bucket, safe='')}/{quote(key, safe='/')}"
