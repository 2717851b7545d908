"""
Connection manager: one handle per backing store.

Lifecycle:
- built and started in the FastAPI lifespan (`api/main.py`)
- stored on `app.state.connections`
- handed to routes through the `get_*` dependencies below
- closed on shutdown

A store that is down at boot only produces a logged diagnostic; the process
still starts and routes for the other stores keep working.
"""

from __future__ import annotations

import logging

from botocore.client import BaseClient
from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from .audit import AuditLogger
from .db import RelationalPool
from .mongo import DocumentStore
from .settings import Settings
from .storage import build_s3_client

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(
        self,
        settings: Settings,
        *,
        relational: RelationalPool | None = None,
        documents: DocumentStore | None = None,
        object_store: BaseClient | None = None,
    ) -> None:
        self.settings = settings
        self._relational = relational or RelationalPool(
            settings.database_url,
            max_size=settings.relational_pool_size,
            acquire_timeout=settings.relational_acquire_timeout,
        )
        self._documents = documents or DocumentStore(settings.mongo_uri, settings.mongo_db_name)
        self._object_store = object_store

    async def start(self) -> None:
        try:
            await self._relational.open()
        except Exception as exc:
            logger.error("relational_pool_init_failed error=%s", exc)
        else:
            await self._relational.check_connection()

        await self._documents.try_connect()

        if self._object_store is None:
            self._object_store = build_s3_client(self.settings)
        logger.info("object_store_client_ready region=%s", self.settings.aws_region)

    async def close(self) -> None:
        await self._relational.close()
        await self._documents.close()
        if self._object_store is not None:
            self._object_store.close()
            self._object_store = None

    def relational_pool(self) -> RelationalPool:
        return self._relational

    def documents(self) -> DocumentStore:
        return self._documents

    async def document_store(self) -> AsyncDatabase:
        return await self._documents.database()

    def object_store(self) -> BaseClient:
        if self._object_store is None:
            self._object_store = build_s3_client(self.settings)
        return self._object_store


def get_connections(request: Request) -> ConnectionManager:
    return request.app.state.connections


def get_audit(request: Request) -> AuditLogger:
    return request.app.state.audit


def get_settings(connections: ConnectionManager = Depends(get_connections)) -> Settings:
    return connections.settings


def get_relational_pool(connections: ConnectionManager = Depends(get_connections)) -> RelationalPool:
    return connections.relational_pool()


def get_object_store(connections: ConnectionManager = Depends(get_connections)) -> BaseClient:
    return connections.object_store()


async def get_document_store(connections: ConnectionManager = Depends(get_connections)) -> AsyncDatabase:
    return await connections.document_store()
