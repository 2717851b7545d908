"""
Document store handle (MongoDB) using pymongo's asyncio client.

The client pools its own sockets. `DocumentStore.database()` checks the
handle is ready and makes one reconnect attempt when it is not.
"""

from __future__ import annotations

import asyncio
import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from .errors import ConnectivityError

logger = logging.getLogger(__name__)

DRIVER_ERRORS: tuple[type[BaseException], ...] = (PyMongoError,)

SERVER_SELECTION_TIMEOUT_MS = 5000


class DocumentStore:
    def __init__(self, uri: str, db_name: str) -> None:
        self._uri = uri
        self._db_name = db_name
        self._client: AsyncMongoClient | None = None
        self._ready = False
        self._reconnect_lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self._ready

    def _new_client(self) -> AsyncMongoClient:
        return AsyncMongoClient(self._uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)

    async def connect(self) -> None:
        """
        Create the client and ping it. Raises the driver error on failure.
        """
        if self._client is None:
            self._client = self._new_client()
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            self._ready = False
            raise
        self._ready = True

    async def try_connect(self) -> bool:
        """
        Startup diagnostic. Never raises.
        """
        try:
            await self.connect()
        except PyMongoError as exc:
            logger.error("document_store_connect_failed error=%s", exc)
            return False
        logger.info("document_store_connect_ok db=%s", self._db_name)
        return True

    async def reconnect(self) -> None:
        await self.close()
        await self.connect()

    async def database(self) -> AsyncDatabase:
        if not self._ready or self._client is None:
            # One reconnect at a time; waiters reuse its result.
            async with self._reconnect_lock:
                if not self._ready or self._client is None:
                    try:
                        await self.reconnect()
                    except PyMongoError as exc:
                        logger.error("document_store_reconnect_failed error=%s", exc)
                        raise ConnectivityError("Document store is unavailable.", message=str(exc)) from exc
        assert self._client is not None
        return self._client[self._db_name]

    async def close(self) -> None:
        client, self._client = self._client, None
        self._ready = False
        if client is not None:
            await client.close()
