"""Document store connection management."""

from __future__ import annotations

import asyncio
import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from ..core.config import Settings
from ..models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)


class StoreConfigurationError(RuntimeError):
    """Raised when the store cannot be configured from the current settings."""


class DocumentStore:
    """Owns the Motor client and binds the Beanie documents to its database."""

    def __init__(self, settings: Settings, *, client: AsyncIOMotorClient | None = None) -> None:
        self._settings = settings
        self._client = client
        self._database: AsyncIOMotorDatabase | None = None
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._database is not None

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise StoreConfigurationError("Document store has not been connected.")
        return self._database

    def _build_client(self) -> AsyncIOMotorClient:
        uri = self._settings.mongo_uri
        if not uri:
            raise StoreConfigurationError("MONGO_URI is missing from environment.")
        timeout = self._settings.store_timeout_ms
        return AsyncIOMotorClient(
            uri,
            tz_aware=True,
            uuidRepresentation="standard",
            serverSelectionTimeoutMS=timeout,
            connectTimeoutMS=timeout,
            socketTimeoutMS=timeout,
        )

    async def connect(self) -> None:
        """Create the client if needed and initialise Beanie."""

        async with self._lock:
            if self._database is not None:
                return
            if self._client is None:
                self._client = self._build_client()
            database = self._client[self._settings.mongo_database]
            await init_beanie(database=database, document_models=list(DOCUMENT_MODELS))
            self._database = database
            logger.info("Document store connected", extra={"database": self._settings.mongo_database})

    async def close(self) -> None:
        """Dispose the client."""

        async with self._lock:
            client = self._client
            if client is not None:
                client.close()
            self._client = None
            self._database = None


__all__ = ["DocumentStore", "StoreConfigurationError"]
