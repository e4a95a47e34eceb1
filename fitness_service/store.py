"""Document store access for the four fitness collections.

Handlers never reach a global connection: a ``DocumentStore`` is built once by
``create_app`` and handed out through the ``get_store`` dependency.
"""

from __future__ import annotations

import abc
import asyncio
import contextlib
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from backend_common.database import create_mongo_client, redact_mongo_uri

logger = structlog.get_logger(__name__)

ACCOUNTS = "users"
WORKOUTS = "workouts"
METRICS = "metrics"
PLANS = "plans"

UNIQUE_FIELDS: dict[str, str] = {ACCOUNTS: "email"}


class StoreUnavailableError(RuntimeError):
    def __init__(self, message: str = "Database connection not established"):
        super().__init__(message)


class DuplicateDocumentError(Exception):
    pass


def to_object_id(record_id: str) -> ObjectId:
    # bson.errors.InvalidId propagates for malformed ids
    return ObjectId(record_id)


def serialize_document(document: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(document)
    if "_id" in data:
        data["_id"] = str(data["_id"])
    return data


class DocumentStore(abc.ABC):
    """Narrow persistence interface used by the services."""

    async def start(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @property
    def connected(self) -> bool:
        return True

    @abc.abstractmethod
    async def insert_one(self, collection: str, document: Mapping[str, Any]) -> str:
        """Insert ``document`` and return the new record id."""

    @abc.abstractmethod
    async def find_one(self, collection: str, query: Mapping[str, Any]) -> dict[str, Any] | None: ...

    @abc.abstractmethod
    async def find(self, collection: str, query: Mapping[str, Any]) -> list[dict[str, Any]]: ...

    @abc.abstractmethod
    async def update_by_id(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None: ...

    @abc.abstractmethod
    async def delete_by_id(self, collection: str, record_id: str) -> None: ...


class MongoDocumentStore(DocumentStore):
    def __init__(
        self,
        uri: str,
        database_name: str,
        *,
        retry_delay_seconds: float = 5.0,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[[str], AsyncMongoClient] | None = None,
    ) -> None:
        self._uri = uri
        self._database_name = database_name
        self._retry_delay_seconds = retry_delay_seconds
        self._client_factory = client_factory or (
            lambda u: create_mongo_client(
                u,
                server_selection_timeout_ms=server_selection_timeout_ms,
                app_name="fitness-service",
            )
        )
        self._client: AsyncMongoClient | None = None
        self._database = None
        self._connect_task: asyncio.Task | None = None

    @property
    def connected(self) -> bool:
        return self._database is not None

    async def start(self) -> None:
        if self._connect_task is None:
            self._connect_task = asyncio.create_task(self._connect_forever())

    async def _connect_forever(self) -> None:
        attempt = 0
        while True:
            attempt += 1
            client = None
            try:
                # Client construction raises too (bad URI, SRV lookup failure)
                client = self._client_factory(self._uri)
                await client.admin.command("ping")
            except Exception as exc:
                logger.error(
                    "database_connection_failed",
                    error=str(exc),
                    error_type=type(exc).__name__,
                    mongo_uri=redact_mongo_uri(self._uri),
                    attempt=attempt,
                    retry_in_seconds=self._retry_delay_seconds,
                )
                if client is not None:
                    await client.close()
                await asyncio.sleep(self._retry_delay_seconds)
                continue

            database = client[self._database_name]
            logger.info(
                "database_connection_established",
                database=self._database_name,
                mongo_uri=redact_mongo_uri(self._uri),
                attempt=attempt,
            )
            try:
                await self._ensure_indexes(database)
            except asyncio.CancelledError:
                await client.close()
                raise
            # Only published once the indexes exist.
            self._client = client
            self._database = database
            return

    async def _ensure_indexes(self, database) -> None:
        for collection, field in UNIQUE_FIELDS.items():
            try:
                await database[collection].create_index(field, unique=True)
            except PyMongoError as exc:
                logger.warning("database_index_creation_failed", collection=collection, field=field, error=str(exc))

    def _collection(self, name: str):
        if self._database is None:
            raise StoreUnavailableError()
        return self._database[name]

    async def insert_one(self, collection: str, document: Mapping[str, Any]) -> str:
        try:
            result = await self._collection(collection).insert_one(dict(document))
        except DuplicateKeyError as exc:
            raise DuplicateDocumentError(str(exc)) from exc
        return str(result.inserted_id)

    async def find_one(self, collection: str, query: Mapping[str, Any]) -> dict[str, Any] | None:
        document = await self._collection(collection).find_one(dict(query))
        return serialize_document(document) if document is not None else None

    async def find(self, collection: str, query: Mapping[str, Any]) -> list[dict[str, Any]]:
        cursor = self._collection(collection).find(dict(query))
        return [serialize_document(doc) for doc in await cursor.to_list()]

    async def update_by_id(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        oid = to_object_id(record_id)
        if not fields:
            return
        await self._collection(collection).update_one({"_id": oid}, {"$set": dict(fields)})

    async def delete_by_id(self, collection: str, record_id: str) -> None:
        await self._collection(collection).delete_one({"_id": to_object_id(record_id)})

    async def close(self) -> None:
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._connect_task
        self._connect_task = None
        if self._client is not None:
            await self._client.close()
            logger.info("database_connection_closed", database=self._database_name)
        self._client = None
        self._database = None
