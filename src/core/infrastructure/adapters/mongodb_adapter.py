"""Thin MongoDB adapter wrapping pymongo collection operations."""

import os
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any, Protocol, cast

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.server_api import ServerApi

from core.utils.constants import (
    CHUNKS_COLLECTION_SUFFIX,
    DEFAULT_BUCKET_NAME,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_DATABASE_NAME,
    ENV_IMAGE_BUCKET_NAME,
    ENV_IMAGE_CHUNK_SIZE,
    ENV_IMAGE_DATABASE_NAME,
    ENV_MONGODB_CONNECT_TIMEOUT_MS,
    ENV_MONGODB_URI,
    FILES_COLLECTION_SUFFIX,
)

Document = dict[str, Any]


def _positive_int_env(name: str, default: int) -> int:
    """Read a positive integer setting from the environment.

    Raises:
        RuntimeError: If the variable is set to a non-integer or a value below 1
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}") from exc

    if value <= 0:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}")
    return value


class MongoCollection(Protocol):
    """Minimal pymongo Collection protocol."""

    def insert_one(self, document: Mapping[str, Any]) -> Any: ...
    def find_one(self, filter: Mapping[str, Any], *args: Any, **kwargs: Any) -> Any: ...
    def find(self, filter: Mapping[str, Any], *args: Any, **kwargs: Any) -> Any: ...
    def delete_many(self, filter: Mapping[str, Any]) -> Any: ...
    def create_index(self, keys: Any, **kwargs: Any) -> str: ...


@lru_cache(maxsize=None)
def get_mongo_client(uri: str, connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS) -> MongoClient:
    """Return the process-wide pooled client for `uri`.

    The client is created once per execution environment and reused by every
    invocation. The timeout bounds connection establishment only. Retries are
    disabled so storage failures surface immediately.
    """
    client: MongoClient = MongoClient(
        uri,
        server_api=ServerApi("1"),
        connectTimeoutMS=connect_timeout_ms,
        serverSelectionTimeoutMS=connect_timeout_ms,
        retryWrites=False,
        retryReads=False,
        tz_aware=True,
    )
    client.admin.command("ping")
    return client


class MongoDBAdapter:
    """Low-level bucket collection operations (mechanical, no error handling).

    This adapter:
    - Wraps the pymongo `<bucket>.files` and `<bucket>.chunks` collections
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, client: MongoClient | None = None) -> None:
        """Resolve database, bucket and chunk size from environment.

        Raises:
            RuntimeError: If the connection string is missing or a numeric
                setting is not a positive integer
        """
        if client is None:
            uri = os.getenv(ENV_MONGODB_URI)
            if not uri:
                raise RuntimeError(f"{ENV_MONGODB_URI} environment variable is not set")

            timeout_ms = _positive_int_env(ENV_MONGODB_CONNECT_TIMEOUT_MS, DEFAULT_CONNECT_TIMEOUT_MS)
            client = get_mongo_client(uri, timeout_ms)

        self.database_name = os.getenv(ENV_IMAGE_DATABASE_NAME) or DEFAULT_DATABASE_NAME
        self.bucket_name = os.getenv(ENV_IMAGE_BUCKET_NAME) or DEFAULT_BUCKET_NAME
        self.chunk_size = _positive_int_env(ENV_IMAGE_CHUNK_SIZE, DEFAULT_CHUNK_SIZE)

        database = client[self.database_name]
        self.files: MongoCollection = cast(
            MongoCollection,
            database[f"{self.bucket_name}.{FILES_COLLECTION_SUFFIX}"],
        )
        self.chunks: MongoCollection = cast(
            MongoCollection,
            database[f"{self.bucket_name}.{CHUNKS_COLLECTION_SUFFIX}"],
        )
        self._indexes_ensured = False

    def ensure_indexes(self) -> None:
        """Create the bucket indexes once per adapter.

        Raises pymongo exceptions - caught by domain implementation.
        """
        if self._indexes_ensured:
            return

        self.chunks.create_index([("files_id", ASCENDING), ("n", ASCENDING)], unique=True)
        self.files.create_index([("filename", ASCENDING), ("uploadDate", ASCENDING)])
        self._indexes_ensured = True

    def insert_file(self, *, document: Document) -> None:
        """Insert a files-collection document.

        Raises pymongo exceptions - caught by domain implementation.
        """
        self.files.insert_one(document)

    def find_file(
        self,
        *,
        query: Document,
        sort: list[tuple[str, int]] | None = None,
    ) -> Document | None:
        """Return the first files-collection document matching `query`.

        Raises pymongo exceptions - caught by domain implementation.
        """
        if sort:
            return cast(Document | None, self.files.find_one(query, sort=sort))
        return cast(Document | None, self.files.find_one(query))

    def find_latest_file(self, *, query: Document) -> Document | None:
        """Return the most recently uploaded matching document."""
        return self.find_file(
            query=query,
            sort=[("uploadDate", DESCENDING), ("_id", DESCENDING)],
        )

    def insert_chunk(self, *, document: Document) -> None:
        """Insert a chunks-collection document.

        Raises pymongo exceptions - caught by domain implementation.
        """
        self.chunks.insert_one(document)

    def find_chunks(self, *, files_id: Any) -> Iterable[Document]:
        """Iterate over the chunks of one object in sequence order.

        Raises pymongo exceptions - caught by domain implementation.
        """
        return cast(
            Iterable[Document],
            self.chunks.find({"files_id": files_id}, sort=[("n", ASCENDING)]),
        )

    def delete_chunks(self, *, files_id: Any) -> int:
        """Delete all chunks of one object.

        Raises pymongo exceptions - caught by domain implementation.
        """
        result = self.chunks.delete_many({"files_id": files_id})
        return int(result.deleted_count)
