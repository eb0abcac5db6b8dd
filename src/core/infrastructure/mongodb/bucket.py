"""Wiring of the catalog and chunk store that make up one image bucket."""

from aws_lambda_powertools import Logger
from pymongo.errors import PyMongoError

from core.infrastructure.adapters.mongodb_adapter import MongoDBAdapter
from core.infrastructure.mongodb.chunk_store import MongoChunkStore
from core.infrastructure.mongodb.object_catalog import MongoObjectCatalog
from core.models.errors import StorageFailureError
from core.utils.constants import ERROR_CODE_CONNECTION_FAILED

logger = Logger(UTC=True)


def connect_adapter() -> MongoDBAdapter:
    """Build an adapter on the shared client, translating connection failures.

    Raises:
        StorageFailureError: If the MongoDB deployment cannot be reached
    """
    try:
        return MongoDBAdapter()
    except PyMongoError as exc:
        logger.exception("Unable to connect to MongoDB")
        raise StorageFailureError(
            message=str(exc),
            error_code=ERROR_CODE_CONNECTION_FAILED,
        ) from exc


class MongoImageBucket:
    """Catalog and chunk store sharing one adapter and connection pool."""

    def __init__(self, adapter: MongoDBAdapter | None = None) -> None:
        self.adapter = adapter or connect_adapter()
        self.catalog = MongoObjectCatalog(self.adapter)
        self.chunks = MongoChunkStore(self.adapter, catalog=self.catalog)

        logger.debug(
            "Image bucket ready",
            extra={
                "database": self.adapter.database_name,
                "bucket": self.adapter.bucket_name,
                "chunk_size": self.chunks.chunk_size,
            },
        )
