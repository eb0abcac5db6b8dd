"""MongoDB-backed implementation of ObjectCatalogRepository."""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from core.infrastructure.adapters.mongodb_adapter import MongoDBAdapter
from core.models.errors import NotFoundError, StorageFailureError
from core.models.image import ObjectMetadata
from core.repositories.catalog_repository import ObjectCatalogRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    IMAGE_NOT_FOUND_MESSAGE,
)
from core.utils.time import utc_now

logger = Logger(UTC=True)


class MongoObjectCatalog(ObjectCatalogRepository):
    """Object catalog stored in the `<bucket>.files` collection.

    All pymongo errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: MongoDBAdapter | None = None) -> None:
        """Initialize with MongoDB adapter."""
        self._db = adapter or MongoDBAdapter()

    def create(
        self,
        *,
        filename: str,
        length: int,
        extension: str,
        chunk_size: int,
        object_id: ObjectId | None = None,
    ) -> ObjectMetadata:
        """Create the metadata record of a stored object.

        Raises:
            StorageFailureError: If creation fails
        """
        metadata = ObjectMetadata(
            id=object_id or ObjectId(),
            filename=filename,
            length=length,
            extension=extension,
            created_at=utc_now(),
            chunk_size=chunk_size,
        )

        logger.debug(
            "Creating object metadata",
            extra={"object_id": str(metadata.id), "image_name": filename},
        )

        try:
            self._db.insert_file(document=metadata.to_document())
        except PyMongoError as exc:
            logger.error(
                "MongoDB insert failed",
                extra={"object_id": str(metadata.id), "error": str(exc)},
            )
            raise StorageFailureError(
                message=str(exc),
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"object_id": str(metadata.id)},
            ) from exc

        logger.info(
            "Object metadata created",
            extra={"object_id": str(metadata.id), "length": length},
        )
        return metadata

    def find_by_id(self, object_id: ObjectId) -> ObjectMetadata:
        """Fetch the metadata of a single object.

        Raises:
            NotFoundError: If no record exists for the id
            StorageFailureError: If the fetch fails
        """
        logger.debug("Fetching metadata by id", extra={"object_id": str(object_id)})

        return self._fetch(
            lambda: self._db.find_file(query={"_id": object_id}),
            lookup={"object_id": str(object_id)},
        )

    def find_by_filename(self, filename: str) -> ObjectMetadata:
        """Fetch the most recently created object with the given filename.

        Raises:
            NotFoundError: If no record has this filename
            StorageFailureError: If the fetch fails
        """
        logger.debug("Fetching metadata by filename", extra={"image_name": filename})

        return self._fetch(
            lambda: self._db.find_latest_file(query={"filename": filename}),
            lookup={"image_name": filename},
        )

    def _fetch(
        self,
        query: Callable[[], dict[str, Any] | None],
        *,
        lookup: dict[str, Any],
    ) -> ObjectMetadata:
        try:
            document = query()
        except PyMongoError as exc:
            logger.error("MongoDB find failed", extra={**lookup, "error": str(exc)})
            raise StorageFailureError(
                message=str(exc),
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details=lookup,
            ) from exc

        if document is None:
            logger.info("Object metadata not found", extra=lookup)
            raise NotFoundError(message=IMAGE_NOT_FOUND_MESSAGE, details=lookup)

        try:
            return ObjectMetadata.from_document(document)
        except PydanticValidationError as exc:
            logger.error(
                "Invalid metadata format",
                extra={**lookup, "errors": exc.errors(include_url=False)},
            )
            raise StorageFailureError(
                message="Invalid image metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details=lookup,
            ) from exc
