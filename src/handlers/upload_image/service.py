"""Business logic for image upload operations.

This module coordinates validation, chunk storage, and catalog persistence
for image uploads while translating failures into domain-specific errors.
"""

import io
from typing import BinaryIO

from aws_lambda_powertools import Logger
from bson import ObjectId

from core.infrastructure.mongodb.bucket import MongoImageBucket
from core.models.errors import InvalidInputError, StorageFailureError
from core.models.image import UploadResult
from core.utils.constants import (
    ALLOWED_EXTENSIONS,
    ERROR_CODE_INVALID_FILE_TYPE,
    INVALID_FILE_TYPE_MESSAGE,
    format_file_size,
)
from core.utils.mime import extract_extension, is_allowed_extension

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - Extension validation
    - Writing image content as ordered chunks
    - Publishing the catalog record that makes the image visible
    - Removing written chunks when the upload cannot complete
    """

    def __init__(self, bucket: MongoImageBucket | None = None) -> None:
        """Initialize the upload service with the image bucket."""
        bucket = bucket or MongoImageBucket()
        self.catalog = bucket.catalog
        self.chunks = bucket.chunks

    @staticmethod
    def generate_object_id() -> ObjectId:
        """Generate a unique object identifier."""
        return ObjectId()

    @staticmethod
    def validate_extension(filename: str) -> str:
        """Return the allowed extension of `filename`.

        Raises:
            InvalidInputError: If the extension is missing or not allowed
        """
        extension = extract_extension(filename)

        if not is_allowed_extension(extension):
            logger.warning(
                "Rejected file extension",
                extra={"image_name": filename, "extension": extension},
            )
            raise InvalidInputError(
                message=INVALID_FILE_TYPE_MESSAGE,
                error_code=ERROR_CODE_INVALID_FILE_TYPE,
                details={
                    "extension": extension,
                    "allowed": sorted(ALLOWED_EXTENSIONS),
                },
            )

        return extension

    def upload_image(self, *, filename: str, content: bytes | BinaryIO) -> UploadResult:
        """Store an image and publish its metadata.

        The upload flow is:
        1. Validate the file extension
        2. Write the content as ordered chunks under a fresh id
        3. Create the catalog record (the image becomes visible)
        4. Remove written chunks if step 2 or 3 fails

        Args:
            filename: Original upload name
            content: Raw image bytes or a readable binary stream

        Returns:
            Summary of the stored image

        Raises:
            InvalidInputError: If the file type is not supported
            StorageFailureError: If chunk or metadata persistence fails
        """
        extension = self.validate_extension(filename)
        stream: BinaryIO = io.BytesIO(content) if isinstance(content, bytes) else content

        object_id = self.generate_object_id()
        logger.debug(
            "Starting image upload",
            extra={"object_id": str(object_id), "image_name": filename},
        )

        try:
            size = self.chunks.write(object_id, filename, stream)
            self.catalog.create(
                object_id=object_id,
                filename=filename,
                length=size,
                extension=extension,
                chunk_size=self.chunks.chunk_size,
            )
        except StorageFailureError:
            logger.exception(
                "Image upload failed",
                extra={"object_id": str(object_id)},
            )
            self._discard_chunks(object_id)
            raise

        logger.info(
            "Image uploaded successfully",
            extra={
                "object_id": str(object_id),
                "image_name": filename,
                "size": format_file_size(size),
            },
        )
        return UploadResult(id=str(object_id), name=filename, size=size)

    def _discard_chunks(self, object_id: ObjectId) -> None:
        """Best-effort cleanup so a failed upload leaves no orphaned chunks."""
        try:
            self.chunks.remove_chunks(object_id)
        except StorageFailureError:
            logger.warning(
                "Failed to clean up chunks after upload failure",
                extra={"object_id": str(object_id)},
            )
