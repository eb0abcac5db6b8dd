"""
Business logic for image retrieval.

This module coordinates metadata lookup and chunk reassembly to serve an
image by identifier or by filename.
"""

import io
from urllib.parse import unquote

from aws_lambda_powertools import Logger

from core.infrastructure.mongodb.bucket import MongoImageBucket
from core.models.errors import NotFoundError
from core.models.image import ObjectMetadata
from core.utils.mime import content_type_for
from core.utils.validators import parse_object_id

from .models import DownloadedImage

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for serving stored images.

    This service orchestrates:
    - Parsing and resolving the requested identifier or filename
    - Reassembling the image content into memory
    - Deriving the response content type from the stored extension
    """

    def __init__(self, bucket: MongoImageBucket | None = None) -> None:
        bucket = bucket or MongoImageBucket()
        self.chunks = bucket.chunks

    def download_by_id(self, raw_id: str) -> DownloadedImage:
        """Load an image by its hex identifier.

        Raises:
            InvalidInputError: If `raw_id` is not a valid identifier
            NotFoundError: If no image exists for the id
            StorageFailureError: If reading fails
        """
        object_id = parse_object_id(raw_id)
        logger.debug("Loading image by id", extra={"object_id": raw_id})

        buffer = io.BytesIO()
        metadata = self.chunks.read_by_id(object_id, buffer)
        return self._build(metadata, buffer)

    def download_by_name(self, name: str) -> DownloadedImage:
        """Load the most recently uploaded image with the given filename.

        The returned metadata is the record the content was read from, so the
        body and the headers always describe the same object.

        REST API proxy events carry path parameters still URL-encoded, while
        HTTP APIs and `sam local` decode them. The name is looked up as given
        first, then once more URL-decoded, so a stored name containing a
        literal `%XX` sequence stays reachable in both cases.

        Raises:
            NotFoundError: If no image has this filename
            StorageFailureError: If reading fails
        """
        try:
            return self._download_by_name(name)
        except NotFoundError:
            decoded = unquote(name)
            if decoded == name:
                raise
            return self._download_by_name(decoded)

    def _download_by_name(self, name: str) -> DownloadedImage:
        logger.debug("Loading image by name", extra={"image_name": name})

        buffer = io.BytesIO()
        metadata = self.chunks.read_by_filename(name, buffer)
        return self._build(metadata, buffer)

    @staticmethod
    def _build(metadata: ObjectMetadata, buffer: io.BytesIO) -> DownloadedImage:
        content = buffer.getvalue()
        logger.info(
            "Image loaded",
            extra={"object_id": str(metadata.id), "length": len(content)},
        )

        return DownloadedImage(
            content=content,
            content_type=content_type_for(metadata.extension),
            metadata=metadata,
        )
