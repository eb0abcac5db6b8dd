"""Abstract contract for object metadata persistence."""

from abc import ABC, abstractmethod

from bson import ObjectId

from core.models.image import ObjectMetadata


class ObjectCatalogRepository(ABC):
    """Contract for storing and retrieving object metadata records.

    Implementations could be MongoDB, PostgreSQL, DynamoDB, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
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

        Once this returns, the object is visible to readers, so it must only
        be called after all chunks of the object have been persisted.

        Args:
            filename: Original upload name
            length: Total byte size of the object
            extension: Normalized file extension
            chunk_size: Chunk size the content was written with
            object_id: Pre-allocated identifier; a new one is generated if omitted

        Returns:
            The stored metadata

        Raises:
            StorageFailureError: If creation fails
        """

    @abstractmethod
    def find_by_id(self, object_id: ObjectId) -> ObjectMetadata:
        """Fetch the metadata of a single object.

        Raises:
            NotFoundError: If no record exists for the id
            StorageFailureError: If the fetch fails
        """

    @abstractmethod
    def find_by_filename(self, filename: str) -> ObjectMetadata:
        """Fetch the most recently created object with the given filename.

        Ties on creation time are broken by the highest identifier.

        Raises:
            NotFoundError: If no record has this filename
            StorageFailureError: If the fetch fails
        """
