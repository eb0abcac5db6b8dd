"""Abstract contract for chunked object content storage."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from bson import ObjectId

from core.models.image import ObjectMetadata


class ChunkStoreRepository(ABC):
    """Contract for splitting object content into ordered chunks and back.

    Implementations could be MongoDB, a key-value store, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    chunk_size: int

    @abstractmethod
    def write(self, object_id: ObjectId, filename: str, content: BinaryIO) -> int:
        """Consume `content` in full and persist it as ordered chunks.

        Args:
            object_id: Identifier every chunk is tagged with
            filename: Original upload name (used for logging only)
            content: Readable binary stream

        Returns:
            Total number of bytes written

        Raises:
            StorageFailureError: If any chunk cannot be persisted
        """

    @abstractmethod
    def read_by_id(self, object_id: ObjectId, sink: BinaryIO) -> ObjectMetadata:
        """Write the reassembled content of an object to `sink`.

        Returns:
            Metadata of the object that was read

        Raises:
            NotFoundError: If no object exists for the id
            StorageFailureError: If reading fails or the chunks are corrupt
        """

    @abstractmethod
    def read_by_filename(self, filename: str, sink: BinaryIO) -> ObjectMetadata:
        """Resolve `filename` to the most recent object and read it into `sink`.

        Raises:
            NotFoundError: If no object has this filename
            StorageFailureError: If reading fails or the chunks are corrupt
        """

    @abstractmethod
    def remove_chunks(self, object_id: ObjectId) -> int:
        """Delete all chunks of one object and return how many were removed.

        Only used to clean up after a failed upload.

        Raises:
            StorageFailureError: If deletion fails
        """
