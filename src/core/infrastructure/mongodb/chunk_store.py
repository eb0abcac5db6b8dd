"""MongoDB-backed implementation of ChunkStoreRepository.

Content is partitioned into sequential blocks of exactly `chunk_size` bytes
(the last block may be shorter) and stored one document per block in the
`<bucket>.chunks` collection. Reassembly reads the blocks back ordered by
sequence number and verifies them against the object's metadata before any
byte reaches the caller's sink.
"""

from collections.abc import Iterator
from typing import BinaryIO

from aws_lambda_powertools import Logger
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from core.infrastructure.adapters.mongodb_adapter import MongoDBAdapter
from core.models.errors import StorageFailureError
from core.models.image import Chunk, ObjectMetadata
from core.repositories.catalog_repository import ObjectCatalogRepository
from core.repositories.chunk_repository import ChunkStoreRepository
from core.utils.constants import (
    ERROR_CODE_CHUNK_CLEANUP_FAILED,
    ERROR_CODE_CHUNK_READ_FAILED,
    ERROR_CODE_CHUNK_WRITE_FAILED,
    ERROR_CODE_CORRUPT_OBJECT,
)

logger = Logger(UTC=True)


def iter_blocks(content: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """Yield full `chunk_size` blocks from `content`, then the remainder.

    Streams may return fewer bytes than requested, so reads are buffered
    until a full block is available or the stream is exhausted.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")

    buffer = bytearray()

    while True:
        data = content.read(chunk_size - len(buffer))
        if not data:
            break

        buffer.extend(data)
        if len(buffer) == chunk_size:
            yield bytes(buffer)
            buffer.clear()

    if buffer:
        yield bytes(buffer)


class MongoChunkStore(ChunkStoreRepository):
    """Chunk storage in the `<bucket>.chunks` collection."""

    def __init__(
        self,
        adapter: MongoDBAdapter | None = None,
        *,
        catalog: ObjectCatalogRepository,
        chunk_size: int | None = None,
    ) -> None:
        self._db = adapter or MongoDBAdapter()
        self._catalog = catalog
        self.chunk_size = self._db.chunk_size if chunk_size is None else chunk_size

        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")

    def write(self, object_id: ObjectId, filename: str, content: BinaryIO) -> int:
        """Persist `content` as ordered chunks and return the bytes written.

        Raises:
            StorageFailureError: If any chunk cannot be persisted
        """
        logger.debug(
            "Writing chunks",
            extra={
                "object_id": str(object_id),
                "image_name": filename,
                "chunk_size": self.chunk_size,
            },
        )

        written = 0
        sequence_number = 0

        try:
            self._db.ensure_indexes()

            for block in iter_blocks(content, self.chunk_size):
                chunk = Chunk(object_id=object_id, sequence_number=sequence_number, data=block)
                self._db.insert_chunk(document=chunk.to_document())

                written += len(block)
                sequence_number += 1

        except (PyMongoError, OSError) as exc:
            logger.error(
                "Chunk write failed",
                extra={
                    "object_id": str(object_id),
                    "sequence_number": sequence_number,
                    "error": str(exc),
                },
            )
            raise StorageFailureError(
                message=str(exc),
                error_code=ERROR_CODE_CHUNK_WRITE_FAILED,
                details={"object_id": str(object_id), "sequence_number": sequence_number},
            ) from exc

        logger.info(
            "Chunks written",
            extra={
                "object_id": str(object_id),
                "chunk_count": sequence_number,
                "length": written,
            },
        )
        return written

    def read_by_id(self, object_id: ObjectId, sink: BinaryIO) -> ObjectMetadata:
        """Write the reassembled content of an object to `sink`.

        Raises:
            NotFoundError: If no object exists for the id
            StorageFailureError: If reading fails or the chunks are corrupt
        """
        metadata = self._catalog.find_by_id(object_id)
        self._read_into(metadata, sink)
        return metadata

    def read_by_filename(self, filename: str, sink: BinaryIO) -> ObjectMetadata:
        """Read the most recent object named `filename` into `sink`.

        Raises:
            NotFoundError: If no object has this filename
            StorageFailureError: If reading fails or the chunks are corrupt
        """
        metadata = self._catalog.find_by_filename(filename)
        self._read_into(metadata, sink)
        return metadata

    def _read_into(self, metadata: ObjectMetadata, sink: BinaryIO) -> int:
        """Reassemble the chunks described by `metadata` into `sink`.

        Returns:
            Number of bytes written to the sink
        """
        chunks = self._load_chunks(metadata)

        for chunk in chunks:
            sink.write(chunk.data)

        logger.debug(
            "Object reassembled",
            extra={"object_id": str(metadata.id), "length": metadata.length},
        )
        return metadata.length

    def remove_chunks(self, object_id: ObjectId) -> int:
        """Delete every chunk of one object.

        Raises:
            StorageFailureError: If deletion fails
        """
        try:
            removed = self._db.delete_chunks(files_id=object_id)
        except PyMongoError as exc:
            logger.error(
                "Chunk cleanup failed",
                extra={"object_id": str(object_id), "error": str(exc)},
            )
            raise StorageFailureError(
                message=str(exc),
                error_code=ERROR_CODE_CHUNK_CLEANUP_FAILED,
                details={"object_id": str(object_id)},
            ) from exc

        logger.info(
            "Chunks removed",
            extra={"object_id": str(object_id), "chunk_count": removed},
        )
        return removed

    def _load_chunks(self, metadata: ObjectMetadata) -> list[Chunk]:
        """Fetch and verify all chunks of an object in sequence order.

        Raises:
            StorageFailureError: If the fetch fails or the chunks do not
                match the metadata
        """
        object_id = str(metadata.id)

        try:
            chunks = [Chunk.from_document(doc) for doc in self._db.find_chunks(files_id=metadata.id)]
        except PyMongoError as exc:
            logger.error("Chunk read failed", extra={"object_id": object_id, "error": str(exc)})
            raise StorageFailureError(
                message=str(exc),
                error_code=ERROR_CODE_CHUNK_READ_FAILED,
                details={"object_id": object_id},
            ) from exc
        except PydanticValidationError as exc:
            raise self._corrupt(metadata, "chunk document has an invalid format") from exc

        expected_count = metadata.chunk_count
        if len(chunks) != expected_count:
            raise self._corrupt(
                metadata,
                f"expected {expected_count} chunks, found {len(chunks)}",
            )

        for expected_n, chunk in enumerate(chunks):
            if chunk.sequence_number != expected_n:
                raise self._corrupt(
                    metadata,
                    f"missing chunk {expected_n}, found {chunk.sequence_number}",
                )

            is_last = expected_n == expected_count - 1
            expected_size = (
                metadata.length - metadata.chunk_size * expected_n if is_last else metadata.chunk_size
            )
            if len(chunk.data) != expected_size:
                raise self._corrupt(
                    metadata,
                    f"chunk {expected_n} has {len(chunk.data)} bytes, expected {expected_size}",
                )

        return chunks

    @staticmethod
    def _corrupt(metadata: ObjectMetadata, reason: str) -> StorageFailureError:
        logger.error(
            "Corrupt object",
            extra={"object_id": str(metadata.id), "reason": reason},
        )
        return StorageFailureError(
            message=f"Corrupt object {metadata.id}: {reason}",
            error_code=ERROR_CODE_CORRUPT_OBJECT,
            details={"object_id": str(metadata.id)},
        )
