"""Shared models for stored image objects and their chunks.

Field aliases follow the GridFS document layout so that records written by
this service are readable by any GridFS-aware driver:

    <bucket>.files   {_id, filename, length, chunkSize, uploadDate, metadata: {ext}}
    <bucket>.chunks  {_id, files_id, n, data}
"""

from datetime import datetime
from typing import Any

from bson import Binary, ObjectId
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from core.utils.constants import ALLOWED_EXTENSIONS
from core.utils.time import ensure_utc

Document = dict[str, Any]


class ObjectMetadata(BaseModel):
    """Metadata record describing one stored object."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: ObjectId = Field(..., description="Opaque unique object identifier")
    filename: StrictStr = Field(..., description="Original upload name")
    length: int = Field(..., ge=0, description="Total byte size of the object")
    extension: StrictStr = Field(..., description="Normalized file extension, e.g. '.png'")
    created_at: datetime = Field(..., description="UTC creation timestamp")
    chunk_size: int = Field(..., gt=0, description="Chunk size used for this object")

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, value: str) -> str:
        if value not in ALLOWED_EXTENSIONS:
            raise ValueError(f"Unsupported image extension: {value!r}")
        return value

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def chunk_count(self) -> int:
        """Number of chunks a complete object of this length must have."""
        return -(-self.length // self.chunk_size)

    def to_document(self) -> Document:
        return {
            "_id": self.id,
            "filename": self.filename,
            "length": self.length,
            "chunkSize": self.chunk_size,
            "uploadDate": self.created_at,
            "metadata": {"ext": self.extension},
        }

    @classmethod
    def from_document(cls, document: Document) -> "ObjectMetadata":
        """Build metadata from a files-collection document.

        Raises:
            pydantic.ValidationError: If the document does not match the schema
        """
        metadata = document.get("metadata") or {}

        return cls(
            id=document.get("_id"),
            filename=document.get("filename"),
            length=document.get("length"),
            extension=metadata.get("ext") if isinstance(metadata, dict) else None,
            created_at=document.get("uploadDate"),
            chunk_size=document.get("chunkSize"),
        )


class Chunk(BaseModel):
    """One ordered slice of an object's content."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    object_id: ObjectId
    sequence_number: int = Field(..., ge=0)
    data: bytes

    def to_document(self) -> Document:
        return {
            "files_id": self.object_id,
            "n": self.sequence_number,
            "data": Binary(self.data),
        }

    @classmethod
    def from_document(cls, document: Document) -> "Chunk":
        return cls(
            object_id=document.get("files_id"),
            sequence_number=document.get("n"),
            data=bytes(document.get("data") or b""),
        )


class UploadResult(BaseModel):
    """Summary of a newly stored image returned to the uploader."""

    id: StrictStr = Field(..., description="Hex object identifier")
    name: StrictStr = Field(..., description="Original upload name")
    size: StrictInt = Field(..., description="Stored size in bytes")
