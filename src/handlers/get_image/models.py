from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.models.image import ObjectMetadata


class GetImageByIdRequest(BaseModel):
    """Validation model for GET /api/image/id/{id}."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: StrictStr = Field(
        ...,
        min_length=1,
        description="Hex object identifier of the image",
    )


class GetImageByNameRequest(BaseModel):
    """Validation model for GET /api/image/name/{name}."""

    name: StrictStr = Field(
        ...,
        min_length=1,
        description="Filename the image was uploaded with, as received in the path",
    )


class DownloadedImage(BaseModel):
    """Reassembled image content plus the record it was read from."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    content_type: StrictStr
    metadata: ObjectMetadata
