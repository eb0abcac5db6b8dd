"""Pydantic models for image upload request."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageUploadRequest(BaseModel):
    """Validation model for the uploaded file part."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., min_length=1, max_length=255, description="Image filename")
    content: bytes = Field(..., description="Raw image bytes")

    @field_validator("filename")
    @classmethod
    def validate_filename_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Image name must not be blank")
        return value
