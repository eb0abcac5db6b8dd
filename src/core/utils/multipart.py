"""Extraction of uploaded files from multipart/form-data Lambda proxy events."""

import base64
import binascii
from email.message import Message
from email.utils import collapse_rfc2231_value
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, StrictStr
from requests_toolbelt.multipart.decoder import (
    ImproperBodyPartContentException,
    MultipartDecoder,
    NonMultipartContentTypeException,
)

from core.models.errors import InvalidInputError
from core.utils.constants import (
    ERROR_CODE_INVALID_MULTIPART,
    ERROR_CODE_MISSING_FILE,
    UPLOAD_FIELD_NAMES,
)

logger = Logger(UTC=True)

MULTIPART_FORM_DATA = "multipart/form-data"


class UploadedFile(BaseModel):
    """A single file part of a multipart/form-data request."""

    model_config = ConfigDict(frozen=True)

    field_name: StrictStr
    filename: StrictStr
    content: bytes


def get_header(headers: dict[str, Any] | None, name: str) -> str | None:
    """Case-insensitive header lookup; API Gateway preserves client casing."""
    for key, value in (headers or {}).items():
        if key.lower() == name.lower():
            return str(value)
    return None


def decode_body(event: dict[str, Any]) -> bytes:
    """Return the raw request body of a Lambda proxy event.

    Raises:
        InvalidInputError: If a base64-flagged body cannot be decoded
    """
    body = event.get("body") or ""

    if not event.get("isBase64Encoded"):
        return body.encode("utf-8")

    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(
            message="Invalid base64 encoded request body",
            error_code=ERROR_CODE_INVALID_MULTIPART,
        ) from exc


def _parse_disposition(value: str) -> tuple[str | None, str | None]:
    message = Message()
    message["content-disposition"] = value

    name = message.get_param("name", header="content-disposition")
    filename = message.get_filename()

    if name is not None and not isinstance(name, str):
        name = collapse_rfc2231_value(name)

    return name, filename


def extract_upload_file(
    event: dict[str, Any],
    field_names: tuple[str, ...] = UPLOAD_FIELD_NAMES,
) -> UploadedFile:
    """Find the uploaded file in a multipart/form-data event.

    Field names are tried in order, so with the defaults an `image` part
    wins over a `file` part.

    Raises:
        InvalidInputError: If the body is not multipart or has no file part
    """
    content_type = get_header(event.get("headers"), "content-type") or ""

    if not content_type.lower().startswith(MULTIPART_FORM_DATA):
        raise InvalidInputError(
            message="request has no multipart/form-data Content-Type",
            error_code=ERROR_CODE_MISSING_FILE,
        )

    body = decode_body(event)

    try:
        decoder = MultipartDecoder(body, content_type)
    except (
        ImproperBodyPartContentException,
        NonMultipartContentTypeException,
        AttributeError,
        ValueError,
    ) as exc:
        logger.warning("Unreadable multipart body", extra={"error": str(exc)})
        raise InvalidInputError(
            message=f"Invalid multipart body: {exc}",
            error_code=ERROR_CODE_INVALID_MULTIPART,
        ) from exc

    files: dict[str, UploadedFile] = {}

    for part in decoder.parts:
        disposition = part.headers.get(b"Content-Disposition", b"").decode("utf-8", "replace")
        name, filename = _parse_disposition(disposition)

        if not name or not filename or name in files:
            continue

        files[name] = UploadedFile(field_name=name, filename=filename, content=part.content)

    for field_name in field_names:
        if field_name in files:
            return files[field_name]

    raise InvalidInputError(
        message="there is no uploaded file associated with the given key",
        error_code=ERROR_CODE_MISSING_FILE,
        details={"fields": list(field_names)},
    )
