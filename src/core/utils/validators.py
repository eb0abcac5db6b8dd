"""Request validation utilities."""

from typing import Any, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ValidationError

from core.models.errors import InvalidInputError
from core.utils.constants import ERROR_CODE_INVALID_OBJECT_ID

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "valid string" in msg_lower or "valid integer" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        The validated model instance

    Raises:
        InvalidInputError: With the first sanitized message and all
            sanitized errors in `details`
    """
    try:
        return model(**data)

    except ValidationError as exc:
        sanitized_errors = sanitize_validation_errors(exc.errors())
        first = sanitized_errors[0]["message"] if sanitized_errors else "Invalid request params"
        raise InvalidInputError(
            message=first,
            details={"errors": sanitized_errors},
        ) from exc


def parse_object_id(value: str) -> ObjectId:
    """Parse a 24-character hex string into an ObjectId.

    Raises:
        InvalidInputError: If the value is not a valid hex identifier
    """
    try:
        # ObjectId(None) would generate a fresh id instead of failing
        if not isinstance(value, str):
            raise TypeError(f"id must be a string, not {type(value).__name__}")
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidInputError(
            message=str(exc),
            error_code=ERROR_CODE_INVALID_OBJECT_ID,
            details={"id": value},
        ) from exc
