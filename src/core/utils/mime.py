import re
from collections.abc import Mapping

from core.utils.constants import (
    ALLOWED_EXTENSIONS,
    EXTENSION_CONTENT_TYPE_MAP,
    EXTENSION_PATTERN,
)

_EXTENSION_RE = re.compile(EXTENSION_PATTERN)

CONTENT_TYPES: Mapping[str, str] = EXTENSION_CONTENT_TYPE_MAP


def extract_extension(filename: str) -> str:
    """Return the trailing `.ext` of a filename, or an empty string."""
    match = _EXTENSION_RE.search(filename)
    return match.group(0) if match else ""


def is_allowed_extension(extension: str) -> bool:
    return extension in ALLOWED_EXTENSIONS


def content_type_for(extension: str) -> str:
    try:
        return CONTENT_TYPES[extension]
    except KeyError:
        raise ValueError(f"Unsupported image extension: {extension!r}") from None
