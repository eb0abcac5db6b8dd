"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Client Errors
ERROR_CODE_INVALID_INPUT = "INVALID_INPUT"
ERROR_CODE_INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
ERROR_CODE_INVALID_OBJECT_ID = "INVALID_OBJECT_ID"
ERROR_CODE_MISSING_FILE = "MISSING_FILE"
ERROR_CODE_INVALID_MULTIPART = "INVALID_MULTIPART"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE_FAILURE = "STORAGE_FAILURE"
ERROR_CODE_CONNECTION_FAILED = "CONNECTION_FAILED"
ERROR_CODE_CHUNK_WRITE_FAILED = "CHUNK_WRITE_FAILED"
ERROR_CODE_CHUNK_READ_FAILED = "CHUNK_READ_FAILED"
ERROR_CODE_CHUNK_CLEANUP_FAILED = "CHUNK_CLEANUP_FAILED"
ERROR_CODE_CORRUPT_OBJECT = "CORRUPT_OBJECT"

# Metadata / Catalog Errors
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT = "METADATA_INVALID_FORMAT"


# ============================================================================
# File Upload Constraints
# ============================================================================

# Extensions are matched case-sensitively against the filename suffix.
EXTENSION_PATTERN: Final[str] = r"\.[a-zA-Z0-9]+$"

EXTENSION_CONTENT_TYPE_MAP: Final[dict[str, str]] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}

ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(EXTENSION_CONTENT_TYPE_MAP.keys())

# Multipart field names accepted for the uploaded file, in lookup order.
UPLOAD_FIELD_NAMES: Final[tuple[str, ...]] = ("image", "file")


# ============================================================================
# Chunked Object Store
# ============================================================================

# Default chunk size used by GridFS drivers.
DEFAULT_CHUNK_SIZE: Final[int] = 255 * 1024

DEFAULT_DATABASE_NAME = "go-fs"
DEFAULT_BUCKET_NAME = "images"

FILES_COLLECTION_SUFFIX = "files"
CHUNKS_COLLECTION_SUFFIX = "chunks"

DEFAULT_CONNECT_TIMEOUT_MS = 10_000


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"
IMAGE_CACHE_CONTROL = "public, max-age=31536000"

METRICS_NAMESPACE = "ImageGateway"

UPLOAD_SUCCESS_MESSAGE = "Image uploaded successfully"
IMAGE_NOT_FOUND_MESSAGE = "Image not found"
INVALID_FILE_TYPE_MESSAGE = "Invalid file type"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_MONGODB_URI = "MONGODB_SRV_RECORD"
ENV_IMAGE_DATABASE_NAME = "IMAGE_DATABASE_NAME"
ENV_IMAGE_BUCKET_NAME = "IMAGE_BUCKET_NAME"
ENV_IMAGE_CHUNK_SIZE = "IMAGE_CHUNK_SIZE"
ENV_MONGODB_CONNECT_TIMEOUT_MS = "MONGODB_CONNECT_TIMEOUT_MS"

# ============================================================================
# Helper Functions
# ============================================================================


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
