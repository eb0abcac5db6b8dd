"""
Pytest configuration and fixtures for image gateway tests.
Provides a mongomock-backed MongoDB, bucket fixtures and multipart events.
"""

import base64
import os
from collections.abc import Callable
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import mongomock
import pytest
from bson import ObjectId
from requests_toolbelt.multipart.encoder import MultipartEncoder

os.environ.setdefault("MONGODB_SRV_RECORD", "mongodb://localhost:27017")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-gateway-test")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageGateway")

from core.infrastructure.adapters.mongodb_adapter import MongoDBAdapter  # noqa: E402
from core.infrastructure.mongodb.bucket import MongoImageBucket  # noqa: E402
from core.infrastructure.mongodb.chunk_store import MongoChunkStore  # noqa: E402
from core.infrastructure.mongodb.object_catalog import MongoObjectCatalog  # noqa: E402


@pytest.fixture(scope="function")
def mongo_client():
    """
    In-memory MongoDB shared by every adapter built during one test.

    The process-wide client factory is patched, so code paths that build
    their own adapter (handlers, services) see the same data as the test.
    """
    client = mongomock.MongoClient()

    with patch(
        "core.infrastructure.adapters.mongodb_adapter.get_mongo_client",
        return_value=client,
    ):
        yield client


@pytest.fixture
def mongo_adapter(mongo_client) -> MongoDBAdapter:
    return MongoDBAdapter(mongo_client)


@pytest.fixture
def files_collection(mongo_adapter):
    return mongo_adapter.files


@pytest.fixture
def chunks_collection(mongo_adapter):
    return mongo_adapter.chunks


@pytest.fixture
def catalog(mongo_adapter) -> MongoObjectCatalog:
    return MongoObjectCatalog(mongo_adapter)


@pytest.fixture
def make_chunk_store(mongo_adapter, catalog) -> Callable[[int], MongoChunkStore]:
    """
    Helper to build a chunk store with an explicit chunk size.

    Usage:
        store = make_chunk_store(4)
    """

    def _make(chunk_size: int) -> MongoChunkStore:
        return MongoChunkStore(mongo_adapter, catalog=catalog, chunk_size=chunk_size)

    return _make


@pytest.fixture
def image_bucket(mongo_adapter) -> MongoImageBucket:
    return MongoImageBucket(mongo_adapter)


@pytest.fixture
def files_insert(files_collection) -> Callable[..., dict[str, Any]]:
    """
    Helper to insert a raw files-collection document.

    Usage:
        doc = files_insert(filename="cat.png", length=3)
    """

    def _insert(**overrides: Any) -> dict[str, Any]:
        document: dict[str, Any] = {
            "_id": ObjectId(),
            "filename": "cat.png",
            "length": 0,
            "chunkSize": 4,
            "uploadDate": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            "metadata": {"ext": ".png"},
        }
        document.update(overrides)
        files_collection.insert_one(document)
        return document

    return _insert


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Helper to build an API Gateway proxy event with a multipart body.

    Usage:
        event = multipart_event({"image": ("cat.png", data, "image/png")})
    """

    def _build(
        fields: dict[str, Any],
        *,
        base64_encoded: bool = True,
        content_type_header: str = "Content-Type",
    ) -> dict[str, Any]:
        encoder = MultipartEncoder(fields=fields)
        body = encoder.to_string()

        return {
            "httpMethod": "POST",
            "path": "/api/image",
            "headers": {content_type_header: encoder.content_type},
            "body": base64.b64encode(body).decode("utf-8") if base64_encoded else body.decode("latin-1"),
            "isBase64Encoded": base64_encoded,
        }

    return _build
