"""
Fixtures for end-to-end tests against a running gateway.

Start the API locally with `sam local start-api --port 3000` (or point
E2E_BASE_URL at a deployed stage). Set E2E_MONGODB_URI to the same
deployment the API uses to have storage cleaned between tests.
"""

import base64
import logging
import os

import pytest
import requests
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_BASE_URL = os.getenv("E2E_BASE_URL", "http://127.0.0.1:3000")
MONGODB_URI = os.getenv("E2E_MONGODB_URI")
DATABASE_NAME = os.getenv("IMAGE_DATABASE_NAME", "go-fs")
BUCKET_NAME = os.getenv("IMAGE_BUCKET_NAME", "images")


def pytest_collection_modifyitems(items):
    for item in items:
        if "e2e" in item.nodeid.split("/"):
            item.add_marker(pytest.mark.e2e)


# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_endpoint():
    """Base URL of a reachable gateway, or skip the e2e suite"""
    try:
        requests.options(f"{ENDPOINT_BASE_URL}/api/image", timeout=5)
    except requests.RequestException as e:
        logger.warning(f"Gateway not reachable at {ENDPOINT_BASE_URL}: {e}")
        pytest.skip(f"Gateway not reachable at {ENDPOINT_BASE_URL}: {e}")

    return ENDPOINT_BASE_URL


# ============================================================================
# API Client Fixture
# ============================================================================


@pytest.fixture
def api_client(api_endpoint):
    """HTTP client wrapper for E2E API testing"""
    _client = E2EAPIClient(api_endpoint)
    yield _client


@pytest.fixture(scope="function", autouse=True)
def cleanup_storage_after_each_test():
    """Drop bucket collections to prevent test data leakage."""
    yield

    if not MONGODB_URI:
        return

    logger.info("Cleaning bucket: %s.%s", DATABASE_NAME, BUCKET_NAME)

    client = MongoClient(MONGODB_URI, serverSelectionTimeoutMS=5000)
    try:
        database = client[DATABASE_NAME]
        database[f"{BUCKET_NAME}.chunks"].delete_many({})
        database[f"{BUCKET_NAME}.files"].delete_many({})
    except PyMongoError as err:
        logger.error("Failed to cleanup bucket: %s", BUCKET_NAME, exc_info=err)
    finally:
        client.close()


# ============================================================================
# Sample Image Data
# ============================================================================

SAMPLE_JPEG_BASE64 = "/9j/4AAQSkZJRgABAQEAYABgAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/2wBDAQkJCQwLDBgNDRgyIRwhMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjL/wAARCAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAAAAAAAAAAAAA/8VAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwCwAA8A/9k="

SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+P+/HgAFhAJ/" "wlseKgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def sample_jpeg() -> bytes:
    return base64.b64decode(SAMPLE_JPEG_BASE64)


@pytest.fixture
def sample_png() -> bytes:
    return base64.b64decode(SAMPLE_PNG_BASE64)
