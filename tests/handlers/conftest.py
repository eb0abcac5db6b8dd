from typing import Any

import pytest


@pytest.fixture
def get_by_id_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/api/image/id/65a5f0c2e4b0a1b2c3d4e5f6",
        "pathParameters": {"id": "65a5f0c2e4b0a1b2c3d4e5f6"},
        "headers": {},
    }


@pytest.fixture
def get_by_name_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/api/image/name/my%20cat.png",
        "pathParameters": {"name": "my%20cat.png"},
        "headers": {},
    }


@pytest.fixture
def upload_image_event(multipart_event, sample_image_binary) -> dict[str, Any]:
    return multipart_event({"image": ("test_upload.png", sample_image_binary, "image/png")})
