import base64
import json
from http import HTTPStatus
from typing import Any, cast

import pytest

from core.utils.constants import IMAGE_CACHE_CONTROL
from core.utils.response import ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}

    return cast(dict[str, Any], json.loads(body))


def test_created_response() -> None:
    resp = ResponseBuilder.created(
        "Image uploaded successfully",
        data={"image": {"id": "abc", "name": "cat.png", "size": 3}},
        request_id="req-1",
        cors_origin="*",
    )
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.CREATED
    assert parsed["error"] is False
    assert parsed["msg"] == "Image uploaded successfully"
    assert parsed["image"] == {"id": "abc", "name": "cat.png", "size": 3}
    assert parsed["request_id"] == "req-1"
    assert resp["headers"]["Content-Type"] == "application/json"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"


def test_no_content_response() -> None:
    resp = ResponseBuilder.no_content(cors_origin="https://example.com")

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""
    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://example.com"


@pytest.mark.parametrize(
    "func,status",
    [
        (ResponseBuilder.bad_request, HTTPStatus.BAD_REQUEST),
        (ResponseBuilder.not_found, HTTPStatus.NOT_FOUND),
        (ResponseBuilder.internal_error, HTTPStatus.INTERNAL_SERVER_ERROR),
    ],
)
def test_error_responses_use_explicit_message(func, status) -> None:
    resp = func("bad", request_id="req-x", cors_origin="*")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] is True
    assert parsed["msg"] == "bad"
    assert parsed["request_id"] == "req-x"
    assert "details" not in parsed


def test_default_error_messages() -> None:
    assert parse_body(ResponseBuilder.not_found())["msg"] == "Resource not found"
    assert parse_body(ResponseBuilder.internal_error())["msg"] == "Internal server error"


def test_bad_request_with_details() -> None:
    details = [{"field": "filename", "message": "This field is required"}]

    parsed = parse_body(ResponseBuilder.bad_request("invalid", details=details))

    assert parsed["details"] == details


def test_error_without_request_id() -> None:
    parsed = parse_body(ResponseBuilder.bad_request("invalid"))

    assert parsed == {"error": True, "msg": "invalid"}


def test_binary_response() -> None:
    content = b"\x89PNG\r\n\x1a\nbinary-data"

    resp = ResponseBuilder.binary_response(content, content_type="image/png")

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["isBase64Encoded"] is True
    assert base64.b64decode(resp["body"]) == content
    assert resp["headers"]["Content-Type"] == "image/png"
    assert resp["headers"]["Content-Length"] == str(len(content))
    assert resp["headers"]["Cache-Control"] == IMAGE_CACHE_CONTROL
    assert "Access-Control-Allow-Origin" not in resp["headers"]


def test_binary_response_empty_content() -> None:
    resp = ResponseBuilder.binary_response(b"", content_type="image/jpeg")

    assert resp["body"] == ""
    assert resp["headers"]["Content-Length"] == "0"


def test_binary_response_header_overrides() -> None:
    resp = ResponseBuilder.binary_response(
        b"x",
        content_type="image/jpeg",
        cache_control=None,
        headers={"ETag": '"abc"'},
        cors_origin="https://example.com",
    )

    assert "Cache-Control" not in resp["headers"]
    assert resp["headers"]["ETag"] == '"abc"'
    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://example.com"
