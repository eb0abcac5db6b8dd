#!/usr/bin/env python3
"""
Seed script to populate the gateway via its HTTP endpoints.

Every image is uploaded with a multipart/form-data POST and then fetched back
by id and by name to confirm the round trip.

Run:
    python seed/seed_images.py \
      --base-url http://127.0.0.1:3000 \
      path/to/cat.png path/to/dog.jpg
"""

import argparse
from pathlib import Path
import sys
from typing import Any, cast
from urllib.parse import quote

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

DEFAULT_BASE_URL = "http://127.0.0.1:3000"
UPLOAD_PATH = "/api/image"
GET_BY_ID_PATH = "/api/image/id/{0}"
GET_BY_NAME_PATH = "/api/image/name/{0}"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images via the image gateway API")

    parser.add_argument(
        "images",
        nargs="+",
        type=Path,
        help="Image files to upload (.png, .jpg or .jpeg)",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="Gateway base URL (default: sam local start-api on port 3000)",
    )
    parser.add_argument(
        "--field",
        default="image",
        choices=("image", "file"),
        help="Multipart field name to upload under",
    )

    return parser.parse_args()


def upload_image(base_url: str, image_path: Path, field: str) -> dict[str, Any] | None:
    with open(image_path, "rb") as f:
        response = requests.post(
            f"{base_url}{UPLOAD_PATH}",
            files={field: (image_path.name, f)},
            timeout=30,
        )

    response_json = cast(dict[str, Any], response.json())

    if response.status_code != 201:
        logger.error(
            "Failed to seed image",
            extra={
                "image": image_path.name,
                "status": response.status_code,
                "response": response_json,
            },
        )
        return None

    image = cast(dict[str, Any], response_json["image"])
    logger.info("Seeded image", extra={"image": image_path.name, "image_id": image["id"]})
    return image


def verify_image(base_url: str, image: dict[str, Any], expected: bytes) -> None:
    urls = (
        f"{base_url}{GET_BY_ID_PATH.format(image['id'])}",
        f"{base_url}{GET_BY_NAME_PATH.format(quote(image['name']))}",
    )

    for url in urls:
        response = requests.get(url, timeout=30)
        logger.info(
            "Fetched seeded image",
            extra={
                "url": url,
                "status": response.status_code,
                "content_type": response.headers.get("Content-Type"),
                "matches": response.content == expected,
            },
        )


def seed_images() -> None:
    try:
        args = parse_args()
        base_url = args.base_url.rstrip("/")

        logger.info("Starting seeding process", extra={"api_base_url": base_url})

        for image_path in cast(list[Path], args.images):
            if not image_path.exists():
                logger.warning("Image file not found", extra={"path": str(image_path)})
                continue

            image = upload_image(base_url, image_path, args.field)
            if image is not None:
                verify_image(base_url, image, image_path.read_bytes())

        logger.info("Seeding completed")

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()
