"""
Lambda handlers responsible for image retrieval.

- GET /api/image/id/{id}      -> get_by_id_handler
- GET /api/image/name/{name}  -> get_by_name_handler
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    InvalidInputError,
    NotFoundError,
    StorageFailureError,
)
from core.utils.constants import IMAGE_NOT_FOUND_MESSAGE, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DownloadedImage, GetImageByIdRequest, GetImageByNameRequest
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def _log_request(event: dict[str, Any], context: LambdaContext, message: str) -> None:
    logger.info(
        message,
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "path_params": event.get("pathParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )


def _image_response(image: DownloadedImage) -> dict[str, Any]:
    metrics.add_metric(name="ImageServed", unit=MetricUnit.Count, value=1)
    return ResponseBuilder.binary_response(
        image.content,
        content_type=image.content_type,
    )


@api_gateway_handler
@tracer.capture_lambda_handler(capture_response=False)
@metrics.log_metrics()
def get_by_id_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Serve an image by its identifier.

    Args:
        event: API Gateway event payload with `pathParameters.id`.
        context: AWS Lambda runtime context.

    Returns:
        200 with the raw image bytes, 400 for a malformed id,
        404 when no image exists, 500 on storage failure.
    """
    _log_request(event, context, "Received image by id request")
    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(GetImageByIdRequest, {"id": path_params.get("id")})
        image = GetService().download_by_id(request.id)

    except InvalidInputError as exc:
        logger.warning("Invalid image id", extra={"error": exc.message})
        return ResponseBuilder.bad_request(exc.message, request_id=request_id)

    except NotFoundError:
        logger.info("Image not found", extra={"image_id": path_params.get("id")})
        metrics.add_metric(name="ImageNotFound", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.not_found(IMAGE_NOT_FOUND_MESSAGE, request_id=request_id)

    except StorageFailureError as exc:
        logger.exception(
            "Get image failed",
            extra={"image_id": path_params.get("id"), "error_code": exc.error_code},
        )
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    return _image_response(image)


@api_gateway_handler
@tracer.capture_lambda_handler(capture_response=False)
@metrics.log_metrics()
def get_by_name_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Serve the most recently uploaded image with a given filename.

    Args:
        event: API Gateway event payload with `pathParameters.name`.
        context: AWS Lambda runtime context.

    Returns:
        200 with the raw image bytes, 404 when no image has the name,
        500 on storage failure.
    """
    _log_request(event, context, "Received image by name request")
    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(GetImageByNameRequest, {"name": path_params.get("name")})
        image = GetService().download_by_name(request.name)

    except InvalidInputError as exc:
        # A missing path parameter means the route matched without a name.
        logger.warning("Invalid image name", extra={"error": exc.message})
        metrics.add_metric(name="ImageNotFound", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.not_found(IMAGE_NOT_FOUND_MESSAGE, request_id=request_id)

    except NotFoundError:
        logger.info("Image not found", extra={"image_name": path_params.get("name")})
        metrics.add_metric(name="ImageNotFound", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.not_found(IMAGE_NOT_FOUND_MESSAGE, request_id=request_id)

    except StorageFailureError as exc:
        logger.exception(
            "Get image failed",
            extra={"image_name": path_params.get("name"), "error_code": exc.error_code},
        )
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    return _image_response(image)
