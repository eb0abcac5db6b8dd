"""
Lambda handler responsible for image upload (POST /api/image).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import InvalidInputError, StorageFailureError
from core.utils.constants import METRICS_NAMESPACE, UPLOAD_SUCCESS_MESSAGE
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import extract_upload_file
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ImageUploadRequest
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    The handler extracts the `image` (or `file`) part of a multipart/form-data
    body, validates its extension, stores it as chunks and returns a summary
    of the newly created image.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "<base64 multipart body>",
        "isBase64Encoded": true
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response; 201 with
        ``{"error": false, "msg": ..., "image": {"id", "name", "size"}}``
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
            "remaining_time_ms": context.get_remaining_time_in_millis()
            if hasattr(context, "get_remaining_time_in_millis")
            else None,
        },
    )

    try:
        uploaded = extract_upload_file(event)
        request = validate_request(
            ImageUploadRequest,
            {"filename": uploaded.filename, "content": uploaded.content},
        )
        service = UploadService()
        result = service.upload_image(filename=request.filename, content=request.content)

    except InvalidInputError as exc:
        logger.warning(
            "Rejected image upload",
            extra={"error_code": exc.error_code, "error": exc.message},
        )
        return ResponseBuilder.bad_request(
            exc.message,
            details=exc.details.get("errors"),
            request_id=request_id,
        )

    except StorageFailureError as exc:
        logger.exception(
            "Infrastructure error during image upload",
            extra={"error_code": exc.error_code},
        )
        metrics.add_metric(name="ImageUploadFailed", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.created(
        UPLOAD_SUCCESS_MESSAGE,
        data={"image": result.model_dump()},
        request_id=request_id,
    )
