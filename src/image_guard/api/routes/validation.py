"""Image validation API endpoints."""

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.types import Message

from image_guard.core.validator import MAX_FILE_SIZE, validate_image
from image_guard.utils.exceptions import (
    ImageValidationError,
    InternalFaultError,
    MissingFileError,
    OversizedFileError,
)

logger = structlog.get_logger()

router = APIRouter(tags=["Validation"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Allowance for multipart boundaries and the declaredType part
_MULTIPART_OVERHEAD = 64 * 1024
_MAX_BODY_SIZE = MAX_FILE_SIZE + _MULTIPART_OVERHEAD


def _reject_oversized_body(request: Request) -> None:
    """Refuse bodies whose declared length cannot hold an acceptable file."""
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > _MAX_BODY_SIZE:
        raise OversizedFileError(int(content_length), MAX_FILE_SIZE)


def _bounded_request(request: Request) -> Request:
    """Wrap the receive channel so the body can never exceed _MAX_BODY_SIZE.

    Covers chunked uploads that carry no Content-Length: the request is
    aborted before the multipart parser spools more than the limit.
    """
    receive = request.receive
    received = 0

    async def bounded_receive() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > _MAX_BODY_SIZE:
                raise OversizedFileError(received, MAX_FILE_SIZE)
        return message

    return Request(request.scope, bounded_receive)


def _is_multipart(request: Request) -> bool:
    return request.headers.get("content-type", "").lower().startswith("multipart/form-data")


@router.options("/validate-image")
async def validate_image_preflight() -> Response:
    """CORS pre-flight."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/validate-image")
async def validate_image_upload(request: Request) -> Response:
    """Validate an uploaded image by its content.

    Multipart fields:
    - file: the image bytes (required)
    - declaredType: content type claimed by the client (optional)

    Returns 200 with the detected type and size when the file is accepted.
    Rejections return 400 with the reason; internal failures return 500.
    """
    try:
        _reject_oversized_body(request)

        async with _bounded_request(request).form() as form:
            upload = form.get("file")
            if not isinstance(upload, UploadFile):
                # A multipart body that yields no parts at all did not parse
                if _is_multipart(request) and not form:
                    raise InternalFaultError("Malformed multipart body")
                raise MissingFileError()

            declared_type = form.get("declaredType")
            if not isinstance(declared_type, str):
                declared_type = None

            # One byte past the limit is enough to know the file is too large
            data = await upload.read(MAX_FILE_SIZE + 1)

        verdict = validate_image(data, declared_type)
    except ImageValidationError:
        raise
    except Exception as e:
        logger.exception("Image validation failed", error=str(e))
        raise InternalFaultError("Internal validation error") from e

    return JSONResponse(
        status_code=200 if verdict.valid else 400,
        content=verdict.to_response(),
    )
