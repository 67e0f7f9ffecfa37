"""Validation pipeline for uploaded images."""

import structlog

from image_guard.core.detector import detect_mime_type
from image_guard.core.scanner import scan_content
from image_guard.core.signatures import allowed_formats_label
from image_guard.core.verdict import ValidationVerdict
from image_guard.utils.exceptions import (
    ImageValidationError,
    OversizedFileError,
    SuspiciousContentError,
    TypeMismatchError,
    UnrecognizedFormatError,
)

logger = structlog.get_logger()

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB


def check_size(data: bytes) -> None:
    if len(data) > MAX_FILE_SIZE:
        raise OversizedFileError(len(data), MAX_FILE_SIZE)


def detect_type(data: bytes) -> str:
    detected_type = detect_mime_type(data)
    if detected_type is None:
        raise UnrecognizedFormatError(allowed_formats_label())
    return detected_type


def cross_check_type(declared_type: str | None, detected_type: str) -> None:
    # A missing or empty declaration is not a mismatch
    if declared_type and declared_type != detected_type:
        raise TypeMismatchError(declared_type, detected_type)


def check_content_policy(data: bytes) -> None:
    result = scan_content(data)
    if not result.passed:
        raise SuspiciousContentError(result.category.value)


def validate_image(data: bytes, declared_type: str | None = None) -> ValidationVerdict:
    """Run the full validation pipeline over an uploaded file.

    Steps run in order and stop at the first rejection:
    size limit, signature detection, declared-type cross-check, content scan.

    Args:
        data: Complete file content.
        declared_type: Content type claimed by the client, if any.

    Returns:
        The verdict for this file. The same bytes always give the same verdict.
    """
    try:
        check_size(data)
        detected_type = detect_type(data)
        cross_check_type(declared_type, detected_type)
        check_content_policy(data)
    except ImageValidationError as e:
        logger.info("Image rejected", **{"reason": e.reason.value, "size": len(data), **e.details})
        detected = e.detected_type if isinstance(e, TypeMismatchError) else None
        return ValidationVerdict.rejected(e.message, e.reason, detected_type=detected)

    logger.info("Image accepted", detected_type=detected_type, size=len(data))
    return ValidationVerdict.accepted(detected_type, len(data))
