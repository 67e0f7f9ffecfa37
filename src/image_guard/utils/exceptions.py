"""Custom exceptions for Image Guard."""

from enum import Enum
from typing import Any


class RejectionReason(str, Enum):
    """Why an upload was refused."""

    MISSING_FILE = "missing_file"
    OVERSIZED_FILE = "oversized_file"
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    TYPE_MISMATCH = "type_mismatch"
    SUSPICIOUS_CONTENT = "suspicious_content"
    INTERNAL_FAULT = "internal_fault"


class ImageGuardError(Exception):
    """Base exception for Image Guard."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ImageValidationError(ImageGuardError):
    """An upload was rejected by the validation pipeline.

    These are deterministic for a given file: resubmitting the same bytes
    produces the same rejection.
    """

    reason: RejectionReason = RejectionReason.INTERNAL_FAULT
    status_code: int = 400


class MissingFileError(ImageValidationError):
    """No file part in the request."""

    reason = RejectionReason.MISSING_FILE

    def __init__(self) -> None:
        super().__init__("No file provided")


class OversizedFileError(ImageValidationError):
    """File exceeds size limit."""

    reason = RejectionReason.OVERSIZED_FILE

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"File exceeds {max_size // (1024 * 1024)}MB limit",
            {"size": size, "max_size": max_size},
        )


class UnrecognizedFormatError(ImageValidationError):
    """Content matches none of the allowed image signatures."""

    reason = RejectionReason.UNRECOGNIZED_FORMAT

    def __init__(self, allowed_formats: str) -> None:
        super().__init__(
            f"File content does not match any allowed image format ({allowed_formats})"
        )


class TypeMismatchError(ImageValidationError):
    """Declared content type differs from the detected one."""

    reason = RejectionReason.TYPE_MISMATCH

    def __init__(self, declared_type: str, detected_type: str) -> None:
        message = (
            f"File content mismatch: declared as {declared_type} "
            f"but detected as {detected_type}"
        )
        super().__init__(
            message, {"declared_type": declared_type, "detected_type": detected_type}
        )
        self.declared_type = declared_type
        self.detected_type = detected_type


class SuspiciousContentError(ImageValidationError):
    """Leading bytes contain markup or script patterns."""

    reason = RejectionReason.SUSPICIOUS_CONTENT

    def __init__(self, category: str) -> None:
        super().__init__("File contains suspicious content patterns", {"category": category})
        self.category = category


class InternalFaultError(ImageGuardError):
    """Unexpected failure while handling a validation request."""

    pass


class StorageError(ImageGuardError):
    """Error with S3/storage operations."""

    pass


class UploadRejectedError(ImageGuardError):
    """Upload refused by the client-side check or by the validation service."""

    pass


class ValidationUnavailableError(ImageGuardError):
    """Validation service could not be reached and the policy is fail-closed."""

    pass
