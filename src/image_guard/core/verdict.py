"""Validation verdict model shared by the pipeline, the API and the client."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from image_guard.utils.exceptions import RejectionReason


class ValidationVerdict(BaseModel):
    """Accept/reject decision for a single uploaded file.

    Accepted verdicts carry the detected type and size; rejected verdicts
    carry an error message (and, for type mismatches, the detected type).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    valid: bool
    detected_type: str | None = Field(None, alias="detectedType")
    size: int | None = Field(None, ge=0)
    error: str | None = None

    # Diagnostic only, never serialized to the client
    reason: RejectionReason | None = Field(None, exclude=True)

    @model_validator(mode="after")
    def _check_consistency(self) -> "ValidationVerdict":
        if self.valid:
            if self.detected_type is None or self.size is None or self.error is not None:
                raise ValueError("accepted verdict needs detectedType and size and no error")
        elif self.error is None:
            raise ValueError("rejected verdict needs an error")
        return self

    @classmethod
    def accepted(cls, detected_type: str, size: int) -> "ValidationVerdict":
        return cls(valid=True, detected_type=detected_type, size=size)

    @classmethod
    def rejected(
        cls,
        error: str,
        reason: RejectionReason,
        detected_type: str | None = None,
    ) -> "ValidationVerdict":
        return cls(valid=False, error=error, reason=reason, detected_type=detected_type)

    def to_response(self) -> dict[str, Any]:
        """JSON body for the HTTP response."""
        return self.model_dump(by_alias=True, exclude_none=True)
