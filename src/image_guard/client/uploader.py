"""Upload client: pre-check, remote validation, then commit to storage.

The validation service is authoritative. A file is only written to
storage after the service accepts it, unless the failure policy is
explicitly set to "open" and the service cannot be reached.
"""

from dataclasses import dataclass

import httpx
import structlog

from image_guard.core.verdict import ValidationVerdict
from image_guard.config import Settings, get_settings
from image_guard.core.signatures import ALLOWED_MIME_TYPES, SIGNATURES_BY_MIME
from image_guard.core.validator import MAX_FILE_SIZE
from image_guard.services.storage import StorageService
from image_guard.utils.exceptions import UploadRejectedError, ValidationUnavailableError

logger = structlog.get_logger()


@dataclass
class UploadResult:
    """A committed upload."""

    key: str
    url: str
    content_type: str
    size: int
    verified: bool  # False when stored under the fail-open policy


class ImageUploader:
    """Client-side upload flow for images."""

    def __init__(
        self,
        storage: StorageService,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.storage = storage
        self.settings = settings or get_settings()
        self._http_client = http_client

    def precheck(self, content_type: str | None, size: int) -> None:
        """Fast coarse check on client-side metadata.

        Raises:
            UploadRejectedError: If the declared type or size is not acceptable.
        """
        if content_type not in ALLOWED_MIME_TYPES:
            raise UploadRejectedError(
                "Please upload a JPG, PNG, GIF, or WebP image.",
                {"content_type": content_type},
            )
        if size > MAX_FILE_SIZE:
            raise UploadRejectedError(
                "Please upload an image smaller than 5MB.",
                {"size": size, "max_size": MAX_FILE_SIZE},
            )

    async def validate(self, data: bytes, declared_type: str | None) -> ValidationVerdict:
        """Ask the validation service for a verdict.

        Raises:
            ValidationUnavailableError: If the service cannot be reached or
                does not answer with a verdict.
        """
        fields = {"declaredType": declared_type} if declared_type else {}

        try:
            response = await self._post(
                self.settings.client.validation_url,
                files={"file": ("upload", data, declared_type or "application/octet-stream")},
                data=fields,
            )
        except httpx.HTTPError as e:
            raise ValidationUnavailableError(f"Validation service unreachable: {e}") from e

        # Only 200 (accepted) and 400 (rejected) carry a verdict
        if response.status_code not in (200, 400):
            raise ValidationUnavailableError(
                f"Validation service error: HTTP {response.status_code}",
                {"status_code": response.status_code},
            )

        try:
            verdict = ValidationVerdict.model_validate(response.json())
        except ValueError as e:
            raise ValidationUnavailableError(f"Malformed validation response: {e}") from e

        if verdict.valid != (response.status_code == 200):
            raise ValidationUnavailableError(
                f"Verdict does not match HTTP {response.status_code}",
                {"status_code": response.status_code},
            )
        return verdict

    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: str | None,
    ) -> UploadResult:
        """Validate an image and store it.

        Args:
            data: File content
            filename: Original filename, for logging only
            content_type: Type declared by the browser/OS for the file

        Returns:
            Where the file was stored

        Raises:
            UploadRejectedError: If the pre-check or the service rejects the file.
            ValidationUnavailableError: If the service is unavailable and the
                failure policy is "closed".
        """
        self.precheck(content_type, len(data))

        failure_policy = self.settings.client.failure_policy
        try:
            verdict = await self.validate(data, content_type)
        except ValidationUnavailableError as e:
            if failure_policy == "closed":
                logger.error("Validation service unavailable, upload aborted", error=e.message)
                raise
            logger.warning(
                "Validation service unavailable, falling back to client-side check",
                error=e.message,
                failure_policy=failure_policy,
            )
            verdict = None

        if verdict is not None and not verdict.valid:
            logger.info("Upload rejected", filename=filename, error=verdict.error)
            raise UploadRejectedError(verdict.error, {"detected_type": verdict.detected_type})

        verified = verdict is not None
        stored_type = verdict.detected_type if verified else content_type
        extension = SIGNATURES_BY_MIME[stored_type].extension

        key = self.storage.generate_upload_key(self.settings.client.upload_prefix, extension)
        await self.storage.upload_file(key, data, content_type=stored_type)
        url = self.storage.get_public_url(key)

        logger.info(
            "Image uploaded",
            filename=filename,
            key=key,
            content_type=stored_type,
            size=len(data),
        )
        return UploadResult(
            key=key,
            url=url,
            content_type=stored_type,
            size=len(data),
            verified=verified,
        )

    async def _post(self, url: str, **kwargs) -> httpx.Response:
        timeout = self.settings.client.request_timeout
        if self._http_client is not None:
            return await self._http_client.post(url, timeout=timeout, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.post(url, timeout=timeout, **kwargs)
