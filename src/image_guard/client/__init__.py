"""Upload client for the image validation service."""

from image_guard.client.uploader import ImageUploader, UploadResult

__all__ = ["ImageUploader", "UploadResult"]
