"""API Routes package."""

from image_guard.api.routes import health, validation

__all__ = ["health", "validation"]
