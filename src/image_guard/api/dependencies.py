"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends

from image_guard.config import Settings, get_settings
from image_guard.services.storage import StorageService, storage_service


def get_storage() -> StorageService:
    """Get storage service instance."""
    return storage_service


# Type aliases for cleaner dependency injection
Storage = Annotated[StorageService, Depends(get_storage)]
AppSettings = Annotated[Settings, Depends(get_settings)]
