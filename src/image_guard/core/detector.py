"""File content type detection via magic bytes.

Determines the real image format from the bytes alone; filenames and
client-declared content types play no part here.
"""

from image_guard.core.signatures import IMAGE_SIGNATURES, SIGNATURES_BY_MIME


def detect_mime_type(data: bytes) -> str | None:
    """Return the mime type whose signature matches data.

    Args:
        data: File content. Short buffers are fine; signatures that do
            not fit are treated as non-matching.

    Returns:
        The detected mime type, or None if no signature matches.
    """
    for descriptor in IMAGE_SIGNATURES:
        if descriptor.matches(data):
            return descriptor.mime_type
    return None


def matches_signature(data: bytes, mime_type: str) -> bool:
    """Check data against a single format. Unknown mime types never match."""
    descriptor = SIGNATURES_BY_MIME.get(mime_type)
    if descriptor is None:
        return False
    return descriptor.matches(data)
