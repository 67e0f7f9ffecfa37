"""Magic byte signatures for accepted image formats.

Each format registers exactly one descriptor. Formats whose primary
signature sits inside a container (WebP inside RIFF) list the outer tags
as preconditions; every constraint must hold for the format to match.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class SignatureDescriptor:
    """Byte-level fingerprint of one image format."""

    mime_type: str
    signature: bytes
    offset: int
    label: str
    extension: str
    preconditions: tuple[tuple[int, bytes], ...] = ()

    @property
    def constraints(self) -> tuple[tuple[int, bytes], ...]:
        """All (offset, expected_bytes) pairs, preconditions first."""
        return self.preconditions + ((self.offset, self.signature),)

    def matches(self, data: bytes) -> bool:
        """Check every constraint; spans past the end of data never match."""
        for offset, expected in self.constraints:
            end = offset + len(expected)
            if end > len(data) or data[offset:end] != expected:
                return False
        return True


# Detection order. First match wins.
IMAGE_SIGNATURES: tuple[SignatureDescriptor, ...] = (
    SignatureDescriptor("image/jpeg", b"\xff\xd8\xff", 0, "JPEG", "jpg"),
    SignatureDescriptor("image/png", b"\x89PNG\r\n\x1a\n", 0, "PNG", "png"),
    # "GIF8" covers both GIF87a and GIF89a
    SignatureDescriptor("image/gif", b"GIF8", 0, "GIF", "gif"),
    # RIFF....WEBP
    SignatureDescriptor(
        "image/webp", b"WEBP", 8, "WebP", "webp", preconditions=((0, b"RIFF"),)
    ),
)

SIGNATURES_BY_MIME: Mapping[str, SignatureDescriptor] = MappingProxyType(
    {descriptor.mime_type: descriptor for descriptor in IMAGE_SIGNATURES}
)

ALLOWED_MIME_TYPES: tuple[str, ...] = tuple(SIGNATURES_BY_MIME)


def allowed_formats_label() -> str:
    """Human readable list of accepted formats, e.g. 'JPEG, PNG, GIF, WebP'."""
    return ", ".join(descriptor.label for descriptor in IMAGE_SIGNATURES)
