"""Tests for magic-byte image type detection."""

import pytest

from image_guard.core.detector import detect_mime_type, matches_signature
from image_guard.core.signatures import (
    ALLOWED_MIME_TYPES,
    IMAGE_SIGNATURES,
    SIGNATURES_BY_MIME,
    SignatureDescriptor,
    allowed_formats_label,
)


class TestSignatureCatalog:

    def test_one_descriptor_per_mime_type(self):
        mime_types = [d.mime_type for d in IMAGE_SIGNATURES]
        assert len(mime_types) == len(set(mime_types))

    def test_detection_order(self):
        assert ALLOWED_MIME_TYPES == ("image/jpeg", "image/png", "image/gif", "image/webp")

    def test_formats_label(self):
        assert allowed_formats_label() == "JPEG, PNG, GIF, WebP"

    def test_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            SIGNATURES_BY_MIME["image/bmp"] = SIGNATURES_BY_MIME["image/png"]

    def test_webp_constraints_check_riff_first(self):
        webp = SIGNATURES_BY_MIME["image/webp"]
        assert webp.constraints == ((0, b"RIFF"), (8, b"WEBP"))

    def test_descriptor_with_several_preconditions(self):
        descriptor = SignatureDescriptor(
            "image/x-test", b"TAIL", 8, "Test", "tst", preconditions=((0, b"AB"), (4, b"CD"))
        )
        assert descriptor.matches(b"AB\x00\x00CD\x00\x00TAIL") is True
        assert descriptor.matches(b"AB\x00\x00XX\x00\x00TAIL") is False


class TestDetectMimeType:

    # --- Accepted formats ---

    def test_jpeg_jfif(self):
        assert detect_mime_type(b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01") == "image/jpeg"

    def test_jpeg_exif(self):
        assert detect_mime_type(b"\xff\xd8\xff\xe1\x00\x18Exif\x00\x00") == "image/jpeg"

    def test_png(self):
        assert detect_mime_type(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR") == "image/png"

    def test_gif87a(self):
        assert detect_mime_type(b"GIF87a\x01\x00\x01\x00\x00\x00") == "image/gif"

    def test_gif89a(self):
        assert detect_mime_type(b"GIF89a\x01\x00\x01\x00\x80\x00") == "image/gif"

    def test_webp(self):
        assert detect_mime_type(b"RIFF\x24\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_exact_signature_length(self):
        assert detect_mime_type(b"\xff\xd8\xff") == "image/jpeg"

    # --- Rejected content ---

    def test_webp_without_riff_prefix(self):
        assert detect_mime_type(b"\x00\x00\x00\x00\x24\x00\x00\x00WEBPVP8 ") is None

    def test_riff_wav_is_not_webp(self):
        assert detect_mime_type(b"RIFF\x24\x00\x00\x00WAVEfmt ") is None

    def test_all_zero_bytes(self):
        assert detect_mime_type(b"\x00" * 100) is None

    def test_html(self):
        assert detect_mime_type(b"<!DOCTYPE html><html><body></body></html>") is None

    def test_pdf(self):
        assert detect_mime_type(b"%PDF-1.4\n1 0 obj\n") is None

    def test_svg_is_not_accepted(self):
        assert detect_mime_type(b'<svg xmlns="http://www.w3.org/2000/svg"></svg>') is None

    # --- Short buffers ---

    def test_empty_buffer(self):
        assert detect_mime_type(b"") is None

    def test_truncated_jpeg(self):
        assert detect_mime_type(b"\xff\xd8") is None

    def test_truncated_webp(self):
        # RIFF fits but the WEBP tag does not
        assert detect_mime_type(b"RIFF\x24\x00\x00\x00WEB") is None

    def test_short_buffer_still_matches_short_signatures(self):
        # Too short for PNG or WebP, long enough for GIF
        assert detect_mime_type(b"GIF8") == "image/gif"


class TestMatchesSignature:

    def test_matching_format(self):
        assert matches_signature(b"\x89PNG\r\n\x1a\n", "image/png") is True

    def test_other_format(self):
        assert matches_signature(b"\x89PNG\r\n\x1a\n", "image/jpeg") is False

    def test_unknown_mime_type(self):
        assert matches_signature(b"BM\x00\x00", "image/bmp") is False
