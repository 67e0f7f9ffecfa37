"""Tests for the content-policy scanner."""

import pytest

from image_guard.core.scanner import SCAN_WINDOW, ScanCategory, scan_content

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


class TestScanContent:

    def test_clean_image_passes(self):
        result = scan_content(PNG_HEADER + bytes(range(256)) * 4)
        assert result.passed is True
        assert result.category is None

    def test_empty_input_passes(self):
        assert scan_content(b"").passed is True

    @pytest.mark.parametrize(
        "payload, category",
        [
            (b"<script>alert(1)</script>", ScanCategory.SCRIPT_TAG),
            (b"<ScRiPt src=x>", ScanCategory.SCRIPT_TAG),
            (b"href=javascript:alert(1)", ScanCategory.JAVASCRIPT_URI),
            (b"JAVASCRIPT:void(0)", ScanCategory.JAVASCRIPT_URI),
            (b"src=data:text/html;base64,PHNjcmlwdD4=", ScanCategory.HTML_DATA_URI),
            (b'<img onclick="x()">', ScanCategory.EVENT_HANDLER),
            (b"<img src=x onerror=alert(1)>", ScanCategory.EVENT_HANDLER),
            (b"<body ONLOAD = init()>", ScanCategory.EVENT_HANDLER),
        ],
    )
    def test_suspicious_patterns(self, payload, category):
        result = scan_content(PNG_HEADER + payload)
        assert result.passed is False
        assert result.category is category

    def test_invalid_utf8_does_not_raise(self):
        data = b"\xff\xfe\xc3\x28\xa0\xa1" * 50 + b"<script>"
        result = scan_content(data)
        assert result.passed is False

    def test_pattern_at_end_of_window_is_found(self):
        payload = b"<script"
        data = b"\x00" * (SCAN_WINDOW - len(payload)) + payload
        assert scan_content(data).passed is False

    def test_pattern_past_window_is_ignored(self):
        data = b"\x00" * SCAN_WINDOW + b"<script>alert(1)</script>"
        assert scan_content(data).passed is True

    def test_pattern_straddling_window_is_ignored(self):
        data = b"\x00" * (SCAN_WINDOW - 3) + b"<script>"
        assert scan_content(data).passed is True

    def test_benign_words_pass(self):
        assert scan_content(PNG_HEADER + b"description: onion loader").passed is True
