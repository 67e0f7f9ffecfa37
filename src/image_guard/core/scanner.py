"""Screening of file headers for embedded markup and script content."""

import re
from dataclasses import dataclass
from enum import Enum

# Only this many leading bytes are ever scanned
SCAN_WINDOW = 1024


class ScanCategory(str, Enum):
    """Kind of suspicious pattern found."""

    SCRIPT_TAG = "script_tag"
    JAVASCRIPT_URI = "javascript_uri"
    HTML_DATA_URI = "html_data_uri"
    EVENT_HANDLER = "event_handler"


_PATTERNS: tuple[tuple[ScanCategory, re.Pattern[str]], ...] = (
    (ScanCategory.SCRIPT_TAG, re.compile(r"<script", re.IGNORECASE)),
    (ScanCategory.JAVASCRIPT_URI, re.compile(r"javascript:", re.IGNORECASE)),
    (ScanCategory.HTML_DATA_URI, re.compile(r"data:text/html", re.IGNORECASE)),
    (ScanCategory.EVENT_HANDLER, re.compile(r"on(?:click|error|load)\s*=", re.IGNORECASE)),
)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a content scan."""

    passed: bool
    category: ScanCategory | None = None


def scan_content(data: bytes) -> ScanResult:
    """Scan the leading bytes of a file for script or markup patterns.

    Invalid UTF-8 sequences are replaced rather than rejected, so binary
    image data decodes without error.
    """
    header_text = data[:SCAN_WINDOW].decode("utf-8", errors="replace")

    for category, pattern in _PATTERNS:
        if pattern.search(header_text):
            return ScanResult(passed=False, category=category)

    return ScanResult(passed=True)
