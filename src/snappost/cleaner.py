"""Text cleanup helpers."""

from __future__ import annotations

from typing import Iterable

_HEADER_MAX_LENGTH = 30


def _is_noise(line: str) -> bool:
    if not line:
        return True
    # page numbers
    if line.isdigit():
        return True
    if len(line) <= 2:
        return True
    # short all-caps running headers and footers
    return len(line) < _HEADER_MAX_LENGTH and line == line.upper()


def remove_noise(lines: Iterable[str]) -> list[str]:
    """Drop page numbers, stray marks and short all-caps headers, keeping order."""
    return [line for line in lines if not _is_noise(line.strip())]


def clean(text: str) -> str:
    """Join hyphenated line breaks, flatten newlines and collapse spaces."""
    cleaned = text.replace("-\r\n", "").replace("-\n", "")
    cleaned = cleaned.replace("\n", " ").replace("\r", " ")
    while "  " in cleaned:
        cleaned = cleaned.replace("  ", " ")
    return cleaned.strip()
