"""Value types shared by the capture and generation pipelines."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

MAX_VARIANT_LENGTH = 900
ELLIPSIS = "..."


class Tone(str, Enum):
    """Closed set of post tones."""

    PUNCHY = "punchy"
    CONTRARIAN = "contrarian"
    PERSONAL = "personal"
    ANALYTICAL = "analytical"
    OPEN_QUESTION = "openQuestion"

    @property
    def display_name(self) -> str:
        if self is Tone.OPEN_QUESTION:
            return "Open Question"
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str) -> Tone | None:
        """Map a loosely formatted tone label ("Open-Question", "PUNCHY") to a Tone."""
        key = raw.strip().lower().replace("-", "")
        for tone in cls:
            if tone.value.lower() == key:
                return tone
        return None


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in top-down pixel coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class TextFragment:
    """Single recognized span with its image-space bounding box."""

    text: str
    bbox: BoundingBox
    confidence: float | None = None


@dataclass
class Row:
    fragments: list[TextFragment] = field(default_factory=list)

    @property
    def reference_center(self) -> float:
        if not self.fragments:
            return 0.0
        return self.fragments[0].bbox.mid_y

    def text(self) -> str:
        return " ".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True)
class Excerpt:
    text: str
    source_hint: str | None = None
    confidence: float | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "text": self.text,
            "created_at": self.created_at.isoformat(),
            "source_hint": self.source_hint,
            "confidence": self.confidence,
        }


def truncate_text(text: str, limit: int = MAX_VARIANT_LENGTH) -> str:
    """Clamp text to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


@dataclass(frozen=True)
class Variant:
    tone: Tone
    text: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        if len(self.text) > MAX_VARIANT_LENGTH:
            raise ValueError(f"Variant text exceeds {MAX_VARIANT_LENGTH} characters.")

    @property
    def is_truncated(self) -> bool:
        return len(self.text) == MAX_VARIANT_LENGTH and self.text.endswith(ELLIPSIS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "tone": self.tone.value,
            "tone_label": self.tone.display_name,
            "text": self.text,
        }
