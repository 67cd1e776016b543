"""Capture-to-text pipeline orchestration."""

from __future__ import annotations

import logging
from statistics import fmean
from typing import Sequence

from PIL import Image

from .cleaner import clean, remove_noise
from .config import CaptureConfig
from .errors import RecognitionFailed
from .image_proc import correct_perspective, enhance_contrast, normalize_image
from .layout import reconstruct_lines
from .models import Excerpt, TextFragment
from .ocr_engine import run_ocr
from .rect_detector import detect_quadrilateral

logger = logging.getLogger(__name__)


def _recognize(image: Image.Image, config: CaptureConfig) -> list[TextFragment]:
    try:
        return run_ocr(
            image,
            recognition_level=config.recognition_level,
            language_preference=config.recognition_languages,
            framework=config.framework,
        )
    except Exception as exc:
        raise RecognitionFailed(f"Text recognition failed: {exc}") from exc


def _mean_confidence(fragments: Sequence[TextFragment]) -> float | None:
    scores = [fragment.confidence for fragment in fragments if fragment.confidence is not None]
    if not scores:
        return None
    return fmean(scores)


def process_capture(
    image: Image.Image,
    config: CaptureConfig | None = None,
    *,
    source_hint: str | None = None,
) -> Excerpt:
    """Run the capture pipeline on one photographed page and return its excerpt."""
    config = config or CaptureConfig()

    normalized = normalize_image(image, max_width=config.max_image_width)
    quad = detect_quadrilateral(normalized, config)
    corrected = correct_perspective(normalized, quad)
    enhanced = enhance_contrast(corrected, config.contrast_factor)

    fragments = _recognize(enhanced, config)
    lines = reconstruct_lines(fragments, y_tolerance=config.y_tolerance_pixels)
    kept = remove_noise(lines)
    text = clean(" ".join(kept))
    logger.info(
        "Capture processed: %d fragment(s), %d line(s), %d kept, %d character(s)",
        len(fragments),
        len(lines),
        len(kept),
        len(text),
    )
    return Excerpt(text=text, source_hint=source_hint, confidence=_mean_confidence(fragments))
