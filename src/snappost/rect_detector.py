"""Page quadrilateral detection on top of Apple Vision."""

from __future__ import annotations

import importlib
import io
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from PIL import Image

from .config import CaptureConfig
from .errors import RecognitionFailed

logger = logging.getLogger(__name__)

Point = tuple[float, float]

_PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")


@dataclass(frozen=True)
class Quadrilateral:
    """Detected rectangle with corners normalized to 0-1, origin at the bottom-left."""

    confidence: float
    top_left: Point
    top_right: Point
    bottom_left: Point
    bottom_right: Point

    def _corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    @property
    def width(self) -> float:
        xs = [x for x, _ in self._corners()]
        return max(xs) - min(xs)

    @property
    def height(self) -> float:
        ys = [y for _, y in self._corners()]
        return max(ys) - min(ys)

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 0.0
        return self.width / self.height


def _is_page_like(candidate: Quadrilateral, config: CaptureConfig) -> bool:
    return (
        candidate.confidence >= config.rectangle_min_confidence
        and candidate.aspect_ratio >= config.rectangle_min_aspect_ratio
        and candidate.width >= config.rectangle_min_size
        and candidate.height >= config.rectangle_min_size
    )


def select_quadrilateral(
    candidates: Iterable[Quadrilateral], config: CaptureConfig | None = None
) -> Quadrilateral | None:
    """Pick the most confident page-like candidate; the first one wins ties."""
    config = config or CaptureConfig()
    best: Quadrilateral | None = None
    for candidate in candidates:
        if not _is_page_like(candidate, config):
            continue
        if best is None or candidate.confidence > best.confidence:
            best = candidate
    return best


def _load_vision() -> tuple[Any, Any]:
    try:
        vision = importlib.import_module("Vision")
        foundation = importlib.import_module("Foundation")
    except ImportError as exc:
        raise RuntimeError(
            "Apple Vision bindings are not installed. "
            "Install with `pip install pyobjc-framework-Vision` on macOS."
        ) from exc
    return vision, foundation


def _point(value: Any) -> Point:
    return (float(value.x), float(value.y))


def _run_rectangle_request(image: Image.Image, config: CaptureConfig) -> list[Quadrilateral]:
    vision, foundation = _load_vision()

    if image.mode not in _PNG_MODES:
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    payload = buffer.getvalue()
    data = foundation.NSData.dataWithBytes_length_(payload, len(payload))

    handler = vision.VNImageRequestHandler.alloc().initWithData_options_(data, None)
    request = vision.VNDetectRectanglesRequest.alloc().init()
    request.setMinimumAspectRatio_(config.rectangle_min_aspect_ratio)
    request.setMinimumSize_(config.rectangle_min_size)
    request.setQuadratureTolerance_(config.rectangle_quadrature_tolerance)
    request.setMinimumConfidence_(config.rectangle_min_confidence)
    request.setMaximumObservations_(0)

    success, error = handler.performRequests_error_([request], None)
    if not success:
        raise RuntimeError(str(error))

    return [
        Quadrilateral(
            confidence=float(observation.confidence()),
            top_left=_point(observation.topLeft()),
            top_right=_point(observation.topRight()),
            bottom_left=_point(observation.bottomLeft()),
            bottom_right=_point(observation.bottomRight()),
        )
        for observation in (request.results() or [])
    ]


def detect_quadrilateral(
    image: Image.Image, config: CaptureConfig | None = None
) -> Quadrilateral | None:
    """Return the best page quadrilateral in ``image`` or ``None``."""
    config = config or CaptureConfig()
    try:
        candidates = _run_rectangle_request(image, config)
    except Exception as exc:
        raise RecognitionFailed(f"Rectangle detection failed: {exc}") from exc

    quad = select_quadrilateral(candidates, config)
    logger.debug(
        "Rectangle detection: %d candidate(s), selected %s",
        len(candidates),
        quad,
    )
    return quad
