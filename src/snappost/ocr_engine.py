"""OCR helpers."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from PIL import Image

from .models import BoundingBox, TextFragment


def _load_ocrmac():
    try:
        from ocrmac import ocrmac as ocrmac_module
    except ImportError as exc:
        raise RuntimeError(
            "ocrmac is not installed. Install with `pip install ocrmac` on macOS."
        ) from exc
    return ocrmac_module


def to_pixel_box(normalized: Sequence[float], width: int, height: int) -> BoundingBox:
    """Convert a normalized, bottom-left-origin box to top-down pixel coordinates."""
    x, y, box_width, box_height = (float(value) for value in normalized)
    return BoundingBox(
        x=x * width,
        y=(1 - (y + box_height)) * height,
        width=box_width * width,
        height=box_height * height,
    )


def _to_fragments(
    raw_annotations: Iterable[Sequence], width: int, height: int
) -> list[TextFragment]:
    fragments: list[TextFragment] = []
    for item in raw_annotations:
        if len(item) == 3:
            text, confidence, bbox = item
            fragments.append(
                TextFragment(str(text), to_pixel_box(bbox, width, height), float(confidence))
            )
        elif len(item) == 2:
            text, bbox = item
            fragments.append(TextFragment(str(text), to_pixel_box(bbox, width, height)))
        # entries without a box cannot be placed on the page
    return fragments


def run_ocr(
    image: Image.Image,
    *,
    recognition_level: str = "accurate",
    language_preference: Sequence[str] | None = None,
    framework: str = "vision",
) -> list[TextFragment]:
    """Run OCR on a PIL image and return fragments in pixel coordinates."""
    ocrmac_module = _load_ocrmac()
    ocr_kwargs: dict[str, Any] = {"framework": framework}
    if language_preference is not None:
        ocr_kwargs["language_preference"] = list(language_preference)
    if framework != "livetext":
        ocr_kwargs["recognition_level"] = recognition_level

    ocr_instance = ocrmac_module.OCR(image, **ocr_kwargs)
    raw_annotations = ocr_instance.recognize()
    width, height = image.size
    return _to_fragments(raw_annotations, width, height)
