"""Image preprocessing helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
from PIL import Image, ImageEnhance, UnidentifiedImageError

from .errors import InvalidImage

if TYPE_CHECKING:
    from .rect_detector import Quadrilateral

logger = logging.getLogger(__name__)

Point = tuple[float, float]


def _ensure_pixels(image: Image.Image) -> None:
    width, height = image.size
    if width <= 0 or height <= 0:
        raise InvalidImage(f"Image has no pixels ({width}x{height}).")
    try:
        image.load()
    except (OSError, ValueError) as exc:
        raise InvalidImage(f"Image pixel data cannot be decoded: {exc}") from exc


def load_image(path: Path) -> Image.Image:
    """Open and fully decode an image file."""
    try:
        image = Image.open(path)
    except (FileNotFoundError, UnidentifiedImageError, OSError) as exc:
        raise InvalidImage(f"Cannot open image {path}: {exc}") from exc
    _ensure_pixels(image)
    return image


def normalize_image(image: Image.Image, max_width: int = 1500) -> Image.Image:
    """Downscale images wider than ``max_width``, keeping the aspect ratio."""
    _ensure_pixels(image)
    width, height = image.size
    if width <= max_width:
        return image

    scale = max_width / width
    new_size = (max_width, max(1, int(height * scale)))
    logger.debug("Downscaling image from %sx%s to %sx%s", width, height, *new_size)
    return image.resize(new_size, Image.Resampling.LANCZOS)


def _to_pixel_corners(quad: Quadrilateral, width: int, height: int) -> list[Point]:
    # Vision corners are normalized with the origin at the bottom-left.
    return [
        (x * width, (1 - y) * height)
        for x, y in (quad.top_left, quad.top_right, quad.bottom_right, quad.bottom_left)
    ]


def _perspective_coefficients(target: Sequence[Point], source: Sequence[Point]) -> list[float]:
    """Solve the 8 coefficients PIL uses to map output pixels back to input pixels."""
    matrix = []
    values = []
    for (x, y), (src_x, src_y) in zip(target, source):
        matrix.append([x, y, 1, 0, 0, 0, -src_x * x, -src_x * y])
        matrix.append([0, 0, 0, x, y, 1, -src_y * x, -src_y * y])
        values.extend((src_x, src_y))
    solution = np.linalg.solve(np.asarray(matrix, dtype=float), np.asarray(values, dtype=float))
    return solution.tolist()


def correct_perspective(image: Image.Image, quad: Quadrilateral | None) -> Image.Image:
    """Warp the detected page quadrilateral onto the full image rectangle."""
    if quad is None:
        return image

    width, height = image.size
    source = _to_pixel_corners(quad, width, height)
    target = [(0.0, 0.0), (float(width), 0.0), (float(width), float(height)), (0.0, float(height))]
    try:
        coefficients = _perspective_coefficients(target, source)
        corrected = image.transform(
            (width, height),
            Image.Transform.PERSPECTIVE,
            coefficients,
            Image.Resampling.BICUBIC,
        )
    except Exception as exc:
        logger.warning("Skipping perspective correction: %s", exc)
        return image
    logger.debug("Perspective corrected using corners %s", source)
    return corrected


def enhance_contrast(image: Image.Image, contrast_factor: float = 1.1) -> Image.Image:
    """Apply a small contrast boost; return the input unchanged if that fails."""
    try:
        enhancer = ImageEnhance.Contrast(image)
        return enhancer.enhance(contrast_factor)
    except Exception as exc:
        logger.warning("Skipping contrast enhancement: %s", exc)
        return image
