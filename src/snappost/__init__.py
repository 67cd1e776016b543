"""SnapPost: photographed page to ready-to-post text variants."""

from __future__ import annotations

from . import cleaner, config, core, errors, generator, image_proc, layout, models, ocr_engine
from . import prompt, rect_detector
from .config import CaptureConfig, GenerationConfig, GenerationMode
from .core import process_capture
from .generator import PostGenerator
from .models import Excerpt, TextFragment, Tone, Variant


def generate_posts(
    excerpt: str,
    book_title: str | None = None,
    author: str | None = None,
    generator: PostGenerator | None = None,
) -> list[Variant]:
    """Generate post variants with ``generator`` or one built from the environment."""
    if generator is None:
        generator = PostGenerator(GenerationConfig.from_env())
    return generator.generate(excerpt, book_title=book_title, author=author)


__all__ = [
    "CaptureConfig",
    "Excerpt",
    "GenerationConfig",
    "GenerationMode",
    "PostGenerator",
    "TextFragment",
    "Tone",
    "Variant",
    "cleaner",
    "config",
    "core",
    "errors",
    "generate_posts",
    "generator",
    "image_proc",
    "layout",
    "models",
    "ocr_engine",
    "process_capture",
    "prompt",
    "rect_detector",
]
