"""MCP server exposing the capture and post generation pipelines."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from snappost.config import CaptureConfig, GenerationConfig
from snappost.core import process_capture as run_capture
from snappost.errors import SnapPostError
from snappost.generator import PostGenerator, count_truncated
from snappost.image_proc import load_image

logger = logging.getLogger(__name__)

mcp = FastMCP("snappost")
_capture_config = CaptureConfig()
_generator = PostGenerator(GenerationConfig.from_env())


def _make_response(
    ok: bool, data: Any = None, error: str | None = None, warnings: list[str] | None = None
) -> dict[str, Any]:
    return {
        "ok": ok,
        "error": error,
        "data": data,
        "warnings": warnings or [],
    }


def _error_response(exc: SnapPostError) -> dict[str, Any]:
    return _make_response(False, data={"message": exc.user_message}, error=exc.code)


@mcp.tool()
def process_capture(image_path: str, source_hint: str | None = None) -> dict[str, Any]:
    """Extract the cleaned excerpt text from a photographed book page."""
    if not image_path or not image_path.strip():
        return _make_response(False, error="missing_image_path")

    try:
        image = load_image(Path(image_path).expanduser())
        excerpt = run_capture(image, _capture_config, source_hint=source_hint)
    except SnapPostError as exc:
        logger.warning("Capture failed for %s: %s", image_path, exc)
        return _error_response(exc)

    warnings = [] if excerpt.text else ["no_text_found"]
    return _make_response(True, data=excerpt.to_dict(), warnings=warnings)


@mcp.tool()
def generate_posts(
    excerpt: str, book_title: str | None = None, author: str | None = None
) -> dict[str, Any]:
    """Generate tone-labeled post variants (max 900 characters each) from an excerpt."""
    try:
        variants = _generator.generate(excerpt or "", book_title=book_title, author=author)
    except SnapPostError as exc:
        logger.warning("Generation failed: %s", exc)
        return _error_response(exc)

    warnings = ["variant_truncated"] if count_truncated(variants) else []
    return _make_response(
        True,
        data={"variants": [variant.to_dict() for variant in variants]},
        warnings=warnings,
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("SNAPPOST_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    mcp.run()
