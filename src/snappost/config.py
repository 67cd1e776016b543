"""Pipeline configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

PLACEHOLDER_API_KEY = "your-openai-api-key-here"
DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


@dataclass(frozen=True)
class CaptureConfig:
    """Knobs for the capture-to-text pipeline."""

    recognition_languages: tuple[str, ...] = ("en-US",)
    recognition_level: str = "accurate"
    framework: str = "vision"
    rectangle_min_aspect_ratio: float = 0.5
    rectangle_min_size: float = 0.2
    rectangle_quadrature_tolerance: float = 20.0
    rectangle_min_confidence: float = 0.5
    # vertical distance, in pixels, under which fragments share a row
    y_tolerance_pixels: float = 18.0
    max_image_width: int = 1500
    contrast_factor: float = 1.1


class GenerationMode(str, Enum):
    REMOTE = "remote"
    MOCK = "mock"


@dataclass(frozen=True)
class GenerationConfig:
    """Fixed settings for one ``PostGenerator``."""

    mode: GenerationMode = GenerationMode.REMOTE
    api_key: str = PLACEHOLDER_API_KEY
    model: str = "gpt-4o-mini"
    endpoint: str = DEFAULT_ENDPOINT
    temperature: float = 0.8
    top_p: float = 0.9
    max_tokens: int = 1600
    request_timeout: float = 8.0
    mock_delay_seconds: float = 1.5

    @property
    def is_api_key_configured(self) -> bool:
        key = self.api_key.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GenerationConfig:
        """Build a config from ``SNAPPOST_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        mode_value = env.get("SNAPPOST_GENERATION_MODE", defaults.mode.value).strip().lower()
        try:
            mode = GenerationMode(mode_value)
        except ValueError as exc:
            choices = ", ".join(item.value for item in GenerationMode)
            raise ValueError(
                f"Unknown SNAPPOST_GENERATION_MODE {mode_value!r}. Expected one of: {choices}."
            ) from exc

        api_key = (
            env.get("SNAPPOST_OPENAI_API_KEY")
            or env.get("OPENAI_API_KEY")
            or defaults.api_key
        )

        return cls(
            mode=mode,
            api_key=api_key,
            model=env.get("SNAPPOST_OPENAI_MODEL") or defaults.model,
            request_timeout=_float_from_env(
                env, "SNAPPOST_REQUEST_TIMEOUT", defaults.request_timeout
            ),
            mock_delay_seconds=_float_from_env(
                env, "SNAPPOST_MOCK_DELAY", defaults.mock_delay_seconds
            ),
        )


def _float_from_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative.")
    return value
