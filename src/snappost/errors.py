"""Typed failures surfaced by the capture and generation pipelines."""

from __future__ import annotations


class SnapPostError(Exception):
    """Base class; ``code`` is stable, ``user_message`` is safe to show."""

    code = "error"
    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


class CaptureError(SnapPostError):
    pass


class InvalidImage(CaptureError):
    code = "invalid_image"
    user_message = "The image cannot be processed. Please try with a different image."


class RecognitionFailed(CaptureError):
    code = "recognition_failed"
    user_message = "Failed to process the image. Please try again with a clearer photo."


class GenerationError(SnapPostError):
    pass


class EmptyExcerpt(GenerationError):
    code = "empty_excerpt"
    user_message = "There is no text to turn into posts."


class NotConfigured(GenerationError):
    code = "not_configured"
    user_message = "OpenAI API key not configured. Set SNAPPOST_OPENAI_API_KEY."


class InvalidAPIKey(GenerationError):
    code = "invalid_api_key"
    user_message = "AI key is invalid. Please check your API key configuration."


class Timeout(GenerationError):
    code = "timeout"
    user_message = "Request timed out. Please try again."


class RateLimit(GenerationError):
    code = "rate_limit"
    user_message = "Rate limit exceeded. Please wait and try again."


class ContentPolicy(GenerationError):
    code = "content_policy"
    user_message = "Content could not be processed by AI service."


class InvalidResponse(GenerationError):
    code = "invalid_response"
    user_message = "Invalid response from AI service. Please try again."
