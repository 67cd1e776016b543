"""Tone-labeled post generation from a cleaned excerpt."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable, Sequence

import requests

from .config import GenerationConfig, GenerationMode
from .errors import (
    ContentPolicy,
    EmptyExcerpt,
    InvalidAPIKey,
    InvalidResponse,
    NotConfigured,
    RateLimit,
    Timeout,
)
from .models import Tone, Variant, truncate_text
from .prompt import SYSTEM_PROMPT, mock_variant_items, user_prompt

logger = logging.getLogger(__name__)


def _raise_for_status(status_code: int) -> None:
    if status_code == 200:
        return
    if status_code == 401:
        raise InvalidAPIKey()
    if status_code == 408:
        raise Timeout()
    if status_code == 429:
        raise RateLimit()
    if 400 <= status_code < 500:
        raise ContentPolicy(f"Request rejected with HTTP {status_code}.")
    raise InvalidResponse(f"Unexpected HTTP status {status_code}.")


def _message_content(body: Any) -> str:
    if not isinstance(body, dict):
        raise InvalidResponse("Response body is not a JSON object.")
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        raise InvalidResponse("Response has no choices.")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise InvalidResponse("Response choice has no message content.")
    return content


def _variant_items(content: str) -> list[dict[str, str]]:
    try:
        payload = json.loads(content)
    except ValueError as exc:
        raise InvalidResponse("Message content is not valid JSON.") from exc

    # json_object replies wrap the array, e.g. {"variants": [...]}
    if isinstance(payload, dict):
        arrays = [value for value in payload.values() if isinstance(value, list)]
        if len(arrays) != 1:
            raise InvalidResponse("Message content does not hold a single variant array.")
        payload = arrays[0]
    if not isinstance(payload, list):
        raise InvalidResponse("Message content is not a JSON array.")

    items: list[dict[str, str]] = []
    for item in payload:
        if (
            not isinstance(item, dict)
            or not isinstance(item.get("tone"), str)
            or not isinstance(item.get("text"), str)
        ):
            raise InvalidResponse("Variant item must have string 'tone' and 'text'.")
        items.append({"tone": item["tone"], "text": item["text"]})
    return items


def build_variants(items: Iterable[dict[str, str]]) -> list[Variant]:
    """Map raw ``{tone, text}`` items to variants, dropping unknown tones."""
    variants: list[Variant] = []
    for item in items:
        tone = Tone.parse(item["tone"])
        if tone is None:
            logger.warning("Discarding variant with unknown tone %r", item["tone"])
            continue
        variants.append(Variant(tone=tone, text=truncate_text(item["text"])))
    if not variants:
        raise InvalidResponse("No variant with a known tone in the response.")
    return variants


def count_truncated(variants: Sequence[Variant]) -> int:
    return sum(1 for variant in variants if variant.is_truncated)


class PostGenerator:
    """Generates post variants with a fixed configuration.

    Create one per process and pass it to whoever needs it. In ``MOCK`` mode no
    network call is made and the output is a deterministic function of the
    excerpt, with the same shape and limits as the remote path.
    """

    def __init__(
        self,
        config: GenerationConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or GenerationConfig()
        self._session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.config.is_api_key_configured

    def is_using_mock_mode(self) -> bool:
        return self.config.mode is GenerationMode.MOCK

    def generate(
        self,
        excerpt: str,
        book_title: str | None = None,
        author: str | None = None,
    ) -> list[Variant]:
        if not excerpt.strip():
            raise EmptyExcerpt()
        if self.is_using_mock_mode():
            return self._generate_mock(excerpt)
        return self._generate_remote(excerpt, book_title, author)

    def _generate_mock(self, excerpt: str) -> list[Variant]:
        logger.info("Mock mode: generating variants without an API call")
        if self.config.mock_delay_seconds > 0:
            time.sleep(self.config.mock_delay_seconds)
        return build_variants(mock_variant_items(excerpt))

    def _request_payload(
        self, excerpt: str, book_title: str | None, author: str | None
    ) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "max_tokens": self.config.max_tokens,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt(excerpt, book_title, author)},
            ],
        }

    def _generate_remote(
        self, excerpt: str, book_title: str | None, author: str | None
    ) -> list[Variant]:
        if not self.is_configured():
            raise NotConfigured()

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._request_payload(excerpt, book_title, author)
        try:
            response = self._session.post(
                self.config.endpoint,
                headers=headers,
                json=payload,
                timeout=self.config.request_timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise Timeout(f"No response within {self.config.request_timeout}s.") from exc
        except requests.exceptions.RequestException as exc:
            # The request never completed; reported the same way as a timeout.
            raise Timeout(f"Request failed: {exc}") from exc

        with response:
            logger.debug("Generation request returned HTTP %s", response.status_code)
            _raise_for_status(response.status_code)
            try:
                body = response.json()
            except ValueError as exc:
                raise InvalidResponse("Response body is not valid JSON.") from exc

        variants = build_variants(_variant_items(_message_content(body)))
        logger.info("Generated %d variant(s)", len(variants))
        return variants
