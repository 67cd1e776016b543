"""Instructions sent to the text-generation service, and the offline stand-ins."""

from __future__ import annotations

from .models import Tone

SYSTEM_PROMPT = (
    "You write short LinkedIn posts under 900 characters.\n"
    "Start with a strong hook line.\n"
    "Add 1 to 2 crisp supporting lines.\n"
    "End with a question to invite comments.\n"
    "Do not add hashtags unless explicitly requested."
)

_TONE_LABELS = "punchy, contrarian, personal, analytical, open-question"

MOCK_EXCERPT_PREFIX_LENGTH = 50

_MOCK_TEMPLATES: dict[Tone, str] = {
    Tone.PUNCHY: (
        'One line from today\'s reading hit hard: "{excerpt}..." '
        "It flips how I think about doing the work that matters. "
        "Would this change a decision you are making this week?"
    ),
    Tone.CONTRARIAN: (
        'Everyone quotes ideas like this: "{excerpt}..." '
        "I am not convinced it holds up outside the book. "
        "Where do you think it breaks down?"
    ),
    Tone.PERSONAL: (
        'I underlined this passage twice: "{excerpt}..." '
        "It took me back to a mistake I made early in my career and what it taught me. "
        "Has a book ever named something you had lived through?"
    ),
    Tone.ANALYTICAL: (
        'Unpacking one idea: "{excerpt}..." '
        "Three parts stand out: the premise, the mechanism, and the long-term effect. "
        "Which of the three matters most in your work?"
    ),
    Tone.OPEN_QUESTION: (
        'A question I keep coming back to after reading: "{excerpt}..." '
        "It challenges a lot of assumptions about how teams decide. "
        "How would you apply it in your field?"
    ),
}


def user_prompt(excerpt: str, book: str | None = None, author: str | None = None) -> str:
    return (
        f'Source excerpt: "{excerpt}"\n'
        f"Book: {book or 'Unknown'}\n"
        f"Author: {author or 'Unknown'}\n"
        f"Generate 5 variants with tones: {_TONE_LABELS}.\n"
        'Return JSON array where each item is: {"tone":"<tone>", "text":"<post>"}'
    )


def mock_variant_items(excerpt: str) -> list[dict[str, str]]:
    """Deterministic ``{tone, text}`` items shaped like a service reply."""
    short_excerpt = excerpt[:MOCK_EXCERPT_PREFIX_LENGTH]
    return [
        {"tone": tone.value, "text": template.format(excerpt=short_excerpt)}
        for tone, template in _MOCK_TEMPLATES.items()
    ]
