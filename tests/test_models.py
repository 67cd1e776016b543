import pytest

from snappost.models import Excerpt, Tone, Variant, truncate_text


@pytest.mark.parametrize(
    ("raw", "tone"),
    [
        ("punchy", Tone.PUNCHY),
        ("Contrarian", Tone.CONTRARIAN),
        (" PERSONAL ", Tone.PERSONAL),
        ("analytical", Tone.ANALYTICAL),
        ("open-question", Tone.OPEN_QUESTION),
        ("openQuestion", Tone.OPEN_QUESTION),
        ("OPENQUESTION", Tone.OPEN_QUESTION),
        ("open question", None),
        ("sarcastic", None),
        ("", None),
    ],
)
def test_tone_parse(raw, tone):
    assert Tone.parse(raw) is tone


def test_tone_display_names():
    assert [tone.display_name for tone in Tone] == [
        "Punchy",
        "Contrarian",
        "Personal",
        "Analytical",
        "Open Question",
    ]


def test_truncate_text():
    assert truncate_text("short") == "short"
    assert truncate_text("a" * 900) == "a" * 900
    truncated = truncate_text("a" * 901)
    assert len(truncated) == 900
    assert truncated.endswith("...")


def test_variant_rejects_overlong_text():
    with pytest.raises(ValueError):
        Variant(tone=Tone.PUNCHY, text="a" * 901)


def test_variant_to_dict():
    variant = Variant(tone=Tone.OPEN_QUESTION, text="What do you think?")
    data = variant.to_dict()
    assert data["tone"] == "openQuestion"
    assert data["tone_label"] == "Open Question"
    assert data["text"] == "What do you think?"
    assert data["id"] == str(variant.id)


def test_excerpt_to_dict():
    excerpt = Excerpt(text="Some text", source_hint="gallery", confidence=0.5)
    data = excerpt.to_dict()
    assert data["text"] == "Some text"
    assert data["source_hint"] == "gallery"
    assert data["confidence"] == 0.5
    assert data["created_at"].endswith("+00:00")
