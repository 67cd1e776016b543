from snappost.prompt import SYSTEM_PROMPT, mock_variant_items, user_prompt


def test_user_prompt_embeds_excerpt_and_metadata():
    prompt = user_prompt("This is a test excerpt from a book.", "Test Book", "Test Author")
    assert '"This is a test excerpt from a book."' in prompt
    assert "Book: Test Book" in prompt
    assert "Author: Test Author" in prompt
    assert "Generate 5 variants" in prompt
    assert "JSON array" in prompt


def test_user_prompt_defaults_unknown_metadata():
    prompt = user_prompt("excerpt")
    assert "Book: Unknown" in prompt
    assert "Author: Unknown" in prompt


def test_system_prompt_states_limits():
    assert "900 characters" in SYSTEM_PROMPT
    assert "question" in SYSTEM_PROMPT
    assert "hashtags" in SYSTEM_PROMPT


def test_mock_items_use_fixed_tone_order():
    items = mock_variant_items("Innovation requires courage to challenge the status quo.")
    assert [item["tone"] for item in items] == [
        "punchy",
        "contrarian",
        "personal",
        "analytical",
        "openQuestion",
    ]
    assert all("Innovation requires courage" in item["text"] for item in items)
