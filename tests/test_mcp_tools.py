import importlib

from PIL import Image

from snappost.config import GenerationConfig, GenerationMode
from snappost.generator import PostGenerator
from snappost.models import Excerpt
from snappost_mcp import server as mcp_server


def _use_mock_generator(monkeypatch):
    generator = PostGenerator(GenerationConfig(mode=GenerationMode.MOCK, mock_delay_seconds=0))
    monkeypatch.setattr(mcp_server, "_generator", generator)


def test_generate_posts_returns_variants(monkeypatch):
    _use_mock_generator(monkeypatch)
    response = mcp_server.generate_posts("Leaders go first when the path is unclear.")
    assert response["ok"] is True
    assert response["error"] is None
    variants = response["data"]["variants"]
    assert [variant["tone"] for variant in variants] == [
        "punchy",
        "contrarian",
        "personal",
        "analytical",
        "openQuestion",
    ]
    assert response["warnings"] == []


def test_generate_posts_reports_typed_error(monkeypatch):
    _use_mock_generator(monkeypatch)
    response = mcp_server.generate_posts("   ")
    assert response["ok"] is False
    assert response["error"] == "empty_excerpt"
    assert response["data"]["message"]


def test_generate_posts_not_configured(monkeypatch):
    generator = PostGenerator(GenerationConfig(mode=GenerationMode.REMOTE, api_key=""))
    monkeypatch.setattr(mcp_server, "_generator", generator)
    response = mcp_server.generate_posts("Some excerpt")
    assert response["ok"] is False
    assert response["error"] == "not_configured"


def test_server_generator_is_built_from_environment(monkeypatch):
    monkeypatch.setenv("SNAPPOST_GENERATION_MODE", "mock")
    reloaded = importlib.reload(mcp_server)
    assert reloaded._generator.is_using_mock_mode()
    monkeypatch.delenv("SNAPPOST_GENERATION_MODE")
    importlib.reload(mcp_server)


def test_process_capture_reads_image_file(tmp_path, monkeypatch):
    path = tmp_path / "page.png"
    Image.new("RGB", (40, 20), "white").save(path)
    seen = {}

    def fake_capture(image, config, source_hint=None):
        seen["size"] = image.size
        return Excerpt(text="A captured sentence.", source_hint=source_hint)

    monkeypatch.setattr(mcp_server, "run_capture", fake_capture)
    response = mcp_server.process_capture(str(path), source_hint="gallery")

    assert seen["size"] == (40, 20)
    assert response["ok"] is True
    assert response["data"]["text"] == "A captured sentence."
    assert response["data"]["source_hint"] == "gallery"


def test_process_capture_invalid_image(tmp_path):
    path = tmp_path / "page.png"
    path.write_text("not an image", encoding="utf-8")
    response = mcp_server.process_capture(str(path))
    assert response["ok"] is False
    assert response["error"] == "invalid_image"


def test_process_capture_missing_path():
    response = mcp_server.process_capture("  ")
    assert response == {
        "ok": False,
        "error": "missing_image_path",
        "data": None,
        "warnings": [],
    }
