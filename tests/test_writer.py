# tests/test_writer.py

from __future__ import annotations

from pathlib import Path

from relnotes.output import MarkdownRenderer, OutputWriter, wrap_html
from relnotes.asana import ApiClient

from .fakes import FakeResponse, FakeSession


def test_base_path_layout(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path / "releases")

    assert writer.base_path("1.5.0") == tmp_path / "releases" / "v1.5.0" / "v1.5.0"


def test_write_document_creates_sibling_files(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path / "out")
    base = writer.base_path("1.0.0")

    assert writer.ensure_directory(base).ok
    md = writer.write_document(base, "md", "# hi\n")
    raw = writer.write_document(base, "bin", b"\x00\x01")

    assert md.ok and md.path == base.parent / "v1.0.0.md"
    assert md.path.read_text(encoding="utf-8") == "# hi\n"
    assert raw.path.read_bytes() == b"\x00\x01"


def test_write_failure_is_reported_not_raised(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path / "missing")
    base = writer.base_path("1.0.0")  # parent never created

    result = writer.write_document(base, "md", "x")

    assert not result.ok
    assert result.stage == "write_md"
    assert result.reason


def test_wrap_html_screen_and_print_layouts() -> None:
    screen = wrap_html("<h1>Hi</h1>", "Version 1.0.0 Release Notes")
    printed = wrap_html("<h1>Hi</h1>", "Version 1.0.0 Release Notes", print_layout=True)

    assert screen.startswith("<!DOCTYPE html>")
    assert "<title>Version 1.0.0 Release Notes</title>" in screen
    assert '<div class="markdown-body">\n<h1>Hi</h1>\n</div>' in screen
    assert "@page" not in screen
    assert "@page { size: a4; margin: 2cm 1.5cm; }" in printed


def test_write_html_and_pdf(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path)
    base = writer.base_path("1.0.0")
    writer.ensure_directory(base)

    html = writer.write_html(base, "<h1>Release</h1><ul><li>one</li></ul>", "Release")
    pdf = writer.write_pdf(base, "<h1>Release</h1><ul><li>one</li></ul>", "Release")

    assert html.ok and "<h1>Release</h1>" in html.path.read_text(encoding="utf-8")
    assert pdf.ok and pdf.path.read_bytes().startswith(b"%PDF")


def test_renderer_posts_text_and_mode(config) -> None:
    session = FakeSession({("POST", config.markdown_api_url): FakeResponse(200, text="<h1>x</h1>")})
    renderer = MarkdownRenderer(config, api=ApiClient(session=session))

    assert renderer.render("# x") == "<h1>x</h1>"
    assert session.requests[0]["json"] == {"text": "# x", "mode": "gfm"}
    assert "Authorization" not in session.requests[0]["headers"]


def test_renderer_failure_and_empty_response(config) -> None:
    config.github_token = "gh"
    session = FakeSession({("POST", config.markdown_api_url): FakeResponse(200, text="  ")})
    renderer = MarkdownRenderer(config, api=ApiClient(session=session))

    assert renderer.render("# x") is None
    assert session.requests[0]["headers"]["Authorization"] == "Bearer gh"

    session.routes.clear()
    assert renderer.render("# x") is None
