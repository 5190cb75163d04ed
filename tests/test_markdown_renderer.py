from __future__ import annotations

from quiz_guard.core.markdown_math_renderer import MarkdownMathRenderer, renderer


def test_fragment_renders_markdown():
    html = renderer.render_fragment("**Solve** $x^2 = 4$")

    assert "<strong>Solve</strong>" in html
    assert "$x^2 = 4$" in html


def test_blank_text_gets_placeholder():
    assert renderer.render_fragment("   \n") == "<p><em>No content provided.</em></p>"


def test_raw_html_is_escaped_by_default():
    html = renderer.render_fragment("<script>alert(1)</script>")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_html_can_be_enabled():
    html = MarkdownMathRenderer(enable_html=True).render_fragment("<b>bold</b>")

    assert "<b>bold</b>" in html


def test_full_document_loads_mathjax():
    page = renderer.render_full_document("Hello", title="Tom & Jerry", font_size=20)

    assert "mathjax@3" in page
    assert "<title>Tom &amp; Jerry</title>" in page
    assert "font-size: 20pt" in page
    assert "<p>Hello</p>" in page
