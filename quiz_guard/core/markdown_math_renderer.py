"""Markdown + LaTeX rendering for question text.

Architecture note:
    Question text is stored as the teacher typed it and rendered on display.
    markdown-it turns it into an HTML fragment and MathJax typesets the
    ``$...$`` and ``$$...$$`` spans inside ``QWebEngineView``. The same
    renderer feeds the teacher's preview pane and the student kiosk, so a
    question looks identical on both sides. Raw HTML in question text is
    disabled: a quiz imported from a spreadsheet must not be able to inject
    markup into the kiosk.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
_DEFAULT_FONT_SIZE = 14


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    text_color: str = "#f5f7ff"
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""
        source = markdown_text.strip()
        if not source:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(source)

    def wrap_with_mathjax(
        self,
        body_html: str,
        title: str = "QuizGuard",
        font_size: int = _DEFAULT_FONT_SIZE,
    ) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""
        return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{html.escape(title)}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; color: {self.text_color}; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      .correct {{ color: #4ade80; }}
      .incorrect {{ color: #f87171; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src="{_MATHJAX_SCRIPT}"></script>
  </head>
  <body>
    <div class="question-html">{body_html}</div>
  </body>
</html>"""

    def render_full_document(
        self,
        markdown_text: str,
        title: str = "QuizGuard",
        font_size: int = _DEFAULT_FONT_SIZE,
    ) -> str:
        """Render markdown and embed it in a MathJax page."""
        fragment = self.render_fragment(markdown_text)
        return self.wrap_with_mathjax(fragment, title=title, font_size=font_size)


# Shared instance; read-only renders are safe to reuse across Qt widgets.
renderer = MarkdownMathRenderer()
