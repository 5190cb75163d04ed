"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from typing import Sequence

from quiz_guard.core.markdown_math_renderer import renderer
from quiz_guard.core.models import GradeResult, QuestionResult


def _option_lines(options: Sequence[str]) -> list[str]:
    lines = []
    for idx, option in enumerate(options):
        letter = chr(ord("A") + idx)
        lines.append(f"**{letter}.** {option or '(empty)'}")
    return lines


def render_question_with_options(
    question_text: str,
    options: Sequence[str],
    font_size: int = 14,
) -> str:
    """Render a quiz question with its options as HTML.

    Args:
        question_text: The question text (supports Markdown and LaTeX)
        options: Option strings in display order
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    markdown_lines = [question_text.strip() or "(No question text)", ""]
    markdown_lines.extend(_option_lines(options))
    return renderer.render_full_document("\n\n".join(markdown_lines), font_size=font_size)


def _review_fragment(detail: QuestionResult) -> str:
    status = "correct" if detail.is_correct else "incorrect"
    mark = "&#10003;" if detail.is_correct else "&#10007;"
    submitted = detail.submitted_answer if detail.submitted_answer is not None else "(no answer)"
    parts = [
        f"<h3>Question {detail.order}</h3>",
        renderer.render_fragment(detail.text),
        f'<p class="{status}">{mark} Your answer: </p>',
        renderer.render_fragment(submitted),
    ]
    if not detail.is_correct:
        parts.append("<p>Correct answer:</p>")
        parts.append(renderer.render_fragment(detail.correct_ans))
    return "\n".join(parts)


def render_result_review(result: GradeResult, font_size: int = 12) -> str:
    """Render the score summary and per-question review shown after submission."""
    if not result.has_questions:
        summary = "<h2>This quiz has no questions.</h2>"
    else:
        summary = (
            f"<h2>Score: {result.score} / {result.total_questions} "
            f"({result.percentage}%)</h2>"
        )
    body = [summary]
    body.extend(_review_fragment(detail) for detail in result.details)
    return renderer.wrap_with_mathjax("\n<hr />\n".join(body), title="Results", font_size=font_size)
