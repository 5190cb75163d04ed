"""Validation shared by the authoring form and the spreadsheet import.

Both ingestion paths produce a ``QuizDraft`` and call ``validate_quiz``; the
``source`` argument only changes how problems are worded so that a teacher
fixing a spreadsheet is pointed at columns, and one fixing the form at fields.
The first problem found aborts validation, nothing is persisted.
"""

from __future__ import annotations

from quiz_guard.constants.quiz_constants import (
    COLUMN_CORRECT_ANSWER,
    COLUMN_QUESTION_TEXT,
    COLUMN_QUIZ_INSTRUCTIONS,
    COLUMN_QUIZ_TITLE,
    MAX_OPTIONS,
    MIN_OPTIONS,
)
from quiz_guard.core.errors import QuizValidationError
from quiz_guard.core.models import DraftSource, QuestionDraft, QuizDraft

_FIELD_NAMES = {
    DraftSource.FORM: {
        "title": "quiz title",
        "instructions": "quiz instructions",
        "text": "question text",
        "correct": "the correct answer",
    },
    DraftSource.IMPORT: {
        "title": f"'{COLUMN_QUIZ_TITLE}' on the first row",
        "instructions": f"'{COLUMN_QUIZ_INSTRUCTIONS}' on the first row",
        "text": f"'{COLUMN_QUESTION_TEXT}'",
        "correct": f"'{COLUMN_CORRECT_ANSWER}'",
    },
}


def validate_quiz(draft: QuizDraft, source: DraftSource = DraftSource.FORM) -> QuizDraft:
    """Return a normalized copy of ``draft`` or raise ``QuizValidationError``.

    Normalization trims every string and drops blank options, so the returned
    draft is exactly what gets persisted.
    """
    names = _FIELD_NAMES[source]
    title = (draft.title or "").strip()
    instructions = (draft.instructions or "").strip()
    if not title:
        raise QuizValidationError(f"Please fill in {names['title']}.")
    if not instructions:
        raise QuizValidationError(f"Please fill in {names['instructions']}.")

    questions = [
        _validate_question(question, number, names)
        for number, question in enumerate(draft.questions, start=1)
    ]
    return QuizDraft(title=title, instructions=instructions, questions=questions)


def _validate_question(question: QuestionDraft, number: int, names: dict[str, str]) -> QuestionDraft:
    text = (question.text or "").strip()
    if not text:
        raise _question_error(number, f"Please enter {names['text']}.")

    options = [option.strip() for option in question.options if option and option.strip()]
    if len(options) < MIN_OPTIONS:
        raise _question_error(number, f"Please provide at least {MIN_OPTIONS} options.")
    if len(options) > MAX_OPTIONS:
        raise _question_error(number, f"Please provide at most {MAX_OPTIONS} options.")
    if len(set(options)) != len(options):
        raise _question_error(number, "Options must be distinct.")

    correct_ans = (question.correct_ans or "").strip()
    if not correct_ans:
        raise _question_error(number, f"Please select {names['correct']}.")
    if correct_ans not in options:
        raise _question_error(number, "Correct answer must match one of the options.")

    return QuestionDraft(text=text, options=options, correct_ans=correct_ans)


def _question_error(number: int, reason: str) -> QuizValidationError:
    return QuizValidationError(f"Question {number}: {reason}", question_number=number)
