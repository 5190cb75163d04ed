"""Utilities for exporting quizzes to the spreadsheet layout used for imports."""

from __future__ import annotations

import io
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from quiz_guard.constants.quiz_constants import COLUMN_OPTIONS, IMPORT_COLUMNS
from quiz_guard.core.errors import QuizValidationError
from quiz_guard.core.models import Quiz

_SHEET_TITLE = "Quiz"


def save_quiz_to_file(file_path: Path, quiz: Quiz) -> None:
    """Persist the quiz to disk as an .xlsx workbook."""

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(export_quiz(quiz))


def export_quiz(quiz: Quiz) -> bytes:
    """Serialize ``quiz`` so that importing the result recreates it."""

    if not quiz.questions:
        raise QuizValidationError("Cannot export a quiz without questions.")

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = _SHEET_TITLE
    sheet.append(list(IMPORT_COLUMNS))
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for position, question in enumerate(sorted(quiz.questions, key=lambda q: q.order)):
        title, instructions = (quiz.title, quiz.instructions) if position == 0 else (None, None)
        padded_options = list(question.options) + [None] * (len(COLUMN_OPTIONS) - len(question.options))
        sheet.append([title, instructions, question.text, *padded_options, question.correct_ans])

    for column_cells in sheet.columns:
        longest = max(len(str(cell.value or "")) for cell in column_cells)
        sheet.column_dimensions[column_cells[0].column_letter].width = min(60, longest + 2)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
