"""Utilities for importing quizzes from a spreadsheet.

Expected layout (first worksheet of an .xlsx workbook, or a .csv file), one
header row followed by one row per question:

    Quiz Title | Quiz Instructions | Question Text | Option A | Option B |
    Option C | Option D | Correct Answer

Only the first data row's ``Quiz Title`` and ``Quiz Instructions`` are read;
later rows may leave them blank. Blank option cells are dropped, so a
question with two options simply leaves ``Option C`` and ``Option D`` empty.
``Correct Answer`` repeats the text of the right option, not its letter.

Architecture note:
    Parsing only turns cells into a ``QuizDraft``. Every rule about what a
    valid quiz looks like lives in ``quiz_validation`` and is shared with the
    authoring form, so an imported quiz can never be looser than a typed one.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from quiz_guard.constants.quiz_constants import (
    COLUMN_CORRECT_ANSWER,
    COLUMN_OPTIONS,
    COLUMN_QUESTION_TEXT,
    COLUMN_QUIZ_INSTRUCTIONS,
    COLUMN_QUIZ_TITLE,
)
from quiz_guard.core.errors import QuizImportError
from quiz_guard.core.models import DraftSource, QuestionDraft, QuizDraft
from quiz_guard.core.quiz_validation import validate_quiz

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Quiz"
SUPPORTED_SUFFIXES = (".xlsx", ".csv")

Row = dict[str, str]


def import_quiz(data: bytes, filename: str) -> QuizDraft:
    """Parse spreadsheet bytes into a validated draft ready for persistence."""
    rows = read_rows(data, filename)
    draft = rows_to_draft(rows)
    validated = validate_quiz(draft, DraftSource.IMPORT)
    logger.info("Parsed %d questions from %s", len(validated.questions), filename)
    return validated


def read_rows(data: bytes, filename: str) -> list[Row]:
    suffix = Path(filename or "").suffix.lower()
    if suffix == ".csv":
        raw_rows = _read_csv(data)
    elif suffix == ".xlsx":
        raw_rows = _read_xlsx(data)
    else:
        raise QuizImportError(
            f"Unsupported file type '{suffix or filename}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}."
        )
    return _rows_as_dicts(raw_rows)


def rows_to_draft(rows: Sequence[Row]) -> QuizDraft:
    if not rows:
        raise QuizImportError("The spreadsheet is empty or improperly formatted.")

    first_row = rows[0]
    questions = [
        QuestionDraft(
            text=row.get(COLUMN_QUESTION_TEXT, ""),
            options=[row.get(column, "") for column in COLUMN_OPTIONS if row.get(column, "")],
            correct_ans=row.get(COLUMN_CORRECT_ANSWER, ""),
        )
        for row in rows
    ]
    return QuizDraft(
        title=first_row.get(COLUMN_QUIZ_TITLE, "") or DEFAULT_TITLE,
        instructions=first_row.get(COLUMN_QUIZ_INSTRUCTIONS, ""),
        questions=questions,
    )


def _read_xlsx(data: bytes) -> list[tuple[object, ...]]:
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise QuizImportError("Could not read the workbook; is it a valid .xlsx file?") from exc
    try:
        if not workbook.worksheets:
            return []
        return list(workbook.worksheets[0].iter_rows(values_only=True))
    finally:
        workbook.close()


def _read_csv(data: bytes) -> list[tuple[object, ...]]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise QuizImportError("CSV files must be UTF-8 encoded.") from exc
    return [tuple(row) for row in csv.reader(io.StringIO(text))]


def _rows_as_dicts(raw_rows: Iterable[tuple[object, ...]]) -> list[Row]:
    iterator = iter(raw_rows)
    header: list[str] | None = None
    for candidate in iterator:
        cells = [_cell_text(cell) for cell in candidate]
        if any(cells):
            header = cells
            break
    if header is None:
        return []

    rows: list[Row] = []
    for raw in iterator:
        cells = [_cell_text(cell) for cell in raw]
        if not any(cells):
            continue
        rows.append({name: value for name, value in zip(header, cells) if name})
    return rows


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
