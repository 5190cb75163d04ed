"""Business logic shared by the teacher console and the HTTP API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from quiz_guard.core.config import Settings
from quiz_guard.core.db import create_db_engine, create_session_factory, init_db
from quiz_guard.core.errors import SubmissionError
from quiz_guard.core.grading import grade_submission
from quiz_guard.core.models import (
    DraftSource,
    Quiz,
    QuizAttempt,
    QuizDraft,
    StudentAnswer,
    SubmissionReceipt,
)
from quiz_guard.core.quiz_exporter import export_quiz
from quiz_guard.core.quiz_importer import import_quiz
from quiz_guard.core.quiz_validation import validate_quiz
from quiz_guard.core.services.quiz_store import QuizStore
from quiz_guard.core.services.scoreboard import Scoreboard, ScoreboardRow

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade over validation, grading, import/export and the quiz store.

    Holds no mutable state of its own: each call runs to completion against
    the store, so the Qt thread and the API thread can share one instance.
    """

    def __init__(self, store: QuizStore) -> None:
        self._store = store

    @classmethod
    def from_settings(cls, settings: Settings) -> QuizManager:
        engine = create_db_engine(settings.database_url)
        init_db(engine)
        return cls(QuizStore(create_session_factory(engine)))

    # --- Authoring ---

    def list_quizzes(self) -> list[Quiz]:
        return self._store.list_quizzes()

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self._store.get_quiz(quiz_id)

    def create_quiz(self, draft: QuizDraft, source: DraftSource = DraftSource.FORM) -> Quiz:
        validated = validate_quiz(draft, source)
        return self._store.create_quiz(validated)

    def update_quiz(self, quiz_id: str, draft: QuizDraft) -> Quiz:
        """Validate, then replace the quiz's metadata and full question set."""
        validated = validate_quiz(draft, DraftSource.FORM)
        return self._store.replace_quiz(quiz_id, validated)

    def delete_quiz(self, quiz_id: str) -> None:
        self._store.delete_quiz(quiz_id)

    def import_quiz(self, data: bytes, filename: str) -> Quiz:
        draft = import_quiz(data, filename)
        return self._store.create_quiz(draft)

    def export_quiz(self, quiz_id: str) -> bytes:
        return export_quiz(self._store.get_quiz(quiz_id))

    # --- Attempts ---

    def submit_attempt(
        self,
        quiz_id: str,
        student_id: str | None,
        answers: Sequence[StudentAnswer] | None,
        *,
        started_at: datetime | None = None,
    ) -> SubmissionReceipt:
        """Grade a submission and store it as the student's only attempt."""
        if not student_id or answers is None:
            raise SubmissionError("Missing required fields")

        quiz = self._store.get_quiz(quiz_id)
        result = grade_submission(quiz.questions, answers)
        attempt = self._store.upsert_attempt(
            quiz_id,
            student_id,
            answers,
            result.score,
            started_at=started_at,
        )
        logger.info(
            "Graded quiz %s for %s: %d/%d",
            quiz_id,
            student_id,
            result.score,
            result.total_questions,
        )
        return SubmissionReceipt(result=result, attempt=attempt)

    def list_attempts(self, quiz_id: str, student_id: str | None = None) -> list[QuizAttempt]:
        self._store.get_quiz(quiz_id)
        return self._store.list_attempts(quiz_id, student_id)

    def get_scoreboard(self, quiz_id: str, limit: int | None = None) -> list[ScoreboardRow]:
        quiz = self._store.get_quiz(quiz_id)
        scoreboard = Scoreboard(total_questions=len(quiz.questions))
        scoreboard.record_attempts(self._store.list_attempts(quiz_id))
        return scoreboard.get_rows(limit)
