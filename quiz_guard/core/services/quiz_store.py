"""Relational store for quizzes, questions and attempts."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Sequence

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from quiz_guard.core.errors import QuizNotFoundError, StoreError
from quiz_guard.core.models import Question, Quiz, QuizAttempt, QuizDraft, StudentAnswer
from quiz_guard.core.tables import QuestionRecord, QuizAttemptRecord, QuizRecord, new_id, utcnow

logger = logging.getLogger(__name__)

_NATIVE_UPSERT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class QuizStore:
    """Maps quiz drafts and attempts onto the database.

    Every public method runs in its own session and transaction. Database
    failures are logged and re-raised as ``StoreError``; a missing quiz raises
    ``QuizNotFoundError``.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except QuizNotFoundError:
            raise
        except SQLAlchemyError as exc:
            logger.exception("Store failure during %s", operation)
            raise StoreError(f"Failed to {operation}") from exc
        finally:
            session.close()

    # --- Quizzes ---

    def list_quizzes(self) -> list[Quiz]:
        with self._transaction("fetch quizzes") as session:
            records = session.scalars(
                select(QuizRecord)
                .options(selectinload(QuizRecord.questions))
                .order_by(QuizRecord.created_at.desc())
            ).all()
            return [_to_quiz(record) for record in records]

    def get_quiz(self, quiz_id: str) -> Quiz:
        with self._transaction("fetch quiz") as session:
            return _to_quiz(self._load(session, quiz_id))

    def create_quiz(self, draft: QuizDraft) -> Quiz:
        """Insert the quiz row and all its question rows together."""
        with self._transaction("create quiz") as session:
            record = QuizRecord(
                id=new_id(),
                title=draft.title,
                instructions=draft.instructions,
                created_at=utcnow(),
            )
            record.questions = _question_records(draft)
            session.add(record)
            session.flush()
            quiz = _to_quiz(record)
        logger.info("Created quiz %s with %d questions", quiz.id, len(quiz.questions))
        return quiz

    def replace_quiz(self, quiz_id: str, draft: QuizDraft) -> Quiz:
        """Replace metadata and the full question set in one transaction.

        Old questions are deleted and flushed before the new ones are inserted
        so the (quiz, order) constraint never sees both sets; a failure rolls
        back to the previous questions.
        """
        with self._transaction("update quiz") as session:
            record = self._load(session, quiz_id)
            record.title = draft.title
            record.instructions = draft.instructions
            record.questions.clear()
            session.flush()
            record.questions.extend(_question_records(draft))
            session.flush()
            quiz = _to_quiz(record)
        logger.info("Replaced quiz %s with %d questions", quiz_id, len(quiz.questions))
        return quiz

    def delete_quiz(self, quiz_id: str) -> None:
        with self._transaction("delete quiz") as session:
            session.delete(self._load(session, quiz_id))
        logger.info("Deleted quiz %s", quiz_id)

    # --- Attempts ---

    def upsert_attempt(
        self,
        quiz_id: str,
        student_id: str,
        answers: Sequence[StudentAnswer],
        score: int,
        *,
        started_at: datetime | None = None,
        ended_at: datetime | None = None,
    ) -> QuizAttempt:
        """Create the (quiz, student) attempt or overwrite it.

        An overwrite replaces answers, score, completed and ended_at; the
        original start time is kept. A client-supplied start later than
        the end is clamped to the end.
        """
        ended_at = _as_utc(ended_at) or utcnow()
        started_at = _as_utc(started_at)
        if started_at is None or started_at > ended_at:
            started_at = ended_at
        values = {
            "id": new_id(),
            "quiz_id": quiz_id,
            "student_id": student_id,
            "answers_json": [_answer_to_json(answer) for answer in answers],
            "score": score,
            "completed": True,
            "started_at": started_at,
            "ended_at": ended_at,
        }
        with self._transaction("submit quiz") as session:
            insert = _NATIVE_UPSERT.get(session.get_bind().dialect.name)
            if insert is not None:
                stmt = insert(QuizAttemptRecord).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["quiz_id", "student_id"],
                    set_={
                        "answers_json": stmt.excluded.answers_json,
                        "score": stmt.excluded.score,
                        "completed": stmt.excluded.completed,
                        "ended_at": stmt.excluded.ended_at,
                    },
                )
                session.execute(stmt)
            else:
                self._insert_or_update_attempt(session, values)
                session.flush()
            record = session.scalars(
                select(QuizAttemptRecord).where(
                    QuizAttemptRecord.quiz_id == quiz_id,
                    QuizAttemptRecord.student_id == student_id,
                )
            ).one()
            return _to_attempt(record)

    def list_attempts(self, quiz_id: str, student_id: str | None = None) -> list[QuizAttempt]:
        with self._transaction("fetch attempts") as session:
            query = select(QuizAttemptRecord).where(QuizAttemptRecord.quiz_id == quiz_id)
            if student_id is not None:
                query = query.where(QuizAttemptRecord.student_id == student_id)
            records = session.scalars(query.order_by(QuizAttemptRecord.ended_at.desc())).all()
            return [_to_attempt(record) for record in records]

    # --- Helpers ---

    @staticmethod
    def _load(session: Session, quiz_id: str) -> QuizRecord:
        record = session.get(QuizRecord, quiz_id)
        if record is None:
            raise QuizNotFoundError(quiz_id)
        return record

    @staticmethod
    def _insert_or_update_attempt(session: Session, values: dict) -> None:
        try:
            with session.begin_nested():
                session.add(QuizAttemptRecord(**values))
        except IntegrityError:
            existing = session.scalars(
                select(QuizAttemptRecord).where(
                    QuizAttemptRecord.quiz_id == values["quiz_id"],
                    QuizAttemptRecord.student_id == values["student_id"],
                )
            ).one()
            existing.answers_json = values["answers_json"]
            existing.score = values["score"]
            existing.completed = values["completed"]
            existing.ended_at = values["ended_at"]


def _question_records(draft: QuizDraft) -> list[QuestionRecord]:
    return [
        QuestionRecord(
            id=new_id(),
            text=question.text,
            options=list(question.options),
            correct_ans=question.correct_ans,
            order=position,
        )
        for position, question in enumerate(draft.questions, start=1)
    ]


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_quiz(record: QuizRecord) -> Quiz:
    return Quiz(
        id=record.id,
        title=record.title,
        instructions=record.instructions,
        created_at=_as_utc(record.created_at),
        questions=[
            Question(
                id=question.id,
                quiz_id=record.id,
                text=question.text,
                options=list(question.options),
                correct_ans=question.correct_ans,
                order=question.order,
            )
            for question in sorted(record.questions, key=lambda q: q.order)
        ],
    )


def _answer_to_json(answer: StudentAnswer) -> dict[str, object]:
    return {
        "questionId": answer.question_id,
        "answer": answer.answer,
        "timeSpent": answer.time_spent,
        "timestamp": _as_utc(answer.timestamp).isoformat(),
    }


def _answer_from_json(payload: dict) -> StudentAnswer:
    return StudentAnswer(
        question_id=str(payload.get("questionId", "")),
        answer=str(payload.get("answer", "")),
        time_spent=int(payload.get("timeSpent") or 0),
        timestamp=_as_utc(datetime.fromisoformat(payload["timestamp"])),
    )


def _to_attempt(record: QuizAttemptRecord) -> QuizAttempt:
    return QuizAttempt(
        id=record.id,
        quiz_id=record.quiz_id,
        student_id=record.student_id,
        answers=[_answer_from_json(item) for item in record.answers_json or []],
        score=record.score,
        completed=record.completed,
        started_at=_as_utc(record.started_at),
        ended_at=_as_utc(record.ended_at),
    )
