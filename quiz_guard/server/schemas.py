"""Pydantic payloads for the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quiz_guard.core.models import (
    GradeResult,
    QuestionDraft,
    Quiz,
    QuizAttempt,
    QuizDraft,
    StudentAnswer,
)
from quiz_guard.core.services.scoreboard import ScoreboardRow


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionPayload(ApiModel):
    text: str = ""
    options: list[str] = Field(default_factory=list)
    correct_ans: str = ""


class QuizPayload(ApiModel):
    """Payload schema for creating or fully replacing a quiz."""

    title: str = ""
    instructions: str = ""
    questions: list[QuestionPayload] = Field(default_factory=list)

    def to_draft(self) -> QuizDraft:
        return QuizDraft(
            title=self.title,
            instructions=self.instructions,
            questions=[
                QuestionDraft(text=q.text, options=list(q.options), correct_ans=q.correct_ans)
                for q in self.questions
            ],
        )


class AnswerPayload(ApiModel):
    question_id: str
    answer: str
    time_spent: int = 0
    timestamp: datetime | None = None

    def to_answer(self) -> StudentAnswer:
        timestamp = self.timestamp or datetime.now(timezone.utc)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return StudentAnswer(
            question_id=self.question_id,
            answer=self.answer,
            time_spent=max(0, self.time_spent),
            timestamp=timestamp,
        )


class SubmissionPayload(ApiModel):
    """Payload schema for a submission; both fields are checked by the manager."""

    student_id: str | None = None
    answers: list[AnswerPayload] | None = None
    started_at: datetime | None = None


class QuestionOut(ApiModel):
    id: str
    text: str
    options: list[str]
    order: int
    correct_ans: str | None = None


class QuizOut(ApiModel):
    id: str
    title: str
    instructions: str
    created_at: datetime
    questions: list[QuestionOut]

    @classmethod
    def from_quiz(cls, quiz: Quiz, *, reveal_answers: bool = False) -> QuizOut:
        return cls(
            id=quiz.id,
            title=quiz.title,
            instructions=quiz.instructions,
            created_at=quiz.created_at,
            questions=[
                QuestionOut(
                    id=q.id,
                    text=q.text,
                    options=list(q.options),
                    order=q.order,
                    correct_ans=q.correct_ans if reveal_answers else None,
                )
                for q in quiz.questions
            ],
        )


class AnswerOut(ApiModel):
    question_id: str
    answer: str
    time_spent: int
    timestamp: datetime


class AttemptOut(ApiModel):
    id: str
    quiz_id: str
    student_id: str
    answers: list[AnswerOut]
    score: int
    completed: bool
    started_at: datetime
    ended_at: datetime | None

    @classmethod
    def from_attempt(cls, attempt: QuizAttempt) -> AttemptOut:
        return cls(
            id=attempt.id,
            quiz_id=attempt.quiz_id,
            student_id=attempt.student_id,
            answers=[
                AnswerOut(
                    question_id=a.question_id,
                    answer=a.answer,
                    time_spent=a.time_spent,
                    timestamp=a.timestamp,
                )
                for a in attempt.answers
            ],
            score=attempt.score,
            completed=attempt.completed,
            started_at=attempt.started_at,
            ended_at=attempt.ended_at,
        )


class QuestionResultOut(ApiModel):
    question_id: str
    text: str
    options: list[str]
    order: int
    submitted_answer: str | None
    is_correct: bool
    correct_ans: str


class SubmissionOut(ApiModel):
    score: int
    total_questions: int
    percentage: int
    has_questions: bool
    details: list[QuestionResultOut]
    attempt: AttemptOut

    @classmethod
    def from_result(cls, result: GradeResult, attempt: QuizAttempt) -> SubmissionOut:
        return cls(
            score=result.score,
            total_questions=result.total_questions,
            percentage=result.percentage,
            has_questions=result.has_questions,
            details=[
                QuestionResultOut(
                    question_id=d.question_id,
                    text=d.text,
                    options=list(d.options),
                    order=d.order,
                    submitted_answer=d.submitted_answer,
                    is_correct=d.is_correct,
                    correct_ans=d.correct_ans,
                )
                for d in result.details
            ],
            attempt=AttemptOut.from_attempt(attempt),
        )


class ScoreboardRowOut(ApiModel):
    rank: int
    student_id: str
    score: int
    total_questions: int
    percentage: int
    duration_seconds: float
    ended_at: datetime | None

    @classmethod
    def from_row(cls, row: ScoreboardRow) -> ScoreboardRowOut:
        return cls(
            rank=row.rank,
            student_id=row.student_id,
            score=row.score,
            total_questions=row.total_questions,
            percentage=row.percentage,
            duration_seconds=row.duration_seconds,
            ended_at=row.ended_at,
        )
