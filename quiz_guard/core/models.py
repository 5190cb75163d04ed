"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from quiz_guard.constants.quiz_constants import MAX_OPTIONS, MIN_OPTIONS


class DraftSource(Enum):
    """Where a quiz draft came from; selects the wording of validation messages."""

    FORM = "form"
    IMPORT = "import"


@dataclass(slots=True)
class QuestionDraft:
    """Unsaved multiple-choice question as typed into the form or read from a row."""

    text: str = ""
    options: list[str] = field(default_factory=lambda: ["", ""])
    correct_ans: str = ""


@dataclass(slots=True)
class QuizDraft:
    """Unsaved quiz definition built incrementally by the authoring form."""

    title: str = ""
    instructions: str = ""
    questions: list[QuestionDraft] = field(default_factory=lambda: [QuestionDraft()])

    def add_question(self) -> QuestionDraft:
        question = QuestionDraft()
        self.questions.append(question)
        return question

    def remove_question(self, index: int) -> None:
        """Remove a question; the form always keeps at least one."""
        self._check_question_index(index)
        if len(self.questions) > 1:
            self.questions.pop(index)

    def update_question(
        self,
        index: int,
        *,
        text: str | None = None,
        correct_ans: str | None = None,
    ) -> None:
        question = self._check_question_index(index)
        if text is not None:
            question.text = text
        if correct_ans is not None:
            question.correct_ans = correct_ans

    def add_option(self, question_index: int) -> None:
        question = self._check_question_index(question_index)
        if len(question.options) < MAX_OPTIONS:
            question.options.append("")

    def remove_option(self, question_index: int, option_index: int) -> None:
        question = self._check_question_index(question_index)
        if len(question.options) <= MIN_OPTIONS:
            return
        if not 0 <= option_index < len(question.options):
            raise IndexError(f"Option index {option_index} out of range")
        removed = question.options.pop(option_index)
        if question.correct_ans == removed:
            question.correct_ans = ""

    def set_option(self, question_index: int, option_index: int, value: str) -> None:
        question = self._check_question_index(question_index)
        if not 0 <= option_index < len(question.options):
            raise IndexError(f"Option index {option_index} out of range")
        previous = question.options[option_index]
        question.options[option_index] = value
        if previous and question.correct_ans == previous:
            question.correct_ans = value

    def _check_question_index(self, index: int) -> QuestionDraft:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"Question index {index} out of range")
        return self.questions[index]


@dataclass(slots=True)
class Question:
    """Stored question. ``correct_ans`` is always one of ``options``."""

    id: str
    quiz_id: str
    text: str
    options: list[str]
    correct_ans: str
    order: int


@dataclass(slots=True)
class Quiz:
    """Stored quiz with its questions sorted by ``order``."""

    id: str
    title: str
    instructions: str
    created_at: datetime
    questions: list[Question] = field(default_factory=list)


@dataclass(slots=True)
class StudentAnswer:
    """One selected option; only ever stored inside an attempt's answer list."""

    question_id: str
    answer: str
    time_spent: int
    timestamp: datetime


@dataclass(slots=True)
class QuestionResult:
    """Per-question grading detail revealed after submission."""

    question_id: str
    text: str
    options: list[str]
    order: int
    submitted_answer: str | None
    is_correct: bool
    correct_ans: str


@dataclass(slots=True)
class GradeResult:
    score: int
    total_questions: int
    percentage: int
    has_questions: bool
    details: list[QuestionResult]


@dataclass(slots=True)
class QuizAttempt:
    """One student's submission record, unique per (quiz, student)."""

    id: str
    quiz_id: str
    student_id: str
    answers: list[StudentAnswer]
    score: int
    completed: bool
    started_at: datetime
    ended_at: datetime | None


@dataclass(slots=True)
class SubmissionReceipt:
    """Grading outcome together with the attempt row it was stored as."""

    result: GradeResult
    attempt: QuizAttempt
