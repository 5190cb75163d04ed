"""Exception taxonomy shared by the store, services, API and UI layers."""

from __future__ import annotations


class QuizGuardError(Exception):
    """Base class for errors raised by QuizGuard."""


class QuizValidationError(QuizGuardError):
    """Raised when a quiz definition is rejected before persistence."""

    def __init__(self, message: str, question_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.question_number = question_number


class QuizImportError(QuizValidationError):
    """Raised when a spreadsheet cannot be read or contains no questions."""


class QuizNotFoundError(QuizGuardError):
    """Raised when a quiz id does not resolve."""

    def __init__(self, quiz_id: str) -> None:
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class SubmissionError(QuizGuardError):
    """Raised when a submission is missing required fields."""


class StoreError(QuizGuardError):
    """Raised when the relational store fails."""
