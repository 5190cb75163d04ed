"""Ranking of stored attempts for the teacher's results view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from quiz_guard.core.grading import percentage_of
from quiz_guard.core.models import QuizAttempt


@dataclass(slots=True)
class ScoreboardRow:
    """Immutable snapshot returned to consumers."""

    rank: int
    student_id: str
    score: int
    total_questions: int
    percentage: int
    duration_seconds: float
    ended_at: datetime | None


class Scoreboard:
    """Ranks attempts by score, then by how quickly they were finished."""

    def __init__(self, total_questions: int) -> None:
        self._total_questions = total_questions
        self._attempts: list[QuizAttempt] = []

    def record_attempts(self, attempts: Iterable[QuizAttempt]) -> None:
        self._attempts.extend(attempt for attempt in attempts if attempt.completed)

    def get_rows(self, limit: int | None = None) -> list[ScoreboardRow]:
        ranked = sorted(self._attempts, key=lambda a: (-a.score, _duration_seconds(a)))
        if limit is not None:
            ranked = ranked[:limit]
        return [
            ScoreboardRow(
                rank=position,
                student_id=attempt.student_id,
                score=attempt.score,
                total_questions=self._total_questions,
                percentage=percentage_of(attempt.score, self._total_questions),
                duration_seconds=_duration_seconds(attempt),
                ended_at=attempt.ended_at,
            )
            for position, attempt in enumerate(ranked, start=1)
        ]

    def clear(self) -> None:
        self._attempts.clear()


def _duration_seconds(attempt: QuizAttempt) -> float:
    if attempt.ended_at is None:
        return float("inf")
    return max(0.0, (attempt.ended_at - attempt.started_at).total_seconds())
