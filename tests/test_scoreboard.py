from __future__ import annotations

from datetime import datetime, timedelta, timezone

from quiz_guard.core.models import QuizAttempt
from quiz_guard.core.services.scoreboard import Scoreboard

START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _attempt(student_id: str, score: int, seconds: float | None, completed: bool = True) -> QuizAttempt:
    return QuizAttempt(
        id=f"att-{student_id}",
        quiz_id="quiz",
        student_id=student_id,
        answers=[],
        score=score,
        completed=completed,
        started_at=START,
        ended_at=None if seconds is None else START + timedelta(seconds=seconds),
    )


def test_rows_rank_by_score_then_speed():
    board = Scoreboard(total_questions=3)
    board.record_attempts(
        [
            _attempt("slow", 2, 90),
            _attempt("fast", 2, 30),
            _attempt("best", 3, 120),
            _attempt("unfinished", 1, None),
        ]
    )

    rows = board.get_rows()

    assert [row.student_id for row in rows] == ["best", "fast", "slow", "unfinished"]
    assert [row.rank for row in rows] == [1, 2, 3, 4]
    assert rows[0].percentage == 100
    assert rows[1].percentage == 67
    assert rows[1].duration_seconds == 30


def test_incomplete_attempts_are_skipped():
    board = Scoreboard(total_questions=1)
    board.record_attempts([_attempt("a", 1, 5, completed=False), _attempt("b", 0, 5)])

    assert [row.student_id for row in board.get_rows()] == ["b"]


def test_limit_and_clear():
    board = Scoreboard(total_questions=2)
    board.record_attempts([_attempt(f"s{n}", n % 3, n) for n in range(1, 6)])

    assert len(board.get_rows(limit=2)) == 2

    board.clear()
    assert board.get_rows() == []


def test_quiz_without_questions_scores_zero_percent():
    board = Scoreboard(total_questions=0)
    board.record_attempts([_attempt("s", 0, 1)])

    assert board.get_rows()[0].percentage == 0
