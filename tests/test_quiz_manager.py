from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_draft
from quiz_guard.core.config import Settings
from quiz_guard.core.errors import QuizNotFoundError, QuizValidationError, SubmissionError
from quiz_guard.core.models import StudentAnswer
from quiz_guard.core.quiz_manager import QuizManager

NOW = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _answer(question_id: str, answer: str) -> StudentAnswer:
    return StudentAnswer(question_id=question_id, answer=answer, time_spent=1, timestamp=NOW)


def test_invalid_draft_is_not_persisted(manager):
    draft = make_draft()
    draft.questions[0].correct_ans = "nope"

    with pytest.raises(QuizValidationError):
        manager.create_quiz(draft)

    assert manager.list_quizzes() == []


def test_update_validates_before_replacing(manager):
    quiz = manager.create_quiz(make_draft(question_count=2))
    bad = make_draft(question_count=1)
    bad.questions[0].options = ["only one"]

    with pytest.raises(QuizValidationError):
        manager.update_quiz(quiz.id, bad)

    assert len(manager.get_quiz(quiz.id).questions) == 2


def test_submit_grades_and_stores_attempt(manager):
    quiz = manager.create_quiz(make_draft(question_count=2))
    q1, q2 = quiz.questions

    receipt = manager.submit_attempt(quiz.id, "student_1", [_answer(q1.id, "2"), _answer(q2.id, "5")])

    assert receipt.result.score == 1
    assert receipt.result.total_questions == 2
    assert receipt.result.percentage == 50
    assert receipt.attempt.score == 1
    assert receipt.attempt.student_id == "student_1"
    assert [a.student_id for a in manager.list_attempts(quiz.id)] == ["student_1"]


def test_resubmission_overwrites_previous_attempt(manager):
    quiz = manager.create_quiz(make_draft(question_count=1))
    question = quiz.questions[0]

    manager.submit_attempt(quiz.id, "s1", [_answer(question.id, "3")])
    manager.submit_attempt(quiz.id, "s1", [_answer(question.id, "2")])

    attempts = manager.list_attempts(quiz.id, "s1")
    assert len(attempts) == 1
    assert attempts[0].score == 1


@pytest.mark.parametrize(("student_id", "answers"), [(None, []), ("", []), ("s1", None)])
def test_submit_requires_student_and_answers(manager, student_id, answers):
    quiz = manager.create_quiz(make_draft())

    with pytest.raises(SubmissionError, match="Missing required fields"):
        manager.submit_attempt(quiz.id, student_id, answers)


def test_submit_to_unknown_quiz(manager):
    with pytest.raises(QuizNotFoundError):
        manager.submit_attempt("missing", "s1", [])
    with pytest.raises(QuizNotFoundError):
        manager.list_attempts("missing")


def test_import_creates_quiz(manager):
    csv_data = (
        "Quiz Title,Quiz Instructions,Question Text,Option A,Option B,Option C,Option D,Correct Answer\n"
        "Birds,Read carefully,Can penguins fly?,Yes,No,,,No\n"
    ).encode()

    quiz = manager.import_quiz(csv_data, "birds.csv")

    assert manager.get_quiz(quiz.id).questions[0].correct_ans == "No"


def test_scoreboard_ranks_by_score_then_duration(manager):
    quiz = manager.create_quiz(make_draft(question_count=2))
    q1, q2 = quiz.questions
    started = NOW

    manager.submit_attempt(quiz.id, "slow", [_answer(q1.id, "2"), _answer(q2.id, "4")], started_at=started)
    manager.submit_attempt(quiz.id, "wrong", [], started_at=started)

    rows = manager.get_scoreboard(quiz.id)

    assert [row.student_id for row in rows] == ["slow", "wrong"]
    assert rows[0].rank == 1
    assert rows[0].percentage == 100
    assert rows[1].score == 0


def test_from_settings_builds_working_manager():
    manager = QuizManager.from_settings(Settings(database_url="sqlite://", _env_file=None))

    quiz = manager.create_quiz(make_draft())

    assert manager.get_quiz(quiz.id).title == "Fractions"
