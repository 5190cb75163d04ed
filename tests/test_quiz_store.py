from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_draft
from quiz_guard.core.errors import QuizNotFoundError, StoreError
from quiz_guard.core.models import QuestionDraft, QuizDraft, StudentAnswer

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _answers(*pairs: tuple[str, str]) -> list[StudentAnswer]:
    return [
        StudentAnswer(question_id=qid, answer=answer, time_spent=5, timestamp=T0)
        for qid, answer in pairs
    ]


def test_create_and_get_quiz(store):
    created = store.create_quiz(make_draft(question_count=3))

    loaded = store.get_quiz(created.id)

    assert loaded.title == "Fractions"
    assert [q.order for q in loaded.questions] == [1, 2, 3]
    assert all(q.quiz_id == created.id for q in loaded.questions)
    assert loaded.questions[0].options == ["2", "3", "4"]
    assert loaded.created_at.tzinfo is not None


def test_list_quizzes_includes_questions(store):
    first = store.create_quiz(make_draft(title="First"))
    second = store.create_quiz(make_draft(title="Second", question_count=1))

    quizzes = {quiz.id: quiz for quiz in store.list_quizzes()}

    assert set(quizzes) == {first.id, second.id}
    assert len(quizzes[second.id].questions) == 1


def test_unknown_quiz_raises_not_found(store):
    with pytest.raises(QuizNotFoundError):
        store.get_quiz("missing")
    with pytest.raises(QuizNotFoundError):
        store.replace_quiz("missing", make_draft())
    with pytest.raises(QuizNotFoundError):
        store.delete_quiz("missing")


def test_replace_swaps_the_whole_question_set(store):
    quiz = store.create_quiz(make_draft(question_count=3))
    old_ids = {q.id for q in quiz.questions}
    replacement = QuizDraft(
        title="Fractions v2",
        instructions="Updated",
        questions=[QuestionDraft(text="1/2 + 1/2?", options=["1", "2"], correct_ans="1")],
    )

    updated = store.replace_quiz(quiz.id, replacement)

    assert updated.id == quiz.id
    assert updated.title == "Fractions v2"
    assert [q.text for q in updated.questions] == ["1/2 + 1/2?"]
    assert updated.questions[0].order == 1
    assert not old_ids & {q.id for q in store.get_quiz(quiz.id).questions}


def test_failed_replace_keeps_previous_quiz(store):
    quiz = store.create_quiz(make_draft(question_count=2))
    broken = QuizDraft(
        title="Should not stick",
        instructions="x",
        questions=[QuestionDraft(text=None, options=["a", "b"], correct_ans="a")],
    )

    with pytest.raises(StoreError, match="Failed to update quiz"):
        store.replace_quiz(quiz.id, broken)

    reloaded = store.get_quiz(quiz.id)
    assert reloaded.title == "Fractions"
    assert [q.id for q in reloaded.questions] == [q.id for q in quiz.questions]


def test_delete_removes_quiz_and_questions(store):
    quiz = store.create_quiz(make_draft())

    store.delete_quiz(quiz.id)

    with pytest.raises(QuizNotFoundError):
        store.get_quiz(quiz.id)
    assert store.list_quizzes() == []


def test_upsert_keeps_one_attempt_per_student(store):
    quiz = store.create_quiz(make_draft())
    q1, q2 = quiz.questions

    first = store.upsert_attempt(
        quiz.id, "student_1", _answers((q1.id, "3")), 0, started_at=T0, ended_at=T0 + timedelta(minutes=1)
    )
    second = store.upsert_attempt(
        quiz.id,
        "student_1",
        _answers((q1.id, "2"), (q2.id, "4")),
        2,
        started_at=T0 + timedelta(hours=1),
        ended_at=T0 + timedelta(minutes=2),
    )

    attempts = store.list_attempts(quiz.id)
    assert len(attempts) == 1
    assert second.id == first.id
    assert attempts[0].score == 2
    assert [a.answer for a in attempts[0].answers] == ["2", "4"]
    assert attempts[0].completed is True
    assert attempts[0].started_at == T0
    assert attempts[0].ended_at == T0 + timedelta(minutes=2)



def test_start_after_end_is_clamped(store):
    quiz = store.create_quiz(make_draft())

    attempt = store.upsert_attempt(
        quiz.id, "s1", [], 0, started_at=datetime(2099, 1, 1, tzinfo=timezone.utc), ended_at=T0
    )

    assert attempt.started_at == T0
    assert store.list_attempts(quiz.id)[0].started_at == attempt.ended_at

def test_attempt_answers_round_trip(store):
    quiz = store.create_quiz(make_draft(question_count=1))
    question = quiz.questions[0]

    attempt = store.upsert_attempt(quiz.id, "s", _answers((question.id, "2")), 1)

    stored = attempt.answers[0]
    assert stored.question_id == question.id
    assert stored.time_spent == 5
    assert stored.timestamp == T0


def test_list_attempts_filters_and_orders_newest_first(store):
    quiz = store.create_quiz(make_draft())
    for offset, student in enumerate(["ann", "bob", "cy"]):
        store.upsert_attempt(quiz.id, student, [], 0, ended_at=T0 + timedelta(minutes=offset))

    assert [a.student_id for a in store.list_attempts(quiz.id)] == ["cy", "bob", "ann"]
    assert [a.student_id for a in store.list_attempts(quiz.id, "bob")] == ["bob"]
    assert store.list_attempts("other") == []
