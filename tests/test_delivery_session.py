from __future__ import annotations

import pytest

from quiz_guard.core.errors import SubmissionError
from quiz_guard.core.services.delivery_session import (
    CompletionReason,
    DeliverySession,
    DeliveryState,
    QuestionView,
)


def _questions(count: int) -> list[QuestionView]:
    return [
        QuestionView(id=f"q{n}", text=f"Question {n}", options=["a", "b", "c"], order=n)
        for n in range(1, count + 1)
    ]


class RecordingSubmit:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls = []
        self.error = error

    def __call__(self, answers, started_at):
        self.calls.append((list(answers), started_at))
        if self.error is not None:
            raise self.error
        return {"answers": len(answers)}


def _session(count: int, clock, submit=None, seconds: int = 60) -> DeliverySession:
    return DeliverySession(
        _questions(count),
        submit or RecordingSubmit(),
        seconds_per_question=seconds,
        clock=clock,
    )


def test_start_requires_fullscreen(clock):
    session = _session(2, clock)

    assert session.start(fullscreen_acquired=False) is False
    assert session.state is DeliveryState.NOT_STARTED
    assert session.current_question is None

    assert session.start(fullscreen_acquired=True) is True
    assert session.state is DeliveryState.IN_PROGRESS
    assert session.current_question.id == "q1"
    assert session.time_left == 120
    assert session.started_at == clock.now


def test_questions_are_presented_in_order(clock):
    questions = list(reversed(_questions(3)))
    session = DeliverySession(questions, RecordingSubmit(), clock=clock)
    session.start(True)

    seen = [session.current_question.id]
    while session.advance() is not None:
        seen.append(session.current_question.id)

    assert seen == ["q1", "q2", "q3"]


def test_selection_replaces_previous_answer_and_records_time(clock):
    session = _session(2, clock)
    session.start(True)

    clock.advance(3)
    session.select_answer("a")
    clock.advance(4)
    session.select_answer("b")

    assert session.selected_answer == "b"
    assert len(session.answers) == 1
    assert session.answers[0].answer == "b"
    assert session.answers[0].time_spent == 7
    assert session.answers[0].timestamp == clock.now


def test_selecting_unknown_option_is_rejected(clock):
    session = _session(1, clock)
    with pytest.raises(RuntimeError):
        session.select_answer("a")

    session.start(True)
    with pytest.raises(ValueError):
        session.select_answer("z")


def test_no_backtracking_and_time_band_resets(clock):
    session = _session(3, clock)
    session.start(True)
    session.select_answer("a")
    session.tick()
    session.tick()

    assert session.advance().id == "q2"
    assert session.current_index == 1
    assert session.time_left == 60
    assert session.selected_answer is None

    clock.advance(2)
    session.select_answer("c")
    assert session.answers[1].time_spent == 2
    assert [a.question_id for a in session.answers] == ["q1", "q2"]


def test_unanswered_questions_are_not_submitted(clock):
    submit = RecordingSubmit()
    session = _session(3, clock, submit)
    session.start(True)
    session.advance()
    session.select_answer("b")
    session.advance()
    session.advance()

    answers, _started = submit.calls[0]
    assert [a.question_id for a in answers] == ["q2"]


def test_finishing_last_question_submits_once(clock):
    submit = RecordingSubmit()
    session = _session(2, clock, submit)
    session.start(True)
    session.select_answer("a")
    session.advance()
    assert session.is_last_question

    assert session.advance() is None
    assert session.state is DeliveryState.COMPLETED
    assert session.completion_reason is CompletionReason.FINISHED
    assert session.result == {"answers": 1}

    session.advance()
    session.tick()
    assert session.force_complete(CompletionReason.TAB_SWITCH) is False
    assert len(submit.calls) == 1
    assert session.submit_count == 1


def test_timer_reaching_zero_submits(clock):
    submit = RecordingSubmit()
    session = _session(1, clock, submit, seconds=3)
    session.start(True)

    session.tick()
    session.tick()
    assert session.is_in_progress
    session.tick()

    assert session.time_left == 0
    assert session.completion_reason is CompletionReason.TIMEOUT
    assert len(submit.calls) == 1
    session.tick()
    assert len(submit.calls) == 1


def test_force_complete_marks_reason(clock):
    submit = RecordingSubmit()
    session = _session(2, clock, submit)
    session.start(True)

    assert session.force_complete(CompletionReason.FULLSCREEN_EXIT) is True

    assert session.completion_reason is CompletionReason.FULLSCREEN_EXIT
    assert session.completion_reason.forced
    assert session.current_question is None
    assert len(submit.calls) == 1


def test_submit_failure_still_completes(clock):
    submit = RecordingSubmit(error=SubmissionError("Failed to submit quiz!"))
    session = _session(1, clock, submit)
    session.start(True)

    session.advance()

    assert session.state is DeliveryState.COMPLETED
    assert isinstance(session.submit_error, SubmissionError)
    assert session.result is None
    assert session.submit_count == 1


def test_empty_quiz_completes_on_start(clock):
    submit = RecordingSubmit()
    session = _session(0, clock, submit)

    assert session.start(True) is True

    assert session.state is DeliveryState.COMPLETED
    assert submit.calls == [([], clock.now)]
