from __future__ import annotations

import pytest

from conftest import make_draft
from quiz_guard.core.services.delivery_session import (
    CompletionReason,
    DeliverySession,
    DeliveryState,
    QuestionView,
)
from quiz_guard.core.services.proctoring_monitor import ProctoringEvent, ProctoringMonitor


@pytest.fixture()
def submissions():
    return []


@pytest.fixture()
def session(clock, submissions):
    questions = [QuestionView(id="q1", text="Q", options=["a", "b"], order=1)]

    def submit(answers, started_at):
        submissions.append(list(answers))
        return len(submissions)

    session = DeliverySession(questions, submit, clock=clock)
    session.start(True)
    return session


def test_tab_switch_strikes_warn_then_terminate(session, submissions):
    notices = []
    monitor = ProctoringMonitor(session, max_strikes=3, notify=notices.append)

    first = monitor.on_visibility_hidden()
    second = monitor.on_visibility_hidden()

    assert first.event is ProctoringEvent.TAB_SWITCH_WARNING
    assert first.message == "Warning: Tab switching detected! (1/3)"
    assert second.strikes == 2
    assert session.is_in_progress
    assert submissions == []

    third = monitor.on_visibility_hidden()

    assert third.event is ProctoringEvent.TAB_SWITCH_TERMINATED
    assert session.state is DeliveryState.COMPLETED
    assert session.completion_reason is CompletionReason.TAB_SWITCH
    assert len(submissions) == 1
    assert [n.event for n in notices] == [
        ProctoringEvent.TAB_SWITCH_WARNING,
        ProctoringEvent.TAB_SWITCH_WARNING,
        ProctoringEvent.TAB_SWITCH_TERMINATED,
    ]


def test_session_is_completed_before_termination_notice(session):
    states = []
    monitor = ProctoringMonitor(
        session, max_strikes=1, notify=lambda notice: states.append(session.state)
    )

    monitor.on_visibility_hidden()

    assert states == [DeliveryState.COMPLETED]


def test_leaving_fullscreen_terminates_immediately(session, submissions):
    monitor = ProctoringMonitor(session)

    notice = monitor.on_fullscreen_exit()

    assert notice.event is ProctoringEvent.FULLSCREEN_TERMINATED
    assert notice.message == "Quiz terminated: Fullscreen mode is required!"
    assert session.completion_reason is CompletionReason.FULLSCREEN_EXIT
    assert len(submissions) == 1


def test_third_strike_and_fullscreen_exit_store_one_attempt(manager, clock):
    quiz = manager.create_quiz(make_draft(question_count=2))
    views = [QuestionView(id=q.id, text=q.text, options=q.options, order=q.order) for q in quiz.questions]

    def submit(answers, started_at):
        return manager.submit_attempt(quiz.id, "s1", answers, started_at=started_at)

    session = DeliverySession(views, submit, clock=clock)
    session.start(True)
    session.select_answer("2")
    monitor = ProctoringMonitor(session)

    monitor.on_visibility_hidden()
    monitor.on_visibility_hidden()
    third = monitor.on_visibility_hidden()
    assert monitor.on_fullscreen_exit() is None
    session.tick()
    session.advance()

    assert third.event is ProctoringEvent.TAB_SWITCH_TERMINATED
    assert session.submit_count == 1
    attempts = manager.list_attempts(quiz.id)
    assert len(attempts) == 1
    assert attempts[0].score == 1


def test_watchers_are_idle_outside_a_running_quiz(clock):
    session = DeliverySession([], lambda answers, started_at: None, clock=clock)
    monitor = ProctoringMonitor(session)

    assert monitor.on_visibility_hidden() is None
    assert monitor.on_fullscreen_exit() is None
    assert monitor.strikes == 0
    assert monitor.blocks_context_menu is False
    assert monitor.should_block_key("F12") is False


@pytest.mark.parametrize(
    ("key", "ctrl", "shift", "blocked"),
    [
        ("F12", False, False, True),
        ("I", True, True, True),
        ("j", True, True, True),
        ("C", True, True, True),
        ("U", True, False, True),
        ("C", True, False, False),
        ("I", False, False, False),
        ("A", False, False, False),
    ],
)
def test_developer_shortcuts_are_blocked(session, key, ctrl, shift, blocked):
    notices = []
    monitor = ProctoringMonitor(session, notify=notices.append)

    assert monitor.should_block_key(key, ctrl=ctrl, shift=shift) is blocked
    assert len(notices) == (1 if blocked else 0)
    assert monitor.blocks_context_menu is True
    assert session.is_in_progress


def test_one_switch_away_reported_as_several_states_is_one_strike(session):
    monitor = ProctoringMonitor(session)

    first = monitor.on_application_state(False)
    assert monitor.on_application_state(False) is None

    assert first.message == "Warning: Tab switching detected! (1/3)"
    assert monitor.strikes == 1

    assert monitor.on_application_state(True) is None
    monitor.on_application_state(False)
    assert monitor.strikes == 2
