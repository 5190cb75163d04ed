from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from quiz_guard.core.db import create_db_engine, create_session_factory, init_db
from quiz_guard.core.models import QuestionDraft, QuizDraft
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.core.services.quiz_store import QuizStore


def make_draft(question_count: int = 2, title: str = "Fractions") -> QuizDraft:
    return QuizDraft(
        title=title,
        instructions="Pick one answer per question.",
        questions=[
            QuestionDraft(
                text=f"What is {n} + {n}?",
                options=[str(2 * n), str(2 * n + 1), str(2 * n + 2)],
                correct_ans=str(2 * n),
            )
            for n in range(1, question_count + 1)
        ],
    )


class FakeClock:
    """Manually advanced clock for the delivery session."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine) -> QuizStore:
    return QuizStore(create_session_factory(engine))


@pytest.fixture()
def manager(store) -> QuizManager:
    return QuizManager(store)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
