"""State machine for one student taking one quiz.

The session never talks to Qt or the network directly: the kiosk window
feeds it clicks, one ``tick()`` per second and proctoring escalations, and
it calls the injected ``submit`` callback exactly once when it completes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Callable, Generic, Sequence, TypeVar

from quiz_guard.constants.quiz_constants import SECONDS_PER_QUESTION
from quiz_guard.core.errors import QuizGuardError
from quiz_guard.core.models import StudentAnswer

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")
SubmitCallback = Callable[[list[StudentAnswer], datetime], ResultT]


class DeliveryState(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


class CompletionReason(Enum):
    FINISHED = auto()
    TIMEOUT = auto()
    TAB_SWITCH = auto()
    FULLSCREEN_EXIT = auto()

    @property
    def forced(self) -> bool:
        return self is not CompletionReason.FINISHED


@dataclass(slots=True)
class QuestionView:
    """Question as the student sees it: no correct answer."""

    id: str
    text: str
    options: list[str]
    order: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeliverySession(Generic[ResultT]):
    """Presents questions one way only and grades once.

    ``NOT_STARTED -> IN_PROGRESS`` needs fullscreen; every path into
    ``COMPLETED`` (last question, timer, proctoring) goes through
    ``_complete`` which submits at most once.
    """

    def __init__(
        self,
        questions: Sequence[QuestionView],
        submit: SubmitCallback[ResultT],
        *,
        seconds_per_question: int = SECONDS_PER_QUESTION,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._questions = sorted(questions, key=lambda q: q.order)
        self._submit = submit
        self._seconds_per_question = seconds_per_question
        self._clock = clock

        self._state = DeliveryState.NOT_STARTED
        self._index = 0
        self._time_left = seconds_per_question * len(self._questions)
        self._started_at: datetime | None = None
        self._question_started_at: datetime | None = None
        self._answers: dict[str, StudentAnswer] = {}

        self._completion_reason: CompletionReason | None = None
        self._submit_count = 0
        self._result: ResultT | None = None
        self._submit_error: QuizGuardError | None = None

    # --- State ---

    @property
    def state(self) -> DeliveryState:
        return self._state

    @property
    def is_in_progress(self) -> bool:
        return self._state is DeliveryState.IN_PROGRESS

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def current_question(self) -> QuestionView | None:
        if self._state is not DeliveryState.IN_PROGRESS:
            return None
        return self._questions[self._index]

    @property
    def is_last_question(self) -> bool:
        return self._index >= len(self._questions) - 1

    @property
    def selected_answer(self) -> str | None:
        question = self.current_question
        if question is None:
            return None
        recorded = self._answers.get(question.id)
        return recorded.answer if recorded else None

    @property
    def answers(self) -> list[StudentAnswer]:
        return list(self._answers.values())

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def completion_reason(self) -> CompletionReason | None:
        return self._completion_reason

    @property
    def submit_count(self) -> int:
        return self._submit_count

    @property
    def result(self) -> ResultT | None:
        return self._result

    @property
    def submit_error(self) -> QuizGuardError | None:
        return self._submit_error

    # --- Transitions ---

    def start(self, fullscreen_acquired: bool) -> bool:
        """Enter ``IN_PROGRESS``; without fullscreen the session stays put."""
        if self._state is not DeliveryState.NOT_STARTED:
            return False
        if not fullscreen_acquired:
            logger.warning("Fullscreen not acquired; quiz not started")
            return False
        if not self._questions:
            self._state = DeliveryState.IN_PROGRESS
            self._started_at = self._clock()
            self._complete(CompletionReason.FINISHED)
            return True
        now = self._clock()
        self._state = DeliveryState.IN_PROGRESS
        self._started_at = now
        self._question_started_at = now
        self._time_left = self._seconds_per_question * len(self._questions)
        return True

    def select_answer(self, option: str) -> StudentAnswer:
        """Record ``option`` for the current question, replacing any earlier pick."""
        question = self.current_question
        if question is None:
            raise RuntimeError("No question is active.")
        if option not in question.options:
            raise ValueError(f"'{option}' is not an option of question {question.order}.")
        now = self._clock()
        answer = StudentAnswer(
            question_id=question.id,
            answer=option,
            time_spent=self._seconds_since(self._question_started_at, now),
            timestamp=now,
        )
        self._answers[question.id] = answer
        return answer

    def advance(self) -> QuestionView | None:
        """Move to the next question, or complete after the last one.

        The current question can never be shown again once this returns.
        """
        if self._state is not DeliveryState.IN_PROGRESS:
            return None
        if self.is_last_question:
            self._complete(CompletionReason.FINISHED)
            return None
        self._index += 1
        self._time_left = self._seconds_per_question
        self._question_started_at = self._clock()
        return self._questions[self._index]

    def tick(self) -> None:
        """Count down one second; reaching zero completes the quiz."""
        if self._state is not DeliveryState.IN_PROGRESS:
            return
        self._time_left = max(0, self._time_left - 1)
        if self._time_left == 0:
            self._complete(CompletionReason.TIMEOUT)

    def force_complete(self, reason: CompletionReason) -> bool:
        """Complete from a proctoring violation; returns False if already done."""
        if self._state is not DeliveryState.IN_PROGRESS:
            return False
        logger.warning("Forcing quiz completion: %s", reason.name)
        return self._complete(reason)

    def _complete(self, reason: CompletionReason) -> bool:
        if self._state is DeliveryState.COMPLETED:
            return False
        self._state = DeliveryState.COMPLETED
        self._completion_reason = reason
        self._submit_count += 1
        try:
            self._result = self._submit(self.answers, self._started_at or self._clock())
        except QuizGuardError as exc:
            # The session ends regardless; the window reports the failure.
            logger.error("Submitting answers failed: %s", exc)
            self._submit_error = exc
        return True

    @staticmethod
    def _seconds_since(start: datetime | None, now: datetime) -> int:
        if start is None:
            return 0
        return max(0, int((now - start).total_seconds()))
