"""HTTP client used by the student kiosk to fetch quizzes and submit answers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import httpx

from quiz_guard.core.errors import QuizGuardError
from quiz_guard.core.models import GradeResult, QuestionResult, StudentAnswer
from quiz_guard.core.services.delivery_session import QuestionView

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 10.0


class ApiClientError(QuizGuardError):
    """Raised when the quiz server cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class QuizPaper:
    """A quiz as delivered to a student: questions without answers."""

    id: str
    title: str
    instructions: str
    questions: list[QuestionView]


class QuizApiClient:
    """Thin synchronous wrapper around the quiz server's student endpoints.

    Requests are never retried; the kiosk reports failures to the student.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = _TIMEOUT_SECONDS,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> QuizApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_quiz(self, quiz_id: str) -> QuizPaper:
        payload = self._request("GET", f"/quiz/{quiz_id}")
        return QuizPaper(
            id=payload["id"],
            title=payload["title"],
            instructions=payload["instructions"],
            questions=[
                QuestionView(
                    id=q["id"],
                    text=q["text"],
                    options=list(q["options"]),
                    order=q["order"],
                )
                for q in payload.get("questions", [])
            ],
        )

    def submit(
        self,
        quiz_id: str,
        student_id: str,
        answers: Sequence[StudentAnswer],
        started_at: datetime | None = None,
    ) -> GradeResult:
        body = {
            "studentId": student_id,
            "answers": [
                {
                    "questionId": a.question_id,
                    "answer": a.answer,
                    "timeSpent": a.time_spent,
                    "timestamp": a.timestamp.isoformat(),
                }
                for a in answers
            ],
        }
        if started_at is not None:
            body["startedAt"] = started_at.isoformat()
        payload = self._request("POST", f"/quiz/{quiz_id}/submit", json=body)
        logger.info("Submitted %d answers for quiz %s", len(answers), quiz_id)
        return _grade_result_from_json(payload)

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiClientError("Unable to reach the quiz server.") from exc
        if response.is_error:
            raise ApiClientError(_error_message(response), status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiClientError("The quiz server sent an unreadable response.") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    message = payload.get("error") if isinstance(payload, dict) else None
    return message or f"Request failed with status {response.status_code}"


def _grade_result_from_json(payload: dict) -> GradeResult:
    return GradeResult(
        score=payload["score"],
        total_questions=payload["totalQuestions"],
        percentage=payload["percentage"],
        has_questions=payload.get("hasQuestions", payload["totalQuestions"] > 0),
        details=[
            QuestionResult(
                question_id=d["questionId"],
                text=d["text"],
                options=list(d["options"]),
                order=d["order"],
                submitted_answer=d.get("submittedAnswer"),
                is_correct=d["isCorrect"],
                correct_ans=d["correctAns"],
            )
            for d in payload.get("details", [])
        ],
    )
