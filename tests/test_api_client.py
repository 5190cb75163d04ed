from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from quiz_guard.client.api_client import ApiClientError, QuizApiClient
from quiz_guard.core.models import StudentAnswer

NOW = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

QUIZ_JSON = {
    "id": "abc",
    "title": "Rivers",
    "instructions": "One answer each.",
    "createdAt": "2024-05-01T08:00:00Z",
    "questions": [
        {"id": "q2", "text": "Second", "options": ["x", "y"], "order": 2},
        {"id": "q1", "text": "First", "options": ["a", "b"], "order": 1},
    ],
}

RESULT_JSON = {
    "score": 1,
    "totalQuestions": 2,
    "percentage": 50,
    "hasQuestions": True,
    "details": [
        {
            "questionId": "q1",
            "text": "First",
            "options": ["a", "b"],
            "order": 1,
            "submittedAnswer": "a",
            "isCorrect": True,
            "correctAns": "a",
        },
        {
            "questionId": "q2",
            "text": "Second",
            "options": ["x", "y"],
            "order": 2,
            "submittedAnswer": None,
            "isCorrect": False,
            "correctAns": "y",
        },
    ],
    "attempt": {"id": "att", "studentId": "s1"},
}


def _client(handler) -> QuizApiClient:
    return QuizApiClient("http://quiz.test/", transport=httpx.MockTransport(handler))


def test_fetch_quiz_returns_questions_without_answers():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/quiz/abc"
        return httpx.Response(200, json=QUIZ_JSON)

    with _client(handler) as client:
        paper = client.fetch_quiz("abc")

    assert paper.title == "Rivers"
    assert {q.id: q.options for q in paper.questions} == {"q1": ["a", "b"], "q2": ["x", "y"]}


def test_submit_posts_camel_case_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=RESULT_JSON)

    answers = [StudentAnswer(question_id="q1", answer="a", time_spent=4, timestamp=NOW)]
    with _client(handler) as client:
        result = client.submit("abc", "s1", answers, NOW)

    assert seen["path"] == "/quiz/abc/submit"
    assert seen["body"] == {
        "studentId": "s1",
        "answers": [
            {"questionId": "q1", "answer": "a", "timeSpent": 4, "timestamp": "2024-05-01T09:00:00+00:00"}
        ],
        "startedAt": "2024-05-01T09:00:00+00:00",
    }
    assert result.score == 1
    assert result.details[1].submitted_answer is None
    assert result.details[1].correct_ans == "y"


def test_server_error_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "Quiz not found: abc"})

    with _client(handler) as client, pytest.raises(ApiClientError) as excinfo:
        client.fetch_quiz("abc")

    assert str(excinfo.value) == "Quiz not found: abc"
    assert excinfo.value.status_code == 404


def test_network_failure_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as client, pytest.raises(ApiClientError, match="Unable to reach"):
        client.submit("abc", "s1", [])

    assert len(calls) == 1


@pytest.mark.parametrize("body", [["not", "an", "object"], "plain text"])
def test_error_body_that_is_not_an_object(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json=body)

    with _client(handler) as client, pytest.raises(ApiClientError) as excinfo:
        client.fetch_quiz("abc")

    assert str(excinfo.value) == "Request failed with status 502"
    assert excinfo.value.status_code == 502
