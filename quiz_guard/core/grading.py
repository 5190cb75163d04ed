"""Pure grading of a submission against a quiz's questions."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from quiz_guard.core.models import GradeResult, Question, QuestionResult, StudentAnswer


def grade_submission(questions: Sequence[Question], answers: Iterable[StudentAnswer]) -> GradeResult:
    """Score ``answers`` against every question of the quiz.

    Matching is exact and case-sensitive. Questions without an answer count
    as wrong, answers for unknown questions are ignored, and when a question
    is answered more than once the last answer wins.
    """
    submitted: dict[str, str] = {}
    for answer in answers:
        submitted[answer.question_id] = answer.answer

    details: list[QuestionResult] = []
    score = 0
    for question in sorted(questions, key=lambda q: q.order):
        given = submitted.get(question.id)
        is_correct = given is not None and given == question.correct_ans
        if is_correct:
            score += 1
        details.append(
            QuestionResult(
                question_id=question.id,
                text=question.text,
                options=list(question.options),
                order=question.order,
                submitted_answer=given,
                is_correct=is_correct,
                correct_ans=question.correct_ans,
            )
        )

    total = len(details)
    return GradeResult(
        score=score,
        total_questions=total,
        percentage=percentage_of(score, total),
        has_questions=total > 0,
        details=details,
    )


def percentage_of(score: int, total: int) -> int:
    """Round-half-up percentage; a quiz without questions scores 0."""
    if total <= 0:
        return 0
    ratio = Decimal(score) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))
