from __future__ import annotations

import pytest

from conftest import make_draft
from quiz_guard.core.errors import QuizValidationError
from quiz_guard.core.models import DraftSource, QuestionDraft, QuizDraft
from quiz_guard.core.quiz_validation import validate_quiz


def test_valid_draft_is_normalized():
    draft = QuizDraft(
        title="  Capitals ",
        instructions=" Choose wisely ",
        questions=[
            QuestionDraft(text=" Capital of France? ", options=[" Paris", "Lyon ", "", "  "], correct_ans="Paris "),
        ],
    )

    validated = validate_quiz(draft)

    assert validated.title == "Capitals"
    assert validated.instructions == "Choose wisely"
    assert validated.questions[0].text == "Capital of France?"
    assert validated.questions[0].options == ["Paris", "Lyon"]
    assert validated.questions[0].correct_ans == "Paris"


def test_quiz_without_questions_is_accepted():
    draft = QuizDraft(title="Empty", instructions="Nothing yet", questions=[])

    assert validate_quiz(draft).questions == []


@pytest.mark.parametrize("field", ["title", "instructions"])
def test_missing_metadata_is_rejected(field):
    draft = make_draft()
    setattr(draft, field, "   ")

    with pytest.raises(QuizValidationError) as excinfo:
        validate_quiz(draft)

    assert excinfo.value.question_number is None
    assert field in excinfo.value.message


def test_correct_answer_must_be_one_of_the_options():
    draft = make_draft(question_count=3)
    draft.questions[1].correct_ans = "42"

    with pytest.raises(QuizValidationError) as excinfo:
        validate_quiz(draft)

    assert excinfo.value.question_number == 2
    assert excinfo.value.message.startswith("Question 2:")
    assert "match one of the options" in excinfo.value.message


@pytest.mark.parametrize(
    ("question", "reason"),
    [
        (QuestionDraft(text="", options=["a", "b"], correct_ans="a"), "question text"),
        (QuestionDraft(text="Q", options=["a", ""], correct_ans="a"), "at least 2 options"),
        (QuestionDraft(text="Q", options=["a", "b", "c", "d", "e"], correct_ans="a"), "at most 4 options"),
        (QuestionDraft(text="Q", options=["a", "a"], correct_ans="a"), "distinct"),
        (QuestionDraft(text="Q", options=["a", "b"], correct_ans=""), "correct answer"),
    ],
)
def test_question_problems_name_the_question(question, reason):
    draft = make_draft(question_count=1)
    draft.questions.append(question)

    with pytest.raises(QuizValidationError) as excinfo:
        validate_quiz(draft)

    assert excinfo.value.question_number == 2
    assert reason in excinfo.value.message


def test_import_source_refers_to_spreadsheet_columns():
    draft = make_draft()
    draft.questions[0].correct_ans = ""

    with pytest.raises(QuizValidationError) as excinfo:
        validate_quiz(draft, DraftSource.IMPORT)

    assert "'Correct Answer'" in excinfo.value.message

    draft = make_draft()
    draft.title = ""
    with pytest.raises(QuizValidationError, match="'Quiz Title' on the first row"):
        validate_quiz(draft, DraftSource.IMPORT)


def test_draft_editing_operations():
    draft = QuizDraft()
    assert len(draft.questions) == 1

    draft.update_question(0, text="Largest planet?")
    draft.set_option(0, 0, "Jupiter")
    draft.set_option(0, 1, "Mars")
    draft.update_question(0, correct_ans="Jupiter")
    draft.add_option(0)
    draft.add_option(0)
    draft.add_option(0)
    assert len(draft.questions[0].options) == 4

    draft.set_option(0, 0, "Jupiter (gas giant)")
    assert draft.questions[0].correct_ans == "Jupiter (gas giant)"

    draft.remove_option(0, 0)
    assert draft.questions[0].correct_ans == ""
    draft.remove_option(0, 0)
    draft.remove_option(0, 0)
    assert len(draft.questions[0].options) == 2

    draft.add_question()
    draft.remove_question(0)
    draft.remove_question(0)
    assert len(draft.questions) == 1

    with pytest.raises(IndexError):
        draft.update_question(5, text="nope")
