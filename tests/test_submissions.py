"""Tests for services/submissions.py."""

from datetime import datetime, timezone

import pytest

from errors import NotFound, ValidationError
from services.submissions import (
    ASSIGNMENT, QUIZ, answers_match, build_submission, review, submit,
)

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def assignment():
    return {
        "assignmentCode": "ALG1234",
        "assignmentName": "Algebra Basics",
        "questions": {
            "1": {"questionNo": 1, "question": "6 x 7?"},
            "2": {"questionNo": 2, "question": "2 + 2?"},
        },
        "submissions": {},
    }


@pytest.fixture
def quiz():
    return {
        "quizeCode": "GEO1234",
        "quizeName": "Geometry Quiz",
        "questions": {
            "1": {"questionNo": 1, "question": "Triangle?", "correctOption": "B"},
            "2": {"questionNo": 2, "question": "Square?", "correctOption": "A"},
        },
        "submissions": {},
    }


def test_submit_assignment_record(assignment):
    updated = submit(assignment, "STU1234", [{"questionNo": 1, "answer": " 42 "}], ASSIGNMENT, NOW)
    record = updated["submissions"]["STU1234"]
    assert record["status"] == "submitted"
    assert record["submissionDate"] == NOW
    assert record["overallScore"] is None
    assert record["answers"] == [{"questionNo": 1, "answer": "42", "rate": 0}]
    assert record["needPractice"] == []
    assert record["resources"] == []


def test_submit_does_not_mutate_input(assignment):
    submit(assignment, "STU1234", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    assert assignment["submissions"] == {}


def test_submit_keeps_other_students(assignment):
    first = submit(assignment, "STU1111", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    second = submit(first, "STU2222", [{"questionNo": 1, "answer": "41"}], ASSIGNMENT)
    assert set(second["submissions"]) == {"STU1111", "STU2222"}


def test_resubmit_overwrites_previous_record(assignment):
    first = submit(assignment, "STU1234", [
        {"questionNo": 1, "answer": "41"},
        {"questionNo": 2, "answer": "5"},
    ], ASSIGNMENT)
    reviewed = review(first, "STU1234", {
        "overallScore": 3,
        "teacherComments": "Check your tables",
        "needPractice": ["multiplication"],
        "questionRatings": {"q1": 2},
    }, ASSIGNMENT)

    again = submit(reviewed, "STU1234", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    record = again["submissions"]["STU1234"]
    assert record["answers"] == [{"questionNo": 1, "answer": "42", "rate": 0}]
    assert record["overallScore"] is None
    assert record["teacherComments"] is None
    assert record["needPractice"] == []
    assert record["status"] == "submitted"


def test_quiz_submission_sets_match_flags(quiz):
    updated = submit(quiz, "STU1234", [
        {"questionNo": 1, "answer": "B"},
        {"questionNo": 2, "answer": "C"},
    ], QUIZ)
    record = updated["submissions"]["STU1234"]
    assert record["status"] == "active"
    assert [a["match"] for a in record["answers"]] == [True, False]
    assert all("rate" not in a for a in record["answers"])


def test_quiz_answer_for_unknown_question_does_not_match(quiz):
    updated = submit(quiz, "STU1234", [{"questionNo": 9, "answer": "B"}], QUIZ)
    assert updated["submissions"]["STU1234"]["answers"][0]["match"] is False


@pytest.mark.parametrize("answer,correct,expected", [
    ("B", "B", True),
    ("b", "B", True),
    (" B ", "B", True),
    ("C", "B", False),
    ("B", None, False),
    (None, "B", False),
])
def test_answers_match(answer, correct, expected):
    assert answers_match(answer, correct) is expected


@pytest.mark.parametrize("answers", [
    [],
    [{"questionNo": 1, "answer": "x"}, {"questionNo": "q1", "answer": "y"}],
    [{"questionNo": "one", "answer": "x"}],
    [{"questionNo": 1, "answer": "   "}],
])
def test_build_submission_rejects_bad_answers(assignment, answers):
    with pytest.raises(ValidationError):
        build_submission(assignment, answers, ASSIGNMENT)


@pytest.mark.parametrize("code", ["", "STU.1", "$where", None, "a b"])
def test_submit_rejects_unsafe_student_codes(assignment, code):
    with pytest.raises(ValidationError):
        submit(assignment, code, [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)


def test_review_requires_existing_submission(assignment):
    with pytest.raises(NotFound):
        review(assignment, "STU1234", {"overallScore": 5}, ASSIGNMENT)


def test_review_partial_update_keeps_other_fields(assignment):
    submitted = submit(assignment, "STU1234", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    first = review(submitted, "STU1234", {
        "overallScore": 6,
        "teacherComments": "Good start",
        "summary": "Solid",
        "topicUnderCovered": ["fractions"],
        "resources": [{"type": "video", "link": "https://example.com/v"}],
    }, ASSIGNMENT)
    second = review(first, "STU1234", {"overallScore": 8}, ASSIGNMENT)
    record = second["submissions"]["STU1234"]
    assert record["overallScore"] == 8
    assert record["teacherComments"] == "Good start"
    assert record["summary"] == "Solid"
    assert record["topicUnderCovered"] == ["fractions"]
    assert record["resources"] == [{"type": "video", "link": "https://example.com/v"}]
    assert record["status"] == "reviewed"


def test_review_ratings_accept_both_key_forms(assignment):
    submitted = submit(assignment, "STU1234", [
        {"questionNo": 1, "answer": "42"},
        {"questionNo": 2, "answer": "4"},
    ], ASSIGNMENT)
    updated = review(submitted, "STU1234", {"questionRatings": {"q1": 6, "2": 9}}, ASSIGNMENT)
    rates = {a["questionNo"]: a["rate"] for a in updated["submissions"]["STU1234"]["answers"]}
    assert rates == {1: 6, 2: 9}


def test_review_ignores_unmatched_rating_keys(assignment):
    submitted = submit(assignment, "STU1234", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    updated = review(submitted, "STU1234", {"questionRatings": {"q7": 5, "bogus": 3, "1": 4}}, ASSIGNMENT)
    answers = updated["submissions"]["STU1234"]["answers"]
    assert answers == [{"questionNo": 1, "answer": "42", "rate": 4}]


def test_quiz_review_completes_submission(quiz):
    submitted = submit(quiz, "STU1234", [{"questionNo": 1, "answer": "B"}], QUIZ)
    updated = review(submitted, "STU1234", {"overallScore": 10, "summary": "Perfect"}, QUIZ)
    record = updated["submissions"]["STU1234"]
    assert record["status"] == "completed"
    assert record["overallScore"] == 10
    assert record["answers"][0]["match"] is True


def test_review_does_not_mutate_input(assignment):
    submitted = submit(assignment, "STU1234", [{"questionNo": 1, "answer": "42"}], ASSIGNMENT)
    review(submitted, "STU1234", {"overallScore": 9, "questionRatings": {"1": 9}}, ASSIGNMENT)
    record = submitted["submissions"]["STU1234"]
    assert record["overallScore"] is None
    assert record["status"] == "submitted"
    assert record["answers"][0]["rate"] == 0
