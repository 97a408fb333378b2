# services/submissions.py
"""Per-student submission records nested in assignment and quiz documents.

Both `submit` and `review` work on plain document dicts and return an updated
copy; persisting the result is left to the caller.

Status flow:
    assignment: pending -> submitted -> reviewed
    quiz:       pending -> active -> completed   (cancelled is set manually)
"""
import copy
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from errors import NotFound, ValidationError
from services.questions import normalize_question_key

logger = logging.getLogger(__name__)

ASSIGNMENT = "assignment"
QUIZ = "quiz"

ASSIGNMENT_STATUSES = ("pending", "submitted", "reviewed")
QUIZ_STATUSES = ("pending", "active", "completed", "cancelled")

SUBMITTED_STATUS = {ASSIGNMENT: "submitted", QUIZ: "active"}
REVIEWED_STATUS = {ASSIGNMENT: "reviewed", QUIZ: "completed"}

REVIEW_FIELDS = (
    "overallScore",
    "teacherComments",
    "summary",
    "needPractice",
    "topicUnderCovered",
    "resources",
)

# student codes become keys of the submissions map and parts of dotted update paths
_STUDENT_CODE = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_kind(kind: str):
    if kind not in (ASSIGNMENT, QUIZ):
        raise ValueError(f"Unknown submission kind: {kind}")


def validate_student_code(student_code) -> str:
    if not isinstance(student_code, str) or not _STUDENT_CODE.match(student_code.strip()):
        raise ValidationError("studentCode must be a non-empty code of letters, digits, '-' or '_'")
    return student_code.strip()


def answers_match(answer: Optional[str], correct: Optional[str]) -> bool:
    """Compare a quiz answer with the correct option, ignoring case and surrounding whitespace."""
    if answer is None or correct is None:
        return False
    return str(answer).strip().casefold() == str(correct).strip().casefold()


def build_submission(
    entity: Mapping[str, Any],
    answers: Iterable[Mapping[str, Any]],
    kind: str,
    now: datetime = None,
) -> Dict[str, Any]:
    _check_kind(kind)
    answers = list(answers or [])
    if not answers:
        raise ValidationError("answers must contain at least one entry")

    questions = entity.get("questions") or {}
    seen = set()
    entries = []
    for item in answers:
        number = normalize_question_key(item.get("questionNo"))
        if number is None:
            raise ValidationError(f"Invalid questionNo: {item.get('questionNo')}")
        if number in seen:
            raise ValidationError(f"Duplicate answer for question {number}")
        seen.add(number)
        text = item.get("answer")
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"Answer for question {number} is required")
        entry = {"questionNo": number, "answer": text.strip()}
        if kind == QUIZ:
            question = questions.get(str(number)) or {}
            entry["match"] = answers_match(text, question.get("correctOption"))
        else:
            entry["rate"] = 0
        entries.append(entry)

    return {
        "answers": entries,
        "overallScore": None,
        "submissionDate": now or datetime.now(timezone.utc),
        "teacherComments": None,
        "summary": None,
        "needPractice": [],
        "topicUnderCovered": [],
        "status": SUBMITTED_STATUS[kind],
        "resources": [],
    }


def submit(
    entity: Mapping[str, Any],
    student_code: str,
    answers: Iterable[Mapping[str, Any]],
    kind: str,
    now: datetime = None,
) -> Dict[str, Any]:
    """Replace the student's submission with a fresh record. Earlier answers and review data are dropped."""
    student_code = validate_student_code(student_code)
    record = build_submission(entity, answers, kind, now)
    updated = copy.deepcopy(dict(entity))
    submissions = dict(updated.get("submissions") or {})
    submissions[student_code] = record
    updated["submissions"] = submissions
    return updated


def apply_ratings(answers: List[Dict[str, Any]], ratings: Mapping[Any, Any]) -> List[Any]:
    """Write ratings onto matching answers' `rate`. Returns the keys that matched nothing."""
    by_number = {a["questionNo"]: a for a in answers}
    ignored = []
    for key, rate in ratings.items():
        number = normalize_question_key(key)
        if number is None or number not in by_number:
            ignored.append(key)
            continue
        by_number[number]["rate"] = rate
    return ignored


def review(
    entity: Mapping[str, Any],
    student_code: str,
    fields: Mapping[str, Any],
    kind: str,
) -> Dict[str, Any]:
    """Overlay the supplied review fields on an existing submission and mark it reviewed."""
    _check_kind(kind)
    student_code = validate_student_code(student_code)
    updated = copy.deepcopy(dict(entity))
    submissions = updated.get("submissions") or {}
    record = submissions.get(student_code)
    if record is None:
        raise NotFound(f"No submission found for student {student_code}")

    for field in REVIEW_FIELDS:
        if field in fields:
            record[field] = fields[field]

    ratings = fields.get("questionRatings")
    if ratings and kind == ASSIGNMENT:
        ignored = apply_ratings(record.get("answers") or [], ratings)
        if ignored:
            logger.info(f"Ignored ratings for unknown questions {ignored} (student {student_code})")

    record["status"] = REVIEWED_STATUS[kind]
    updated["submissions"] = submissions
    return updated
