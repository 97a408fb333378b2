# services/entities.py
"""Write and read paths shared by assignments and quizzes.

An entity kind is described by `EntityKind`: which field holds its code,
which field seeds that code, and how its submissions behave.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Mapping

from database import DocumentStore
from errors import NotFound
from services import submissions
from services.codes import ensure_code
from services.questions import normalize_questions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityKind:
    label: str
    code_field: str
    name_field: str
    default_prefix: str
    submission_kind: str


ASSIGNMENT = EntityKind("Assignment", "assignmentCode", "assignmentName", "ASS", submissions.ASSIGNMENT)
QUIZ = EntityKind("Quiz", "quizeCode", "quizeName", "QUI", submissions.QUIZ)


async def create_entity(store: DocumentStore, kind: EntityKind, data: Dict[str, Any]) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    document = dict(data)
    document["questions"] = normalize_questions(document.get("questions"))
    document["submissions"] = {}
    document["createdAt"] = now
    document["updatedAt"] = now

    async def exists(code: str) -> bool:
        return await store.exists({kind.code_field: code})

    await ensure_code(document, kind.code_field, kind.name_field, exists, kind.default_prefix)
    saved = await store.save(document)
    logger.info(f"{kind.label} created: {saved[kind.code_field]}")
    return saved


async def get_entity(store: DocumentStore, kind: EntityKind, code: str) -> Dict[str, Any]:
    entity = await store.find_one({kind.code_field: code})
    if not entity:
        raise NotFound(f"{kind.label} not found: {code}")
    return entity


async def _write_submission(store, kind, code, student_code, updated) -> Dict[str, Any]:
    record = updated["submissions"][student_code]
    await store.set_fields(
        {kind.code_field: code},
        {f"submissions.{student_code}": record, "updatedAt": datetime.now(timezone.utc)},
    )
    return record


async def submit_entity(
    store: DocumentStore, kind: EntityKind, code: str, student_code: str, answers: List[Mapping[str, Any]]
) -> Dict[str, Any]:
    student_code = submissions.validate_student_code(student_code)
    entity = await get_entity(store, kind, code)
    updated = submissions.submit(entity, student_code, answers, kind.submission_kind)
    record = await _write_submission(store, kind, code, student_code, updated)
    logger.info(f"{kind.label} {code} submitted by {student_code}")
    return record


async def review_entity(
    store: DocumentStore, kind: EntityKind, code: str, student_code: str, fields: Mapping[str, Any]
) -> Dict[str, Any]:
    student_code = submissions.validate_student_code(student_code)
    entity = await get_entity(store, kind, code)
    updated = submissions.review(entity, student_code, fields, kind.submission_kind)
    record = await _write_submission(store, kind, code, student_code, updated)
    logger.info(f"{kind.label} {code} reviewed for {student_code}")
    return record


async def submitted_students(
    store: DocumentStore, users: DocumentStore, kind: EntityKind, code: str
) -> List[Dict[str, Any]]:
    entity = await get_entity(store, kind, code)
    students = []
    for student_code, record in (entity.get("submissions") or {}).items():
        user = await users.find_one({"userCode": student_code})
        students.append({
            "studentCode": student_code,
            "fullName": user.get("fullName") if user else None,
            "className": user.get("className") if user else None,
            "status": record.get("status"),
            "submissionDate": record.get("submissionDate"),
            "overallScore": record.get("overallScore"),
        })
    return students


async def student_submission(store: DocumentStore, kind: EntityKind, code: str, student_code: str) -> Dict[str, Any]:
    entity = await get_entity(store, kind, code)
    record = (entity.get("submissions") or {}).get(student_code)
    if record is None:
        raise NotFound(f"No submission found for student {student_code}")
    result = {k: v for k, v in entity.items() if k != "submissions"}
    result["submission"] = record
    return result


async def list_submitted_by(store: DocumentStore, student_code: str) -> List[Dict[str, Any]]:
    student_code = submissions.validate_student_code(student_code)
    return await store.find({f"submissions.{student_code}": {"$exists": True}})
