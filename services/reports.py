# services/reports.py
from typing import Any, Dict, List, Mapping, Optional

from services.submissions import REVIEWED_STATUS, ASSIGNMENT, QUIZ

PUBLIC_USER_FIELDS = ("userCode", "fullName", "email", "mobileNumber", "role", "className")


def public_user(user: Mapping[str, Any]) -> Dict[str, Any]:
    return {field: user.get(field) for field in PUBLIC_USER_FIELDS}


def _rows(entities, student_code: str, code_field: str, name_field: str) -> List[Dict[str, Any]]:
    rows = []
    for entity in entities:
        record = (entity.get("submissions") or {}).get(student_code)
        if record is None:
            continue
        rows.append({
            code_field: entity.get(code_field),
            name_field: entity.get(name_field),
            "subject": entity.get("subject"),
            "dueDate": entity.get("dueDate"),
            "status": record.get("status"),
            "overallScore": record.get("overallScore"),
            "submissionDate": record.get("submissionDate"),
        })
    return rows


def _totals(rows: List[Dict[str, Any]], reviewed_status: str) -> Dict[str, Any]:
    scores = [r["overallScore"] for r in rows if r["overallScore"] is not None]
    average: Optional[float] = round(sum(scores) / len(scores), 2) if scores else None
    return {
        "submitted": len(rows),
        "reviewed": sum(1 for r in rows if r["status"] == reviewed_status),
        "averageScore": average,
    }


def build_student_report(
    student: Mapping[str, Any],
    assignments: List[Mapping[str, Any]],
    quizzes: List[Mapping[str, Any]],
) -> Dict[str, Any]:
    code = student["userCode"]
    assignment_rows = _rows(assignments, code, "assignmentCode", "assignmentName")
    quiz_rows = _rows(quizzes, code, "quizeCode", "quizeName")
    return {
        "student": public_user(student),
        "assignments": assignment_rows,
        "quizzes": quiz_rows,
        "totals": {
            "assignments": _totals(assignment_rows, REVIEWED_STATUS[ASSIGNMENT]),
            "quizzes": _totals(quiz_rows, REVIEWED_STATUS[QUIZ]),
        },
    }
