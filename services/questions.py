# services/questions.py
import re
from typing import Any, Dict, Optional

from errors import ValidationError

_KEY_PATTERN = re.compile(r"^[qQ]?(\d+)$")


def normalize_question_key(key) -> Optional[int]:
    """Map 1, "1", "q1" and "Q1" to the question number 1. Returns None for anything else."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if not isinstance(key, str):
        return None
    match = _KEY_PATTERN.match(key.strip())
    if not match:
        return None
    return int(match.group(1))


def normalize_questions(questions: Dict[Any, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Re-key a question map by the decimal string of each question number."""
    normalized = {}
    for key, content in (questions or {}).items():
        number = normalize_question_key(key)
        if number is None:
            raise ValidationError(f"Invalid question key: {key}")
        content = dict(content)
        if content.get("questionNo") is None:
            content["questionNo"] = number
        elif content["questionNo"] != number:
            raise ValidationError(
                f"Question key {key} does not match questionNo {content['questionNo']}"
            )
        if str(number) in normalized:
            raise ValidationError(f"Duplicate question number: {number}")
        normalized[str(number)] = content
    return normalized
