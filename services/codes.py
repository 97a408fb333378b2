# services/codes.py
import logging
import random
import re
from typing import Any, Awaitable, Callable, Dict

from errors import AppError, GenerationExhausted, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10
PREFIX_LENGTH = 3

_random = random.SystemRandom()


def code_prefix(seed: str, default: str) -> str:
    """First three ASCII letters of `seed`, uppercased. Seeds with fewer letters use `default`."""
    letters = re.sub(r"[^A-Za-z]", "", seed or "")
    if len(letters) < PREFIX_LENGTH:
        return default
    return letters[:PREFIX_LENGTH].upper()


def random_digits() -> str:
    return str(_random.randint(1000, 9999))


async def generate_code(
    seed: str,
    exists: Callable[[str], Awaitable[bool]],
    default: str,
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """Derive a code such as ALG1234 from `seed` that `exists` reports as free.

    A failing existence check is not treated as a free code: it surfaces as
    PersistenceError.
    """
    prefix = code_prefix(seed, default)
    for attempt in range(1, max_attempts + 1):
        code = f"{prefix}{random_digits()}"
        try:
            taken = await exists(code)
        except AppError:
            raise
        except Exception as e:
            raise PersistenceError(f"Could not check uniqueness of code {code}") from e
        if not taken:
            logger.info(f"Generated code {code} after {attempt} attempt(s)")
            return code
        logger.debug(f"Code {code} already taken")
    raise GenerationExhausted(f"Unable to generate unique code after {max_attempts} attempts")


async def ensure_code(
    document: Dict[str, Any],
    code_field: str,
    seed_field: str,
    exists: Callable[[str], Awaitable[bool]],
    default: str,
    is_new: bool = True,
) -> str:
    """Assign `document[code_field]` once, on a new document lacking a code."""
    current = document.get(code_field)
    if not is_new or current:
        return current
    seed = document.get(seed_field)
    if not isinstance(seed, str) or not seed.strip():
        raise ValidationError(f"{seed_field} is required to generate {code_field}")
    document[code_field] = await generate_code(seed, exists, default)
    return document[code_field]
