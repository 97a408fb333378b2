# services/credentials.py
import re

import bcrypt

import config
from errors import InvalidCredential

BCRYPT_PATTERN = re.compile(r"^\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}$")
MAX_PASSWORD_BYTES = 72


def is_hashed(value: str) -> bool:
    return isinstance(value, str) and BCRYPT_PATTERN.match(value) is not None


def hash_if_needed(password) -> str:
    """Return a salted bcrypt hash of `password`, or the value itself if it is already a hash."""
    if not password or not isinstance(password, str):
        raise InvalidCredential("Password must be a non-empty string")
    if is_hashed(password):
        return password
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise InvalidCredential(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(candidate, stored) -> bool:
    if not candidate or not stored or not isinstance(candidate, str) or not isinstance(stored, str):
        return False
    raw = candidate.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, stored.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
