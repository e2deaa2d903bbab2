"""bcrypt password hashing for users and admins."""

from __future__ import annotations

import bcrypt

from .errors import ValidationError

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72
DEFAULT_ROUNDS = 12


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    secret = _encode(password)
    if len(secret) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(candidate: str, stored_hash: str) -> bool:
    """Check ``candidate`` against a stored hash; malformed hashes never match."""
    secret = _encode(candidate)
    if len(secret) > MAX_PASSWORD_BYTES or not stored_hash:
        return False
    try:
        return bcrypt.checkpw(secret, stored_hash.encode("ascii"))
    except ValueError:
        return False
