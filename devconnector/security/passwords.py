"""
Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of a password; longer inputs are
rejected at the request schema and refused here rather than silently
truncated.
"""

import hashlib

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return raw


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash suitable for storage."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a candidate password against a stored hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Over-long candidate or malformed stored hash
        return False


def gravatar_url(email: str, size: int = 200) -> str:
    """Gravatar URL for an email: PG rated, mystery-man fallback."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{digest}?s={size}&r=pg&d=mm"
