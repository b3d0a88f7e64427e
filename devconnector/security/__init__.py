"""
Security helpers: bcrypt password hashing and JWT access tokens.
"""

from .passwords import gravatar_url, hash_password, verify_password
from .tokens import create_access_token, decode_access_token

__all__ = [
    "hash_password",
    "verify_password",
    "gravatar_url",
    "create_access_token",
    "decode_access_token",
]
