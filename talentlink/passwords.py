"""Salted password hashing (PBKDF2-HMAC-SHA256)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import os

from talentlink.config import settings

_ALGORITHM = "pbkdf2_sha256"
_SALT_LEN = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int | None = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt>$<digest>``."""
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(_SALT_LEN)
    digest = _derive(password, salt, iterations)
    return "$".join(
        [
            _ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, encoded: str | None) -> bool:
    """Constant-time check of ``password`` against a stored hash."""
    if not encoded:
        return False
    try:
        algorithm, iterations, salt, digest = encoded.split("$")
    except ValueError:
        return False
    if algorithm != _ALGORITHM:
        return False
    try:
        expected = base64.b64decode(digest, validate=True)
        actual = _derive(password, base64.b64decode(salt, validate=True), int(iterations))
    except (ValueError, OverflowError):
        # bad base64 (binascii.Error) or an out-of-range iteration count
        return False
    return hmac.compare_digest(actual, expected)
