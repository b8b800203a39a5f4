"""Salted PBKDF2-SHA256 password hashing.

Stored format:  "pbkdf2_sha256${iterations}${salt_hex}${digest_hex}"
Verification uses a constant-time comparison.
"""
import hashlib
import hmac
import secrets
from typing import Optional


ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    if iterations is None:
        from motivatr.config import get_settings

        iterations = get_settings().PASSWORD_HASH_ITERATIONS
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: Optional[str]) -> bool:
    """Return True if ``password`` matches the stored hash.

    Malformed or missing hashes verify as False rather than raising.
    """
    if not stored:
        return False
    try:
        algorithm, iterations, salt_hex, digest_hex = stored.split("$")
        if algorithm != ALGORITHM:
            return False
        expected = bytes.fromhex(digest_hex)
        actual = _derive(password, bytes.fromhex(salt_hex), int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(expected, actual)
