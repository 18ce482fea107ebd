"""
Password hashing and access-token helpers.

Passwords are stored as ``pbkdf2:sha256:<iterations>$<salt>$<hex digest>``.
Access tokens are HS256 JWTs whose ``username`` claim names the caller.
"""
import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from sns.config import settings

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
_HASH_PREFIX = "pbkdf2:sha256:"


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"{_HASH_PREFIX}{PBKDF2_ITERATIONS}${salt}${dk.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Return True when *password* matches *password_hash*; malformed hashes never match."""
    if not password_hash.startswith(_HASH_PREFIX):
        return False
    parts = password_hash.split("$")
    if len(parts) != 3:
        return False
    header, salt, stored = parts
    try:
        iterations = int(header.rsplit(":", 1)[1])
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return hmac.compare_digest(dk.hex(), stored)


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------

def create_access_token(
    username: str,
    secret_key: str | None = None,
    expire_seconds: int | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    ttl = expire_seconds if expire_seconds is not None else settings.JWT_EXPIRE_SECONDS
    claims = {
        "username": username,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(claims, secret_key or settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_username(token: str, secret_key: str | None = None) -> str | None:
    """
    Return the ``username`` claim of a valid token.

    Returns None for expired, tampered or otherwise unreadable tokens.
    """
    try:
        claims = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.PyJWTError as exc:
        logger.info("Rejected access token: %s", exc)
        return None
    username = claims.get("username")
    return username if isinstance(username, str) else None
