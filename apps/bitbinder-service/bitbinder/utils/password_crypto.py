"""
Password hashing and session token utilities.

Responsibilities:
- Hash account passwords with PBKDF2-HMAC-SHA256 (100k iterations, 16-byte
  salt, 32-byte key) and verify them with constant-time comparison
- Generate session token strings of the form: bb_sess_<token_id>_<secret>
- Hash session secrets with Argon2id; only the hash is persisted
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

PBKDF2_ITERATIONS = 100_000
PBKDF2_SALT_BYTES = 16
PBKDF2_KEY_BYTES = 32

SESSION_TOKEN_PREFIX = "bb_sess_"

_argon2 = PasswordHasher(time_cost=2, memory_cost=19456, parallelism=1, hash_len=32)


@dataclass(frozen=True)
class ParsedToken:
    token_id: str
    secret: str


def hash_password(plain_text: str, *, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Derive a PBKDF2 key with a fresh random salt; salt and key are stored together."""
    salt = secrets.token_bytes(PBKDF2_SALT_BYTES)
    dk = hashlib.pbkdf2_hmac("sha256", plain_text.encode("utf-8"), salt, iterations, dklen=PBKDF2_KEY_BYTES)
    return "pbkdf2$sha256$%d$%s$%s" % (
        iterations,
        base64.urlsafe_b64encode(salt).decode("ascii"),
        base64.urlsafe_b64encode(dk).decode("ascii"),
    )


def verify_password(plain_text: str, encoded: str) -> bool:
    if plain_text is None or not encoded:
        return False
    try:
        scheme, algo, iter_str, b64_salt, b64_dk = encoded.split("$")
    except ValueError:
        return False
    if scheme != "pbkdf2" or algo != "sha256":
        return False
    try:
        iterations = int(iter_str)
        salt = base64.urlsafe_b64decode(b64_salt)
        dk_expected = base64.urlsafe_b64decode(b64_dk)
    except (ValueError, TypeError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_text.encode("utf-8"), salt, iterations, dklen=len(dk_expected))
    return hmac.compare_digest(dk, dk_expected)


def generate_token_id() -> str:
    """Return a short hex id (no underscores) used for DB lookup and logs."""
    return uuid.uuid4().hex[:16]


def generate_secret(length: int = 32) -> str:
    return secrets.token_urlsafe(length)


def build_token_string(token_id: str, secret: str) -> str:
    return f"{SESSION_TOKEN_PREFIX}{token_id}_{secret}"


def parse_token(token: str) -> Optional[ParsedToken]:
    """Parse a session token into token_id and secret.

    Returns None if format is invalid.
    """
    if not token or not token.startswith(SESSION_TOKEN_PREFIX):
        return None
    body = token[len(SESSION_TOKEN_PREFIX):]
    # token_id is hex, secret may contain '_' so split once
    idx = body.find("_")
    if idx <= 0:
        return None
    token_id = body[:idx]
    secret = body[idx + 1:]
    if not token_id or not secret:
        return None
    return ParsedToken(token_id=token_id, secret=secret)


def hash_secret(secret: str) -> str:
    return _argon2.hash(secret)


def verify_secret(secret: str, encoded_hash: str) -> bool:
    if not secret or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, secret)
    except (VerificationError, InvalidHashError):
        return False


def generate_token() -> Tuple[str, str, str]:
    """Generate a new session token and return (token_id, secret, full_token)."""
    tid = generate_token_id()
    sec = generate_secret()
    return tid, sec, build_token_string(tid, sec)
