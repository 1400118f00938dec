"""
Password and token primitives.

bcrypt for passwords; personal access tokens are "<id>|<secret>" where
only sha256(secret) is persisted.
"""

import hashlib
import secrets
import string

import bcrypt

TOKEN_SECRET_LENGTH = 40
# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_PASSWORD_BYTES = 72
_TOKEN_ALPHABET = string.ascii_letters + string.digits

# Compared against when an email is unknown so that login always pays the bcrypt cost.
_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(10)).decode()


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash password using bcrypt with the given cost factor."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Check a password against a bcrypt hash in constant time.

    A missing hash is checked against a dummy hash and always fails.
    """
    stored = password_hash if password_hash is not None else _DUMMY_BCRYPT_HASH
    valid = bcrypt.checkpw(_password_bytes(password), stored.encode())
    return valid and password_hash is not None


def generate_token_secret() -> str:
    """Generate the random part of a personal access token."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_SECRET_LENGTH))


def hash_token_secret(secret: str) -> str:
    return hashlib.sha256(secret.encode()).hexdigest()


def format_token(token_id: int, secret: str) -> str:
    return f"{token_id}|{secret}"


def parse_token(plain_text: str) -> tuple[int, str] | None:
    """
    Split a plaintext token into (id, secret).

    Returns None when the token is not of the form "<digits>|<secret>".
    """
    token_id, sep, secret = plain_text.partition("|")
    if not sep or not token_id.isdigit() or not secret:
        return None
    return int(token_id), secret
