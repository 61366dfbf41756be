"""Password hashing and opaque session identifiers."""

import secrets

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for credential validation (input validation at the boundary).
EMAIL_MIN_LEN = 5
EMAIL_MAX_LEN = 255
DISPLAY_NAME_MIN_LEN = 2
DISPLAY_NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Bytes of entropy in a session identifier (token_urlsafe encodes to ~43 chars).
SESSION_ID_BYTES = 32


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    A malformed hash is reported as a mismatch so callers cannot tell
    "wrong password" from "corrupt digest".
    """
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def new_session_id() -> str:
    """Return a fresh opaque session identifier for the session cookie."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)
