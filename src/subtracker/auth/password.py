"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor is configurable (SUBTRACKER_BCRYPT_ROUNDS, default 12,
~100ms per hash on modern hardware); tests drop it to 4.
"""

import bcrypt

from subtracker.errors import InternalError

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt.

    Learn: bcrypt includes a random salt automatically and produces
    hashes starting with "$2b$<rounds>$". Any failure from the library
    (bad rounds, no entropy) is an InternalError — the caller can't fix it.
    """
    pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")
    except (ValueError, TypeError, OSError) as e:
        raise InternalError("password hashing failed") from e


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    Never raises: a malformed hash is just a non-match.
    """
    try:
        pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError, AttributeError):
        return False
