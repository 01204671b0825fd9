"""Password hashing tests."""

import pytest

from subtracker.auth.password import hash_password, verify_password
from subtracker.errors import InternalError


def test_hash_and_verify():
    h = hash_password("correct horse battery", rounds=4)
    assert h.startswith("$2b$04$")
    assert verify_password("correct horse battery", h)


def test_wrong_password_does_not_verify():
    h = hash_password("correct horse battery", rounds=4)
    assert not verify_password("correct horse battery!", h)


def test_hash_is_salted():
    """Same password, different hashes."""
    assert hash_password("same-password", rounds=4) != hash_password("same-password", rounds=4)


def test_malformed_hash_is_just_a_mismatch():
    assert verify_password("whatever", "not-a-bcrypt-hash") is False
    assert verify_password("whatever", "") is False


def test_long_password_truncated_to_72_bytes():
    """bcrypt ignores bytes past 72 — we truncate explicitly instead of erroring."""
    base = "a" * 72
    h = hash_password(base + "tail-one", rounds=4)
    assert verify_password(base + "tail-two", h)


def test_invalid_rounds_is_internal_error():
    with pytest.raises(InternalError):
        hash_password("password_123", rounds=2)
