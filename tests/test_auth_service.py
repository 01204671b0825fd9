"""Auth service tests — registration and login rules, no HTTP.

Pattern: test_<operation>_<scenario>
"""

import pytest

from subtracker.errors import DuplicateEmailError, InvalidInputError, UnauthorizedError
from subtracker.main import app, lifespan
from subtracker.services.auth_service import dummy_hash


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_normalizes_and_signs_in(auth_service, token_service):
    result = await auth_service.register("  Ana  ", "  Ana@X.com ", "longenough1")

    assert result.user.name == "Ana"
    assert result.user.email == "ana@x.com"
    assert result.user.id
    assert token_service.validate(result.token) == result.user.id


@pytest.mark.asyncio
async def test_register_stores_hash_not_password(auth_service, user_repo):
    await auth_service.register("Ana", "ana@x.com", "longenough1")
    stored = await user_repo.find_by_email("ana@x.com")
    assert stored.password_hash != "longenough1"
    assert stored.password_hash.startswith("$2b$")


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["", "a", "1234567"])
async def test_register_short_password(auth_service, user_repo, password):
    with pytest.raises(InvalidInputError):
        await auth_service.register("Ana", "ana@x.com", password)
    assert len(user_repo) == 0


@pytest.mark.asyncio
async def test_register_password_exactly_eight(auth_service):
    result = await auth_service.register("Ana", "ana@x.com", "12345678")
    assert result.user.email == "ana@x.com"


@pytest.mark.asyncio
@pytest.mark.parametrize("name,email", [("", "ana@x.com"), ("   ", "ana@x.com"), ("Ana", ""), ("Ana", "  ")])
async def test_register_requires_name_and_email(auth_service, name, email):
    with pytest.raises(InvalidInputError):
        await auth_service.register(name, email, "longenough1")


@pytest.mark.asyncio
@pytest.mark.parametrize("second_email", ["ana@x.com", "ANA@X.COM", "  Ana@x.com "])
async def test_register_duplicate_email_case_insensitive(auth_service, second_email):
    await auth_service.register("Ana", "Ana@x.com", "longenough1")
    with pytest.raises(DuplicateEmailError):
        await auth_service.register("Other", second_email, "longenough2")


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_after_register(auth_service, token_service):
    registered = await auth_service.register("Ana", "ana@x.com", "longenough1")

    result = await auth_service.login(" ANA@x.com ", "longenough1")

    assert result.user.id == registered.user.id
    assert token_service.validate(result.token) == registered.user.id


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_are_identical(auth_service):
    """No signal distinguishes 'no such account' from 'bad password'."""
    await auth_service.register("Ana", "ana@x.com", "longenough1")

    with pytest.raises(UnauthorizedError) as wrong_password:
        await auth_service.login("ana@x.com", "not-the-password")
    with pytest.raises(UnauthorizedError) as unknown_email:
        await auth_service.login("nobody@x.com", "not-the-password")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.message == unknown_email.value.message == "invalid credentials"


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("", "longenough1"), ("  ", "longenough1"), ("ana@x.com", "")])
async def test_login_requires_email_and_password(auth_service, email, password):
    with pytest.raises(InvalidInputError):
        await auth_service.login(email, password)


@pytest.mark.asyncio
async def test_register_accepts_long_name_and_email(auth_service):
    email = "a" * 300 + "@example.com"
    result = await auth_service.register("N" * 500, email, "longenough1")
    assert result.user.name == "N" * 500
    assert result.user.email == email


@pytest.mark.asyncio
async def test_startup_warms_dummy_hash(auth_service):
    """The first unknown-email login reuses the hash built at startup."""
    dummy_hash.cache_clear()

    async with lifespan(app):
        assert dummy_hash.cache_info().currsize == 1

        with pytest.raises(UnauthorizedError):
            await auth_service.login("nobody@x.com", "not-the-password")

    info = dummy_hash.cache_info()
    assert info.misses == 1
    assert info.hits >= 1
