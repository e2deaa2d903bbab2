from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from balance_server.core.config import SecuritySettings
from balance_server.core.crypto import hash_password, verify_password
from balance_server.core.errors import ErrorKind, InvalidCredentialError, ValidationError
from balance_server.core.pagination import normalize_page, page_count, page_offset
from balance_server.core.security import PrincipalKind, TokenIssuer, parse_expires_in


@pytest.mark.parametrize(
    "value,expected",
    [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(seconds=3600)),
        (3600, timedelta(seconds=3600)),
    ],
)
def test_parse_expires_in(value, expected):
    assert parse_expires_in(value) == expected


@pytest.mark.parametrize("value", ["", "7x", "soon", 0, "0d", -5])
def test_parse_expires_in_rejects_invalid_values(value):
    with pytest.raises(ValueError):
        parse_expires_in(value)


@pytest.fixture
def issuer():
    return TokenIssuer(SecuritySettings(secret_key="unit-test-secret", access_token_expires_in="1h"))


def test_user_token_round_trip(issuer):
    token = issuer.issue_user_token("user-1", "phone-1", "ada@example.com")

    principal = issuer.decode(token)

    assert principal.kind is PrincipalKind.USER
    assert principal.subject == "user-1"
    assert principal.device_id == "phone-1"
    assert principal.email == "ada@example.com"
    assert not principal.is_admin
    assert principal.expires_at - principal.issued_at == timedelta(hours=1)


def test_admin_token_has_no_device(issuer):
    principal = issuer.decode(issuer.issue_admin_token("admin-1", "root"))

    assert principal.is_admin
    assert principal.username == "root"
    assert principal.device_id is None


def test_expired_token_is_rejected(issuer):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = issuer.issue_user_token("user-1", "phone-1", "ada@example.com", now=issued)

    with pytest.raises(InvalidCredentialError) as exc_info:
        issuer.decode(token)
    assert exc_info.value.kind is ErrorKind.INVALID_CREDENTIAL


def test_token_signed_with_other_key_is_rejected(issuer):
    other = TokenIssuer(SecuritySettings(secret_key="another-secret"))
    with pytest.raises(InvalidCredentialError):
        issuer.decode(other.issue_user_token("user-1", "phone-1", "ada@example.com"))


def test_user_token_without_device_is_rejected(issuer):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "user-1", "typ": "user", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        "unit-test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidCredentialError):
        issuer.decode(token)


def test_garbage_token_is_rejected(issuer):
    with pytest.raises(InvalidCredentialError):
        issuer.decode("not-a-token")


def test_normalize_page_is_lenient():
    assert normalize_page(None, None) == (1, 10)
    assert normalize_page("abc", "-3") == (1, 10)
    assert normalize_page("3", "25") == (3, 25)
    assert normalize_page(1, 1000) == (1, 1000)
    assert normalize_page(1, 1000, max_limit=100) == (1, 100)
    assert normalize_page(1, str(2**64)) == (1, 10)
    assert page_offset(3, 25) == 50
    assert page_count(21, 10) == 3
    assert page_count(0, 10) == 0


def test_password_hash_round_trip():
    hashed = hash_password("correct horse", rounds=4)

    assert hashed.startswith("$2")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_malformed_hash_never_matches():
    assert not verify_password("secret", "")
    assert not verify_password("secret", "not-a-bcrypt-hash")


def test_overlong_password_is_rejected():
    with pytest.raises(ValidationError):
        hash_password("x" * 73, rounds=4)
    assert not verify_password("x" * 73, hash_password("x" * 72, rounds=4))
