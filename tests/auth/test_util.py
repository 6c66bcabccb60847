import uuid
from datetime import timedelta

import jwt
import pytest

from practice_tracker.auth.util import (
    TokenIssuer,
    generate_password_hash,
    token_issuer,
    verify_password,
)
from practice_tracker.config import Config
from practice_tracker.errors import InvalidTokenException


def test_password_hash_verifies_original_password():
    password_hash = generate_password_hash("s3cret")

    assert password_hash != "s3cret"
    assert verify_password("s3cret", password_hash)


def test_password_hash_rejects_other_password():
    assert not verify_password("s3cret", generate_password_hash("s3cretx"))


def test_password_hashes_are_salted():
    assert generate_password_hash("same") != generate_password_hash("same")


def test_verify_password_with_malformed_hash():
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_issued_token_resolves_to_user_id():
    user_id = uuid.uuid4()

    token = token_issuer.issue(user_id)

    assert token_issuer.verify(token) == str(user_id)


def test_token_expires_after_configured_lifetime():
    token = token_issuer.issue(uuid.uuid4())
    payload = jwt.decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])

    assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60


def test_tampered_token_is_rejected():
    token = token_issuer.issue(uuid.uuid4())
    header, payload, signature = token.split(".")
    tampered_signature = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(InvalidTokenException):
        token_issuer.verify(f"{header}.{payload}.{tampered_signature}")


def test_token_signed_with_other_secret_is_rejected():
    other = TokenIssuer("another-secret", "HS256", timedelta(days=7))

    with pytest.raises(InvalidTokenException):
        token_issuer.verify(other.issue(uuid.uuid4()))


def test_expired_token_is_rejected():
    expired = TokenIssuer(Config.JWT_SECRET, Config.JWT_ALGORITHM, timedelta(seconds=-1))

    with pytest.raises(InvalidTokenException) as exc_info:
        token_issuer.verify(expired.issue(uuid.uuid4()))

    assert exc_info.value.status_code == 400


def test_malformed_token_is_rejected():
    with pytest.raises(InvalidTokenException):
        token_issuer.verify("definitely.not.a-token")
