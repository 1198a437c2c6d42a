import jwt
import pytest

from social_toolkit.auth.jwt import JWTCredentialProvider
from social_toolkit.errors import UnauthorizedError


def test_password_hashing(credentials):
    password_hash = credentials.hash_password("s3cret")

    assert password_hash != "s3cret"
    assert credentials.verify_password("s3cret", password_hash)
    assert not credentials.verify_password("wrong", password_hash)
    assert not credentials.verify_password("s3cret", "")
    assert not credentials.verify_password("s3cret", "not-a-bcrypt-hash")


def test_token_round_trip(credentials):
    token = credentials.issue_token(42)

    assert jwt.decode(token, "test-secret", algorithms=["HS256"])["userId"] == 42
    assert credentials.resolve_token(token) == 42


def test_expired_token_is_rejected():
    provider = JWTCredentialProvider(secret_key="test-secret", expire_minutes=-1)

    with pytest.raises(UnauthorizedError, match="expired"):
        provider.resolve_token(provider.issue_token(1))


def test_token_signed_with_another_key_is_rejected(credentials):
    foreign = JWTCredentialProvider(secret_key="other-secret").issue_token(1)

    with pytest.raises(UnauthorizedError, match="Invalid token"):
        credentials.resolve_token(foreign)


def test_token_without_user_claim_is_rejected(credentials):
    token = jwt.encode({"sub": "1"}, "test-secret", algorithm="HS256")

    with pytest.raises(UnauthorizedError):
        credentials.resolve_token(token)
