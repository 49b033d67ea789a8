"""Unit tests for the JWT token service and bcrypt password hasher"""

import jwt
import pytest

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.token_service import JwtTokenService
from src.app.services.token_service import TokenError, TokenExpiredError


class TestJwtTokenService:

    def test_issue_and_verify(self):
        service = JwtTokenService(secret="test-secret", expires_minutes=5)

        token = service.issue(42, "owner@example.com")

        assert service.verify(token) == 42
        claims = jwt.decode(token, "test-secret", algorithms=["HS256"])
        assert claims["sub"] == "42"
        assert claims["email"] == "owner@example.com"

    def test_expired(self):
        service = JwtTokenService(secret="test-secret", expires_minutes=-1)

        with pytest.raises(TokenExpiredError) as exc_info:
            service.verify(service.issue(1, "a@b.co"))

        assert exc_info.value.code == "TOKEN_EXPIRED"

    def test_wrong_secret(self):
        token = JwtTokenService(secret="other-secret").issue(1, "a@b.co")

        with pytest.raises(TokenError) as exc_info:
            JwtTokenService(secret="test-secret").verify(token)

        assert exc_info.value.code == "INVALID_TOKEN"

    def test_garbage(self):
        with pytest.raises(TokenError):
            JwtTokenService(secret="test-secret").verify("not.a.token")


class TestBcryptPasswordHasher:

    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher(rounds=4)

        password_hash = hasher.hash("s3cret-pass")

        assert password_hash != "s3cret-pass"
        assert hasher.verify("s3cret-pass", password_hash)
        assert not hasher.verify("wrong", password_hash)

    def test_malformed_hash(self):
        assert not BcryptPasswordHasher(rounds=4).verify("pw", "not-a-bcrypt-hash")
