import pytest
from pydantic import ValidationError

from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    LoginFailedError,
    MissingTokenError,
    TokenError,
)
from modules.auth.models import AuthPayload, TokenClaims
from modules.auth.passwords import PasswordHasher
from modules.users.models import User

from tests.conftest import user_doc


class TestTokenClaims:
    def test_dumps_wire_names(self):
        claims = TokenClaims(user_id="u1", email="a@b.co", exp=2, iat=1)
        assert claims.model_dump(by_alias=True) == {"userId": "u1", "email": "a@b.co", "exp": 2, "iat": 1}

    def test_parses_wire_names(self):
        claims = TokenClaims.model_validate({"userId": "u1", "email": "a@b.co", "exp": 2, "iat": 1, "aud": "x"})
        assert claims.user_id == "u1"

    def test_requires_user_id(self):
        with pytest.raises(ValidationError):
            TokenClaims(email="a@b.co", exp=2, iat=1)


class TestAuthPayload:
    def test_holds_user(self):
        user = User.from_document({"id": "u1", **user_doc()})
        payload = AuthPayload(token="t", user=user)
        assert payload.user.email == "ada@example.com"


class TestAuthExceptions:
    def test_token_errors_are_not_api_errors(self):
        """Token failures downgrade to anonymous, they never reach the client."""
        for error in (InvalidTokenError(), ExpiredTokenError(), MissingTokenError()):
            assert isinstance(error, TokenError)

    def test_codes(self):
        assert ExpiredTokenError().code == "TOKEN_EXPIRED"
        assert MissingTokenError().code == "MISSING_TOKEN"

    def test_login_failed(self):
        error = LoginFailedError()
        assert error.code == "SERVER_ERROR"
        assert error.message_key == "loginFailed"


class TestPasswordHasher:
    def test_verify(self):
        hasher = PasswordHasher()
        hashed = hasher.hash("correct horse")

        assert hashed != "correct horse"
        assert hasher.verify(hashed, "correct horse") is True
        assert hasher.verify(hashed, "battery staple") is False

    def test_verify_garbage_hash(self):
        assert PasswordHasher().verify("not-a-hash", "anything") is False
