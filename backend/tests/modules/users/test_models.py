import pytest
from pydantic import ValidationError

from modules.users.exceptions import EmailExistsError, UserNotFoundError
from modules.users.models import CreateUserInput, Gender, Location, Title, User

from tests.conftest import user_doc


class TestUser:
    def test_from_document(self):
        user = User.from_document({"id": "u1", **user_doc(gender="male", title="dr")})

        assert user.first_name == "Ada"
        assert user.gender is Gender.MALE
        assert user.title is Title.DR
        assert user.register_date.year == 2024

    def test_password_hash_is_not_dumped(self):
        user = User.from_document({"id": "u1", "password_hash": "secret", **user_doc()})

        assert user.password_hash == "secret"
        assert "password_hash" not in user.model_dump()
        assert "secret" not in repr(user)

    def test_unknown_gender_is_rejected(self):
        with pytest.raises(ValidationError):
            User.from_document({"id": "u1", **user_doc(gender="other")})


class TestCreateUserInput:
    def test_minimal(self):
        data = CreateUserInput(first_name="Ada", last_name="Lovelace", email="ada@example.com")
        assert data.idempotency_key is None
        assert data.location is None

    def test_location_bounds(self):
        with pytest.raises(ValidationError):
            Location(street="1 A")
        assert Location(city="Paris").city == "Paris"

    def test_short_password(self):
        with pytest.raises(ValidationError):
            CreateUserInput(first_name="Ada", last_name="Lovelace", email="a@b.co", password="short")


class TestUserExceptions:
    def test_user_not_found(self):
        error = UserNotFoundError("u1")
        assert error.code == "RESOURCE_NOT_FOUND"
        assert error.reason == "USER_NOT_FOUND"
        assert error.message_key == "userNotFound"
        assert error.details == {"user_id": "u1"}

    def test_email_exists(self):
        error = EmailExistsError("ada@example.com")
        assert error.code == "BODY_NOT_VALID"
        assert error.to_dict()["extensions"]["reason"] == "EMAIL_EXISTS"
