"""Unit tests for the User aggregate."""

from dataclasses import fields
from datetime import date

import pytest

from usergate.domain.user import DEFAULT_ROLE, InvalidEmailError, User, UserProfile


def _make_user(**overrides) -> User:
    values = {
        "id": 1,
        "username": "alice",
        "email": "Alice@X.com",
        "password_credential": "$2b$10$abcdefghijklmnopqrstuv",
        "status": None,
        "dob": date(1990, 4, 1),
        "phone": "555-0100",
        "role": None,
    }
    values.update(overrides)
    return User.reconstitute(**values)


class TestUser:
    def test_email_is_normalized(self):
        user = _make_user()

        assert user.email == "alice@x.com"

    def test_invalid_email_rejected(self):
        with pytest.raises(InvalidEmailError):
            _make_user(email="not-an-email")

    def test_role_defaults_to_user(self):
        assert _make_user().role == DEFAULT_ROLE == "user"

    def test_missing_status_is_active(self):
        assert _make_user(status=None).is_active is True

    def test_inactive_status(self):
        assert _make_user(status="disabled").is_active is False

    def test_profile_has_no_credential(self):
        profile = _make_user().profile()

        assert isinstance(profile, UserProfile)
        assert "password" not in {f.name for f in fields(profile)}
        assert "password_credential" not in {f.name for f in fields(profile)}
        assert profile.id == 1
        assert profile.username == "alice"
        assert profile.email == "alice@x.com"
        assert profile.dob == date(1990, 4, 1)
        assert profile.phone == "555-0100"

    def test_profile_requires_persisted_user(self):
        user = User(username="bob", email="bob@x.com", password_credential="x")

        with pytest.raises(ValueError, match="not been persisted"):
            user.profile()

    def test_repr_hides_credential(self):
        user = _make_user(password_credential="hunter2")

        assert "hunter2" not in repr(user)

    def test_equality_by_id(self):
        assert _make_user(id=5) == _make_user(id=5, username="other")
        assert _make_user(id=5) != _make_user(id=6)
