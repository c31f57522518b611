"""Unit tests for stored credential parsing and verification."""

import logging
from unittest.mock import Mock

import pytest

from usergate_auth import (
    HashedCredential,
    LegacyPlaintextCredential,
    PasswordHashingService,
    parse_credential,
    verify_credential,
)


class TestParseCredential:
    """Tests for classifying stored values."""

    @pytest.mark.parametrize("prefix", ["$2a$", "$2b$", "$2y$"])
    def test_bcrypt_prefix_gives_hashed(self, prefix):
        stored = parse_credential(prefix + "10$abcdefghijklmnopqrstuv")

        assert isinstance(stored, HashedCredential)

    def test_other_values_give_legacy_plaintext(self):
        stored = parse_credential("hunter2")

        assert isinstance(stored, LegacyPlaintextCredential)
        assert stored.value == "hunter2"

    def test_none_gives_empty_legacy(self):
        stored = parse_credential(None)

        assert stored == LegacyPlaintextCredential("")

    def test_legacy_repr_hides_value(self):
        assert "hunter2" not in repr(LegacyPlaintextCredential("hunter2"))


class TestVerifyCredential:
    """Tests for checking a supplied password against a stored credential."""

    def setup_method(self):
        self.hasher = PasswordHashingService(rounds=4)

    def test_hashed_match(self):
        stored = HashedCredential(self.hasher.hash("secret1"))

        assert verify_credential("secret1", stored, self.hasher) is True

    def test_hashed_mismatch(self):
        stored = HashedCredential(self.hasher.hash("secret1"))

        assert verify_credential("secret2", stored, self.hasher) is False

    def test_hashed_does_not_strip_supplied_password(self):
        stored = HashedCredential(self.hasher.hash("secret1"))

        assert verify_credential(" secret1 ", stored, self.hasher) is False

    def test_legacy_match(self):
        stored = LegacyPlaintextCredential("hunter2")

        assert verify_credential("hunter2", stored, self.hasher) is True

    def test_legacy_match_ignores_surrounding_whitespace(self):
        stored = LegacyPlaintextCredential("  hunter2\n")

        assert verify_credential(" hunter2 ", stored, self.hasher) is True

    def test_legacy_mismatch(self):
        stored = LegacyPlaintextCredential("hunter2")

        assert verify_credential("hunter3", stored, self.hasher) is False

    def test_legacy_is_case_sensitive(self):
        stored = LegacyPlaintextCredential("Hunter2")

        assert verify_credential("hunter2", stored, self.hasher) is False

    def test_empty_stored_legacy_never_matches(self):
        stored = LegacyPlaintextCredential("   ")

        assert verify_credential("   ", stored, self.hasher) is False

    def test_empty_supplied_password_never_matches(self):
        stored = LegacyPlaintextCredential("hunter2")

        assert verify_credential("", stored, self.hasher) is False

    def test_legacy_match_logs_warning(self, caplog):
        stored = LegacyPlaintextCredential("hunter2")

        with caplog.at_level(logging.WARNING, logger="usergate_auth.credentials"):
            verify_credential("hunter2", stored, self.hasher)

        assert "legacy plaintext" in caplog.text
        assert "hunter2" not in caplog.text

    def test_legacy_path_does_not_call_bcrypt(self):
        hasher = Mock(spec=PasswordHashingService)

        verify_credential("hunter2", LegacyPlaintextCredential("hunter2"), hasher)

        hasher.verify.assert_not_called()

    def test_unknown_credential_type_raises(self):
        with pytest.raises(TypeError, match="Unsupported credential type"):
            verify_credential("secret", "raw-string", self.hasher)
