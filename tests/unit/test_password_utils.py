"""
Unit Tests for password hashing
"""
import pytest

from earngage.auth_service.password_utils import (
    hash_password,
    is_password_strong,
    verify_password,
)

pytestmark = pytest.mark.unit


class TestPasswordHashing:

    def test_hash_verifies(self):
        hashed = hash_password("s3cretpass", rounds=4)

        assert hashed != "s3cretpass"
        assert hashed.startswith("$2")
        assert verify_password("s3cretpass", hashed) is True
        assert verify_password("wrongpass1", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("s3cretpass", rounds=4) != hash_password("s3cretpass", rounds=4)

    @pytest.mark.parametrize("stored", [None, "", "plaintext"])
    def test_missing_or_malformed_hash_never_verifies(self, stored):
        assert verify_password("s3cretpass", stored) is False


class TestPasswordStrength:

    @pytest.mark.parametrize("password,ok", [
        ("s3cretpass", True),
        ("short1", False),
        ("onlyletters", False),
        ("1234567890", False),
    ])
    def test_rules(self, password, ok):
        valid, message = is_password_strong(password)
        assert valid is ok
        assert (message is None) is ok

    def test_custom_min_length(self):
        assert is_password_strong("abc123", min_length=6) == (True, None)
