"""
Unit tests for password hashing utilities.
"""

from livenotes.security.password import burn_verification, hash_password, verify_password


class TestPasswordUtils:
    """Test password hashing and verification."""

    def test_hash_password(self):
        password = "TestPassword123!"
        hashed = hash_password(password)

        assert hashed != password
        assert isinstance(hashed, str)
        assert len(hashed) > 0

        # salted: same password, different hash
        assert hashed != hash_password(password)

    def test_verify_password_correct(self):
        hashed = hash_password("TestPassword123!")
        assert verify_password("TestPassword123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("TestPassword123!")
        assert verify_password("WrongPassword123!", hashed) is False

    def test_long_passwords_are_not_truncated(self):
        base = "x" * 80
        hashed = hash_password(base + "a")
        assert verify_password(base + "b", hashed) is False

    def test_burn_verification_never_succeeds(self):
        assert burn_verification() is False
