from datetime import timedelta

from jose import jwt

from storefront.core.config import get_settings
from storefront.core.security import hash_password, issue_token, verify_password, verify_token


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_same_password_hashes_differently(self):
        first = hash_password("s3cret-pass")
        second = hash_password("s3cret-pass")
        assert first != second
        assert verify_password("s3cret-pass", first)
        assert verify_password("s3cret-pass", second)

    def test_hash_is_self_describing(self):
        assert hash_password("abcdef").startswith("$2b$")

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("abcdef", "not-a-bcrypt-hash")
        assert not verify_password("", hash_password("abcdef"))

    def test_long_passwords_are_accepted(self):
        long_password = "x" * 200
        assert verify_password(long_password, hash_password(long_password))


class TestTokens:
    def test_fresh_token_is_valid(self):
        claims = verify_token(issue_token("42", "user"))
        assert claims is not None
        assert claims["sub"] == "42"
        assert claims["role"] == "user"
        assert claims["exp"] > claims["iat"]

    def test_token_is_invalid_at_expiry(self):
        assert verify_token(issue_token("42", "user", expires_delta=timedelta(0))) is None

    def test_token_is_invalid_after_expiry(self):
        assert verify_token(issue_token("42", "user", expires_delta=timedelta(seconds=-5))) is None

    def test_default_lifetime_is_thirty_days(self):
        claims = verify_token(issue_token("42", "user"))
        assert claims["exp"] - claims["iat"] == 30 * 24 * 3600

    def test_foreign_secret_is_invalid(self):
        settings = get_settings()
        forged = jwt.encode(
            {"sub": "42", "role": "admin", "exp": 4_102_444_800},
            "some-other-secret",
            algorithm=settings.JWT_ALG,
        )
        assert verify_token(forged) is None

    def test_garbage_never_raises(self):
        assert verify_token("not.a.jwt") is None
        assert verify_token("") is None
        assert verify_token(None) is None

    def test_token_without_subject_is_invalid(self):
        settings = get_settings()
        token = jwt.encode(
            {"role": "user", "exp": 4_102_444_800},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALG,
        )
        assert verify_token(token) is None
