"""Unit tests for amnii.core.security: bcrypt password hashing and TokenService."""

import base64
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from amnii.core.errors import InvalidCredentialError
from amnii.core.security import TokenService, hash_password, verify_password
from amnii.schemas.auth import TokenClaims

SECRET = "test-signing-secret-0123456789abcdef"
FAST_ROUNDS = 4


class TestPasswordHashing(unittest.TestCase):
    """hash_password is salted and one-way; verify_password returns a bool."""

    def test_verify_accepts_original_password(self) -> None:
        hashed = hash_password("secret1", rounds=FAST_ROUNDS)
        self.assertTrue(verify_password("secret1", hashed))

    def test_verify_rejects_other_password(self) -> None:
        hashed = hash_password("secret1", rounds=FAST_ROUNDS)
        self.assertFalse(verify_password("secret2", hashed))

    def test_hash_never_contains_plaintext(self) -> None:
        hashed = hash_password("secret1", rounds=FAST_ROUNDS)
        self.assertNotEqual(hashed, "secret1")
        self.assertNotIn("secret1", hashed)
        self.assertTrue(hashed.startswith("$2"))

    def test_same_password_gets_fresh_salt(self) -> None:
        first = hash_password("secret1", rounds=FAST_ROUNDS)
        second = hash_password("secret1", rounds=FAST_ROUNDS)
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret1", first))
        self.assertTrue(verify_password("secret1", second))

    def test_unparsable_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", ""))

    def test_unicode_password(self) -> None:
        hashed = hash_password("pässwörd✓", rounds=FAST_ROUNDS)
        self.assertTrue(verify_password("pässwörd✓", hashed))
        self.assertFalse(verify_password("passwörd✓", hashed))


class TestTokenServiceConstruction(unittest.TestCase):
    """TokenService refuses to exist without a usable secret."""

    def test_empty_secret_raises(self) -> None:
        with self.assertRaises(ValueError):
            TokenService(secret="")

    def test_blank_secret_raises(self) -> None:
        with self.assertRaises(ValueError):
            TokenService(secret="   ")

    def test_unsupported_algorithm_raises(self) -> None:
        for algorithm in ("HSX", "RS256", "none"):
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(ValueError):
                    TokenService(secret=SECRET, algorithm=algorithm)

    def test_secret_not_in_repr(self) -> None:
        self.assertNotIn(SECRET, repr(TokenService(secret=SECRET)))


class TestTokenRoundTrip(unittest.TestCase):
    """A token issued for (id, is_admin) verifies back to exactly those claims."""

    def setUp(self) -> None:
        self.tokens = TokenService(secret=SECRET)

    def test_regular_user(self) -> None:
        claims = self.tokens.verify(self.tokens.issue(7, False))
        self.assertEqual(claims, TokenClaims(subject_id=7, is_admin=False))

    def test_admin_user(self) -> None:
        claims = self.tokens.verify(self.tokens.issue(42, True))
        self.assertEqual(claims, TokenClaims(subject_id=42, is_admin=True))

    def test_payload_shape(self) -> None:
        payload = jwt.decode(self.tokens.issue(3, True), SECRET, algorithms=["HS256"])
        self.assertEqual(payload["sub"], "3")
        self.assertIs(payload["isAdmin"], True)
        self.assertIn("exp", payload)
        self.assertIn("iat", payload)
        self.assertEqual(payload["exp"] - payload["iat"], 60 * 60)


class TestTokenRejection(unittest.TestCase):
    """Any tampering, wrong key, expiry or bad claim shape is InvalidCredentialError."""

    def setUp(self) -> None:
        self.tokens = TokenService(secret=SECRET)

    def _encode(self, payload: dict, secret: str = SECRET) -> str:
        return jwt.encode(payload, secret, algorithm="HS256")

    def test_garbage(self) -> None:
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify("garbage")

    def test_every_single_byte_change_in_signature_rejected(self) -> None:
        token = self.tokens.issue(1, False)
        header, payload, signature = token.split(".")
        raw = base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4))
        for i in range(len(raw)):
            altered = bytearray(raw)
            altered[i] ^= 0x01
            encoded = base64.urlsafe_b64encode(bytes(altered)).rstrip(b"=").decode("ascii")
            with self.subTest(position=i):
                with self.assertRaises(InvalidCredentialError):
                    self.tokens.verify(f"{header}.{payload}.{encoded}")

    def test_altered_payload_rejected(self) -> None:
        token = self.tokens.issue(1, False)
        header, _, signature = token.split(".")
        forged = self._encode({"sub": "1", "isAdmin": True, "iat": 0, "exp": 9999999999}, "other-secret-0123456789abcdefghij")
        _, forged_payload, _ = forged.split(".")
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(f"{header}.{forged_payload}.{signature}")

    def test_wrong_secret(self) -> None:
        other = TokenService(secret="another-signing-secret-0123456789")
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(other.issue(1, True))

    def test_expired(self) -> None:
        now = datetime.now(UTC)
        token = self._encode(
            {"sub": "1", "isAdmin": False, "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)}
        )
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)

    def test_missing_admin_claim(self) -> None:
        now = datetime.now(UTC)
        token = self._encode({"sub": "1", "iat": now, "exp": now + timedelta(minutes=5)})
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)

    def test_non_bool_admin_claim(self) -> None:
        now = datetime.now(UTC)
        token = self._encode({"sub": "1", "isAdmin": "true", "iat": now, "exp": now + timedelta(minutes=5)})
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)

    def test_non_numeric_subject(self) -> None:
        now = datetime.now(UTC)
        token = self._encode({"sub": "alice", "isAdmin": False, "iat": now, "exp": now + timedelta(minutes=5)})
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)

    def test_missing_expiry(self) -> None:
        token = self._encode({"sub": "1", "isAdmin": False, "iat": datetime.now(UTC)})
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)

    def test_unsigned_token_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "isAdmin": True, "iat": now, "exp": now + timedelta(minutes=5)},
            None,
            algorithm="none",
        )
        with self.assertRaises(InvalidCredentialError):
            self.tokens.verify(token)


if __name__ == "__main__":
    unittest.main()
