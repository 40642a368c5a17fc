"""Tests for the create_user operator script (the only way to create an admin)."""

import io
import os
import unittest
from unittest.mock import patch

from sqlalchemy.orm import sessionmaker

from amnii.core.config import Settings
from amnii.core.database import build_engine
from amnii.core.security import verify_password
from amnii.models import Base, User
from amnii.scripts import create_user


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        engine = build_engine("sqlite://")
        Base.metadata.create_all(engine)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        settings = Settings(
            _env_file=None,
            JWT_PRIVATE_KEY="test-signing-secret-0123456789abcdef",
            DATABASE_URL="sqlite://",
            BCRYPT_ROUNDS=4,
        )
        patchers = [
            patch.object(create_user, "load_dotenv"),
            patch.object(create_user, "get_settings", return_value=settings),
            patch.object(create_user, "build_session_factory", return_value=self.session_factory),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

    def _stored(self, email: str) -> User | None:
        db = self.session_factory()
        try:
            return db.query(User).filter(User.email == email).first()
        finally:
            db.close()

    def test_creates_admin(self) -> None:
        code = create_user.main(["Site Admin", "admin@x.com", "secret1", "--admin"])
        self.assertEqual(code, 0)
        user = self._stored("admin@x.com")
        self.assertIsNotNone(user)
        self.assertTrue(user.is_admin)
        self.assertTrue(verify_password("secret1", user.password_hash))

    def test_creates_regular_user_by_default(self) -> None:
        self.assertEqual(create_user.main(["Plain User", "user@x.com", "secret1"]), 0)
        self.assertFalse(self._stored("user@x.com").is_admin)

    def test_duplicate_email(self) -> None:
        self.assertEqual(create_user.main(["Site Admin", "admin@x.com", "secret1"]), 0)
        self.assertEqual(create_user.main(["Other Admin", "admin@x.com", "secret2"]), 1)

    def test_missing_signing_secret_exits_cleanly(self) -> None:
        with patch.dict(os.environ, {}, clear=True), \
                patch.object(create_user, "get_settings", lambda: Settings(_env_file=None)), \
                patch("sys.stderr", new_callable=io.StringIO) as stderr:
            code = create_user.main(["Site Admin", "admin@x.com", "secret1", "--admin"])
        self.assertEqual(code, 1)
        self.assertIn("Fatal error: JWT_PRIVATE_KEY is not defined", stderr.getvalue())
        self.assertIsNone(self._stored("admin@x.com"))

    def test_invalid_input(self) -> None:
        self.assertEqual(create_user.main(["Al", "admin@x.com", "secret1"]), 1)
        self.assertIsNone(self._stored("admin@x.com"))


if __name__ == "__main__":
    unittest.main()
