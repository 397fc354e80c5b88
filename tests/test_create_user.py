"""Tests for the create_user CLI against an in-memory SQLite database."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import PasswordEncoder
from app.models import Base
from app.repositories import UserRepository
from app.scripts import create_user


class TestCreateUser(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        patcher = patch.object(create_user, "SessionLocal", self.session_factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _find(self, username: str):
        db = self.session_factory()
        try:
            return UserRepository(db).find_by_username(username)
        finally:
            db.close()

    def test_creates_admin(self) -> None:
        code = create_user.main(["root", "root@x.com", "s3cret", "ADMIN"])
        self.assertEqual(code, 0)
        user = self._find("root")
        self.assertEqual(user.role, "ADMIN")
        self.assertEqual(user.email, "root@x.com")
        self.assertTrue(PasswordEncoder().matches("s3cret", user.password_hash))

    def test_role_defaults_to_user(self) -> None:
        self.assertEqual(create_user.main(["bob", "bob@x.com", "s3cret"]), 0)
        self.assertEqual(self._find("bob").role, "USER")

    def test_duplicate_username(self) -> None:
        create_user.main(["bob", "bob@x.com", "s3cret"])
        self.assertEqual(create_user.main(["bob", "other@x.com", "s3cret"]), 1)

    def test_duplicate_email(self) -> None:
        create_user.main(["bob", "bob@x.com", "s3cret"])
        self.assertEqual(create_user.main(["bobby", "bob@x.com", "s3cret"]), 1)

    def test_invalid_email(self) -> None:
        self.assertEqual(create_user.main(["bob", "bob-at-x", "s3cret"]), 1)
        self.assertIsNone(self._find("bob"))

    def test_unknown_role_exits(self) -> None:
        with self.assertRaises(SystemExit):
            create_user.main(["bob", "bob@x.com", "s3cret", "ROOT"])


if __name__ == "__main__":
    unittest.main()
