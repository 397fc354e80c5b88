"""Unit tests for app.core.config.Settings validators."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides: object) -> Settings:
    """Build Settings without reading a .env file."""
    return Settings(_env_file=None, **overrides)


class TestDatabaseUrl(unittest.TestCase):
    def test_postgres_and_sqlite_accepted(self) -> None:
        for url in ("postgresql://u:p@localhost/db", "postgresql+psycopg2://u@h/db", "sqlite://"):
            with self.subTest(url=url):
                self.assertEqual(_settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_other_schemes_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@localhost/db")

    def test_blank_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="   ")


class TestJwtSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings(JWT_SECRET="x" * 40)
        self.assertEqual(s.JWT_ISSUER, "league-auth-service")
        self.assertEqual(s.JWT_ALGORITHM, "HS256")

    def test_algorithm_normalized(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM=" hs512 ").JWT_ALGORITHM, "HS512")

    def test_asymmetric_algorithm_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="  ")

    def test_short_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET="too-short")

    def test_short_secret_allowed_in_dev(self) -> None:
        s = _settings(APP_ENV="dev", JWT_SECRET="too-short")
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "too-short")

    def test_expire_minutes_bounds(self) -> None:
        for value in (0, 10081):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    _settings(JWT_EXPIRE_MINUTES=value)
        self.assertEqual(_settings(JWT_EXPIRE_MINUTES=15).JWT_EXPIRE_MINUTES, 15)

    def test_bcrypt_rounds_bounds(self) -> None:
        for value in (3, 32):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    _settings(BCRYPT_ROUNDS=value)


class TestSettingsImmutable(unittest.TestCase):
    def test_assignment_rejected(self) -> None:
        s = _settings()
        with self.assertRaises(ValidationError):
            s.JWT_EXPIRE_MINUTES = 5


if __name__ == "__main__":
    unittest.main()
