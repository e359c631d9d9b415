"""Tests for inkpost.core.config.Settings validation."""

import unittest

from pydantic import ValidationError

from inkpost.core.config import Settings


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettingsDefaults(unittest.TestCase):
    def test_auth_defaults(self) -> None:
        settings = _settings(JWT_SECRET="s")
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(settings.AUTH_HEADER_NAME, "x-auth-token")
        self.assertEqual(settings.BCRYPT_ROUNDS, 10)
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), "s")

    def test_blank_secret_is_missing(self) -> None:
        self.assertIsNone(_settings(JWT_SECRET="   ").JWT_SECRET)


class TestSettingsValidation(unittest.TestCase):
    def test_prod_requires_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=None)
        self.assertEqual(_settings(APP_ENV="prod", JWT_SECRET="s").APP_ENV, "prod")

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mongodb://localhost/blog")
        self.assertEqual(_settings(DATABASE_URL=" sqlite:// ").DATABASE_URL, "sqlite://")

    def test_bcrypt_rounds_bounds(self) -> None:
        for rounds in (3, 17):
            with self.subTest(rounds=rounds):
                with self.assertRaises(ValidationError):
                    _settings(BCRYPT_ROUNDS=rounds)

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_api_prefix(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")


if __name__ == "__main__":
    unittest.main()
