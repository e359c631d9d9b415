"""Tests for inkpost.services.credentials.CredentialStore against an in-memory database."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from inkpost.core.errors import DuplicateUsernameError, InvalidCredentialsError
from inkpost.core.security import verify_password
from inkpost.models import Role, User
from inkpost.services.credentials import CredentialStore
from tests.support import make_session_factory, make_settings


class CredentialStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()
        self.db = make_session_factory(self.settings)()
        self.store = CredentialStore(self.db, self.settings)

    def tearDown(self) -> None:
        self.db.close()


class TestRegister(CredentialStoreTestCase):
    """register stores a bcrypt hash, trims the username and defaults the role."""

    def test_stores_hash_not_plaintext(self) -> None:
        user = self.store.register("alice", "secret123")
        self.assertIsNotNone(user.id)
        self.assertNotEqual(user.password_hash, "secret123")
        self.assertTrue(verify_password("secret123", user.password_hash))

    def test_role_defaults_to_editor(self) -> None:
        self.assertEqual(self.store.register("alice", "secret123").role, "editor")

    def test_explicit_role(self) -> None:
        self.assertEqual(self.store.register("root", "secret123", Role.ADMIN).role, "admin")
        self.assertEqual(self.store.register("reader", "secret123", "user").role, "user")

    def test_unknown_role_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.register("alice", "secret123", "superuser")

    def test_username_is_trimmed(self) -> None:
        self.assertEqual(self.store.register("  alice  ", "secret123").username, "alice")

    def test_blank_username_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.register("   ", "secret123")

    def test_password_over_72_bytes_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.register("bob", "a" * 72 + "TAIL-one")
        self.assertIsNone(self.db.query(User).filter(User.username == "bob").first())

    def test_72_byte_password_only_matches_itself(self) -> None:
        self.store.register("bob", "a" * 72)
        with self.assertRaises(InvalidCredentialsError):
            self.store.verify_credentials("bob", "a" * 72 + "totally-different")

    def test_each_user_gets_own_salt(self) -> None:
        a = self.store.register("alice", "secret123")
        b = self.store.register("bob", "secret123")
        self.assertNotEqual(a.password_hash, b.password_hash)


class TestDuplicateUsername(CredentialStoreTestCase):
    """The second registration of a username fails; the first record is unchanged."""

    def test_second_registration_fails(self) -> None:
        first = self.store.register("alice", "secret123")
        first_id, first_hash = first.id, first.password_hash
        with self.assertRaises(DuplicateUsernameError):
            self.store.register("alice", "another-password", "admin")

        self.assertEqual(self.db.query(User).filter(User.username == "alice").count(), 1)
        stored = self.db.query(User).filter(User.username == "alice").one()
        self.assertEqual(stored.id, first_id)
        self.assertEqual(stored.password_hash, first_hash)
        self.assertEqual(stored.role, "editor")

    def test_trimmed_duplicate_fails(self) -> None:
        self.store.register("alice", "secret123")
        with self.assertRaises(DuplicateUsernameError):
            self.store.register(" alice ", "secret123")

    def test_store_usable_after_duplicate(self) -> None:
        self.store.register("alice", "secret123")
        with self.assertRaises(DuplicateUsernameError):
            self.store.register("alice", "secret123")
        self.assertEqual(self.store.register("bob", "secret123").username, "bob")

    def test_integrity_error_translated_and_rolled_back(self) -> None:
        db = MagicMock()
        db.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        store = CredentialStore(db, self.settings)
        with self.assertRaises(DuplicateUsernameError):
            store.register("alice", "secret123")
        db.rollback.assert_called_once()
        db.query.assert_not_called()


class TestVerifyCredentials(CredentialStoreTestCase):
    """Unknown user and wrong password are indistinguishable."""

    def setUp(self) -> None:
        super().setUp()
        self.alice = self.store.register("alice", "secret123")

    def test_correct_password(self) -> None:
        user = self.store.verify_credentials("alice", "secret123")
        self.assertEqual(user.id, self.alice.id)

    def test_username_is_trimmed_on_lookup(self) -> None:
        self.assertEqual(self.store.verify_credentials(" alice ", "secret123").id, self.alice.id)

    def test_wrong_password_and_unknown_user_same_error(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong_password:
            self.store.verify_credentials("alice", "wrong")
        with self.assertRaises(InvalidCredentialsError) as unknown_user:
            self.store.verify_credentials("mallory", "secret123")
        self.assertEqual(wrong_password.exception.message, "invalid credentials")
        self.assertEqual(unknown_user.exception.message, wrong_password.exception.message)

    def test_other_plaintexts_fail(self) -> None:
        for candidate in ("", "secret12", "secret1234", "SECRET123", " secret123"):
            with self.subTest(candidate=candidate):
                with self.assertRaises(InvalidCredentialsError):
                    self.store.verify_credentials("alice", candidate)

    def test_no_writes(self) -> None:
        before = self.alice.password_hash
        self.store.verify_credentials("alice", "secret123")
        self.assertFalse(self.db.dirty)
        self.assertFalse(self.db.new)
        self.db.refresh(self.alice)
        self.assertEqual(self.alice.password_hash, before)


class TestProfileEdits(CredentialStoreTestCase):
    """The hash is recomputed only when a new password is supplied."""

    def setUp(self) -> None:
        super().setUp()
        self.alice = self.store.register("alice", "secret123")

    def test_role_change_keeps_hash(self) -> None:
        before = self.alice.password_hash
        user = self.store.set_role(self.alice, Role.ADMIN)
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.password_hash, before)
        self.assertTrue(verify_password("secret123", user.password_hash))

    def test_password_change_rehashes(self) -> None:
        before = self.alice.password_hash
        user = self.store.change_password(self.alice, "new-secret")
        self.assertNotEqual(user.password_hash, before)
        self.assertEqual(self.store.verify_credentials("alice", "new-secret").id, user.id)
        with self.assertRaises(InvalidCredentialsError):
            self.store.verify_credentials("alice", "secret123")

    def test_password_change_over_72_bytes_rejected(self) -> None:
        before = self.alice.password_hash
        with self.assertRaises(ValueError):
            self.store.change_password(self.alice, "b" * 73)
        self.assertEqual(self.alice.password_hash, before)

    def test_get_user(self) -> None:
        self.assertEqual(self.store.get_user(self.alice.id).username, "alice")
        self.assertIsNone(self.store.get_user(9999))


if __name__ == "__main__":
    unittest.main()
