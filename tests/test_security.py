"""Unit tests for app.core.security: bcrypt hashing and session identifiers."""

import unittest

from app.core.security import hash_password, new_session_id, verify_password
from tests.support import TEST_BCRYPT_ROUNDS


class TestPasswordHashing(unittest.TestCase):
    """Digests are salted, verifiable, and never equal to the secret."""

    def test_hash_is_salted(self) -> None:
        a = hash_password("admin123", rounds=TEST_BCRYPT_ROUNDS)
        b = hash_password("admin123", rounds=TEST_BCRYPT_ROUNDS)
        self.assertNotEqual(a, b)
        self.assertNotIn("admin123", a)

    def test_verify_correct_and_wrong_password(self) -> None:
        digest = hash_password("admin123", rounds=TEST_BCRYPT_ROUNDS)
        self.assertTrue(verify_password("admin123", digest))
        self.assertFalse(verify_password("admin124", digest))

    def test_malformed_digest_is_a_plain_mismatch(self) -> None:
        self.assertFalse(verify_password("admin123", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("admin123", ""))


class TestSessionIds(unittest.TestCase):
    def test_ids_are_unique_and_url_safe(self) -> None:
        ids = {new_session_id() for _ in range(50)}
        self.assertEqual(len(ids), 50)
        for sid in ids:
            self.assertGreaterEqual(len(sid), 43)
            self.assertRegex(sid, r"^[A-Za-z0-9_-]+$")


if __name__ == "__main__":
    unittest.main()
