"""Tests for password hashing and one-shot token generation."""

import unittest

from services.credentials import (
    BCRYPT_MAX_BYTES,
    BCRYPT_ROUNDS,
    generate_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):

    def test_hash_uses_cost_factor_10(self):
        digest = hash_password('Secret123')

        self.assertTrue(digest.startswith('$2b$10$'))
        self.assertEqual(BCRYPT_ROUNDS, 10)

    def test_hash_is_salted_per_call(self):
        self.assertNotEqual(hash_password('Secret123'), hash_password('Secret123'))

    def test_verify_matches(self):
        digest = hash_password('Secret123')

        self.assertTrue(verify_password('Secret123', digest))
        self.assertFalse(verify_password('secret123', digest))

    def test_verify_missing_digest_is_false(self):
        self.assertFalse(verify_password('Secret123', None))
        self.assertFalse(verify_password('Secret123', ''))

    def test_verify_malformed_digest_is_false(self):
        self.assertFalse(verify_password('Secret123', 'not-a-bcrypt-hash'))

    def test_long_password_hashes_on_first_72_bytes(self):
        password = 'Aa1' + 'x' * 80

        digest = hash_password(password)

        self.assertTrue(verify_password(password, digest))
        self.assertTrue(verify_password(password[:BCRYPT_MAX_BYTES], digest))
        self.assertFalse(verify_password(password[:BCRYPT_MAX_BYTES - 1], digest))

    def test_multibyte_password_over_limit(self):
        password = 'Aa1' + 'é' * 60

        self.assertTrue(verify_password(password, hash_password(password)))


class TestGenerateToken(unittest.TestCase):

    def test_token_is_64_hex_chars(self):
        self.assertRegex(generate_token(), r'^[0-9a-f]{64}$')

    def test_tokens_differ(self):
        tokens = {generate_token() for _ in range(100)}
        self.assertEqual(len(tokens), 100)


if __name__ == '__main__':
    unittest.main()
