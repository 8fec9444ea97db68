import unittest
from unittest import mock

import jwt
from fastapi import HTTPException

from ledgerboard.config import Settings
from ledgerboard.core import security

SECRET = "unit-test-secret-with-enough-length-0123456789"


class PasswordHashTest(unittest.TestCase):
    def test_hash_and_verify(self):
        encoded = security.hash_password("rahasia", rounds=1000)
        self.assertTrue(encoded.startswith("pbkdf2_sha256$1000$"))
        self.assertTrue(security.verify_password("rahasia", encoded))
        self.assertFalse(security.verify_password("salah", encoded))

    def test_salts_differ(self):
        first = security.hash_password("rahasia", rounds=1000)
        second = security.hash_password("rahasia", rounds=1000)
        self.assertNotEqual(first, second)

    def test_rejects_unknown_format(self):
        self.assertFalse(security.verify_password("rahasia", "rahasia"))
        self.assertFalse(security.verify_password("rahasia", ""))


class TokenTest(unittest.TestCase):
    def test_issued_token_authenticates(self):
        settings = Settings(JWT_SECRET=SECRET)
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            token = security.issue_token(7)
            auth = security.authenticate_request(None, "Bearer {}".format(token))

        self.assertEqual(auth["auth_type"], "jwt")
        self.assertEqual(auth["payload"]["sub"], "7")

    def test_missing_token_when_required(self):
        settings = Settings(JWT_SECRET=SECRET, JWT_REQUIRED=True)
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            with self.assertRaises(HTTPException) as ctx:
                security.authenticate_request(None, None)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_forged_token_rejected_when_required(self):
        settings = Settings(JWT_SECRET=SECRET, JWT_REQUIRED=True)
        forged = jwt.encode({"sub": "1"}, "another-secret-with-enough-length-0123", algorithm="HS256")
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            with self.assertRaises(HTTPException):
                security.authenticate_request(None, "Bearer {}".format(forged))

    def test_bad_token_is_not_ignored(self):
        settings = Settings(JWT_SECRET=SECRET)
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            with self.assertRaises(HTTPException) as ctx:
                security.authenticate_request(None, "Bearer garbage")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_open_service_without_credentials(self):
        with mock.patch("ledgerboard.core.security.get_settings", return_value=Settings()):
            self.assertIsNone(security.authenticate_request(None, None))

    def test_api_key(self):
        settings = Settings(API_KEYS="k1, k2")
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            self.assertEqual(security.authenticate_request("k2", None), {"auth_type": "api_key"})
            with self.assertRaises(HTTPException):
                security.authenticate_request("nope", None)


class ResolveUserIdTest(unittest.TestCase):
    def test_jwt_subject_ignores_header(self):
        auth = {"auth_type": "jwt", "payload": {"sub": "3"}}
        self.assertEqual(security.resolve_user_id(auth, "2"), 3)

    def test_jwt_without_subject_is_rejected(self):
        with self.assertRaises(HTTPException):
            security.resolve_user_id({"auth_type": "jwt", "payload": {}}, "2")

    def test_header_needs_credentials_when_auth_is_configured(self):
        settings = Settings(JWT_SECRET=SECRET)
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            with self.assertRaises(HTTPException) as ctx:
                security.resolve_user_id(None, "2")
            self.assertEqual(security.resolve_user_id({"auth_type": "api_key"}, "2"), 2)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_open_service_uses_header_then_default(self):
        settings = Settings(DEFAULT_USER_ID=5)
        with mock.patch("ledgerboard.core.security.get_settings", return_value=settings):
            self.assertEqual(security.resolve_user_id(None, "2"), 2)
            self.assertEqual(security.resolve_user_id(None, None), 5)


if __name__ == "__main__":
    unittest.main()
