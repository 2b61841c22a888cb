"""Tests for the /auth routes using in-memory adapters."""

import os
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api.dependencies import get_token_issuer, get_user_repo
from api.main import app
from adapter.fake.token_issuer import FakeTokenIssuer
from adapter.fake.user_repository import FakeUserRepository

SIGNUP = {"email": "ann@example.com", "password": "Secret123", "full_name": "Ann"}


class AuthRoutesTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.issuer = FakeTokenIssuer()
        app.dependency_overrides[get_user_repo] = lambda: self.repo
        app.dependency_overrides[get_token_issuer] = lambda: self.issuer
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _stored_user(self, email="ann@example.com"):
        return next(u for u in self.repo.store.values() if u.email == email)


class TestSignupAndLogin(AuthRoutesTestCase):

    def test_signup_returns_201_without_secrets(self):
        response = self.client.post("/auth/signup", json=SIGNUP)

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(set(body), {"id", "email", "full_name"})
        self.assertEqual(body["email"], "ann@example.com")

    def test_duplicate_signup_returns_409(self):
        self.client.post("/auth/signup", json=SIGNUP)

        response = self.client.post("/auth/signup", json=SIGNUP)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["detail"], "Email already in use")

    def test_weak_password_returns_400(self):
        response = self.client.post("/auth/signup", json={**SIGNUP, "password": "weak"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.repo.store, {})

    def test_invalid_email_returns_422(self):
        response = self.client.post("/auth/signup", json={**SIGNUP, "email": "not-an-email"})

        self.assertEqual(response.status_code, 422)

    def test_email_case_is_kept(self):
        first = self.client.post("/auth/signup", json={**SIGNUP, "email": "a@X.com"})
        second = self.client.post("/auth/signup", json={**SIGNUP, "email": "a@x.com"})

        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()["email"], "a@X.com")
        self.assertEqual(second.status_code, 201)
        self.assertEqual(len(self.repo.store), 2)

    def test_named_address_returns_422(self):
        response = self.client.post("/auth/signup", json={**SIGNUP, "email": "Ann <ann@example.com>"})

        self.assertEqual(response.status_code, 422)

    def test_long_password_signup_and_login(self):
        password = "Aa1" + "x" * 80

        signup = self.client.post("/auth/signup", json={**SIGNUP, "password": password})
        login = self.client.post("/auth/login", json={"email": SIGNUP["email"], "password": password})

        self.assertEqual(signup.status_code, 201)
        self.assertEqual(login.status_code, 200)

    def test_login_success_and_failure(self):
        self.client.post("/auth/signup", json=SIGNUP)

        ok = self.client.post("/auth/login", json={"email": SIGNUP["email"], "password": "Secret123"})
        bad = self.client.post("/auth/login", json={"email": SIGNUP["email"], "password": "Wrong1234"})

        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["token_type"], "bearer")
        self.assertIn(ok.json()["access_token"], self.issuer.issued)
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.json()["detail"], "Invalid credentials")


class TestEmailConfirmation(AuthRoutesTestCase):

    def test_confirm_once(self):
        self.client.post("/auth/signup", json=SIGNUP)
        token = self._stored_user().email_confirm_token

        first = self.client.post("/auth/confirm-email", json={"token": token})
        second = self.client.post("/auth/confirm-email", json={"token": token})

        self.assertEqual(first.status_code, 200)
        self.assertTrue(first.json()["is_email_confirmed"])
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json()["detail"], "Invalid token")


class TestPasswordReset(AuthRoutesTestCase):

    def test_forgot_password_same_response_for_unknown_email(self):
        self.client.post("/auth/signup", json=SIGNUP)

        known = self.client.post("/auth/forgot-password", json={"email": SIGNUP["email"]})
        unknown = self.client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

        self.assertEqual(known.status_code, 202)
        self.assertEqual(unknown.status_code, 202)
        self.assertEqual(known.json(), unknown.json())

    def test_reset_flow(self):
        self.client.post("/auth/signup", json=SIGNUP)
        self.client.post("/auth/forgot-password", json={"email": SIGNUP["email"]})
        token = self._stored_user().reset_password_token

        reset = self.client.post(
            "/auth/reset-password", json={"token": token, "new_password": "NewSecret456"}
        )
        replay = self.client.post(
            "/auth/reset-password", json={"token": token, "new_password": "NewSecret456"}
        )
        login = self.client.post(
            "/auth/login", json={"email": SIGNUP["email"], "password": "NewSecret456"}
        )

        self.assertEqual(reset.status_code, 200)
        self.assertEqual(reset.json()["email"], SIGNUP["email"])
        self.assertEqual(replay.status_code, 400)
        self.assertEqual(replay.json()["detail"], "Invalid or expired token")
        self.assertEqual(login.status_code, 200)


class TestGoogleAndMe(AuthRoutesTestCase):

    def test_google_login_and_signup_share_account(self):
        payload = {"email": "bob@example.com", "google_id": "g-1"}

        signup = self.client.post("/auth/google/signup", json=payload)
        login = self.client.post("/auth/google/login", json=payload)

        self.assertEqual(signup.status_code, 200)
        self.assertEqual(login.status_code, 200)
        self.assertEqual(len(self.repo.store), 1)

    def test_me_requires_token(self):
        response = self.client.get("/auth/me")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers["www-authenticate"], "Bearer")

    def test_me_rejects_unknown_token(self):
        response = self.client.get("/auth/me", headers={"Authorization": "Bearer nope"})

        self.assertEqual(response.status_code, 401)

    def test_me_returns_profile(self):
        login = self.client.post(
            "/auth/google/login", json={"email": "bob@example.com", "google_id": "g-1", "full_name": "Bob"}
        )
        token = login.json()["access_token"]

        response = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["full_name"], "Bob")
        self.assertEqual(body["provider"], "google")
        self.assertNotIn("password_hash", body)


class TestWithoutJwtSecret(unittest.TestCase):
    """Routes that issue no token keep working when JWT_SECRET_KEY is unset."""

    def setUp(self):
        self.repo = FakeUserRepository()
        app.dependency_overrides[get_user_repo] = lambda: self.repo
        env = patch.dict('os.environ')
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop("JWT_SECRET_KEY", None)
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_signup_confirm_and_reset_succeed(self):
        signup = self.client.post("/auth/signup", json={"email": "a@example.com", "password": "Secret123"})
        user = next(iter(self.repo.store.values()))
        confirm = self.client.post("/auth/confirm-email", json={"token": user.email_confirm_token})
        forgot = self.client.post("/auth/forgot-password", json={"email": "a@example.com"})
        token = next(iter(self.repo.store.values())).reset_password_token
        reset = self.client.post("/auth/reset-password", json={"token": token, "new_password": "NewSecret456"})

        self.assertEqual(signup.status_code, 201)
        self.assertEqual(confirm.status_code, 200)
        self.assertEqual(forgot.status_code, 202)
        self.assertEqual(reset.status_code, 200)

    def test_bearer_token_is_rejected(self):
        response = self.client.get("/auth/me", headers={"Authorization": "Bearer anything"})

        self.assertEqual(response.status_code, 401)


if __name__ == '__main__':
    unittest.main()
