"""Admin login and token issuance."""

from __future__ import annotations

from datetime import timedelta
import unittest

from api_support import DEFAULT_PASSWORD, ApiTestCase, bearer
from app.adapters.auth import JwtTokenService
from app.errors import ApiError
from app.repositories.admins import AdminRepository
from app.schemas.admin import Role
from app.services.auth import AuthService


class LoginApiTests(ApiTestCase):
    def test_login_returns_token_carrying_identity_and_role(self) -> None:
        admin = self.create_admin_record(email="root@example.com", role=Role.SUPERADMIN)

        response = self.client.post("/auth/login", json={"email": "root@example.com", "password": DEFAULT_PASSWORD})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["data"]["admin"]["id"], admin.id)
        self.assertEqual(body["data"]["admin"]["role"], "superadmin")
        self.assertNotIn("password", body["data"]["admin"])
        self.assertNotIn("password_hash", body["data"]["admin"])

        principal = self.app.state.token_service.verify_token(body["data"]["token"])
        self.assertEqual(principal.identity, admin.id)
        self.assertEqual(principal.role, "superadmin")

    def test_issued_token_opens_the_admin_profile(self) -> None:
        admin = self.create_admin_record()
        login = self.client.post("/auth/login", json={"email": admin.email, "password": DEFAULT_PASSWORD})

        profile = self.client.get("/admin/profile", headers=bearer(login.json()["data"]["token"]))

        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["data"]["username"], admin.username)

    def test_wrong_password_and_unknown_email_share_one_error(self) -> None:
        self.create_admin_record(email="known@example.com")
        for payload in (
            {"email": "known@example.com", "password": "wrong-password"},
            {"email": "unknown@example.com", "password": DEFAULT_PASSWORD},
        ):
            with self.subTest(payload=payload):
                response = self.client.post("/auth/login", json=payload)

                self.assertEqual(response.status_code, 401)
                self.assertEqual(
                    response.json(),
                    {"status": "error", "code": "INVALID_CREDENTIALS", "message": "invalid credentials"},
                )

    def test_inactive_account_is_rejected_with_correct_password(self) -> None:
        self.create_admin_record(email="sleepy@example.com", is_active=False)

        response = self.client.post("/auth/login", json={"email": "sleepy@example.com", "password": DEFAULT_PASSWORD})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "ACCOUNT_INACTIVE")

    def test_inactive_account_with_wrong_password_reports_invalid_credentials(self) -> None:
        self.create_admin_record(email="sleepy@example.com", is_active=False)

        response = self.client.post("/auth/login", json={"email": "sleepy@example.com", "password": "nope-nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "INVALID_CREDENTIALS")

    def test_malformed_body_is_bad_request(self) -> None:
        response = self.client.post(
            "/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "invalid body")

    def test_invalid_email_is_unprocessable(self) -> None:
        response = self.client.post("/auth/login", json={"email": "not-an-email", "password": DEFAULT_PASSWORD})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["code"], "UNPROCESSABLE_ENTITY")
        self.assertIn("email", response.json()["message"])


class AuthServiceTests(ApiTestCase):
    def test_unconfigured_signer_fails_login_without_leaking(self) -> None:
        admin = self.create_admin_record()
        with self.app.state.session_factory() as session:
            service = AuthService(AdminRepository(session), JwtTokenService("", expires_in=timedelta(minutes=1)))

            with self.assertRaises(ApiError) as context:
                service.authenticate(email=admin.email, password=DEFAULT_PASSWORD)
        self.assertEqual(context.exception.status_code, 500)
        self.assertEqual(context.exception.payload.message, "failed to issue token")


if __name__ == "__main__":
    unittest.main()
