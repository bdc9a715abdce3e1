"""Shared fixtures for API tests: an in-memory app, fake storage and token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, BinaryIO
import unittest

from fastapi.testclient import TestClient
import jwt

from app.adapters.auth import hash_password
from app.adapters.storage import (
    ObjectStorage,
    StorageError,
    StorageNotConfiguredError,
)
from app.core.config import Settings
from app.db.models import AdminRecord
from app.main import create_app
from app.repositories.admins import AdminRepository
from app.schemas.admin import Role
from app.schemas.auth import AuthPrincipal

TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
FAKE_BUCKET_URL = "https://storage.test/bucket"
DEFAULT_PASSWORD = "secret123"


@dataclass(frozen=True)
class StoredObject:
    object_name: str
    body: bytes
    content_type: str | None
    timeout: float | None


class FakeObjectStorage(ObjectStorage):
    """Records uploads in memory; can simulate an unconfigured bucket or a failing call."""

    def __init__(
        self,
        *,
        configured: bool = True,
        failure: StorageError | None = None,
        fail_on_call: int = 1,
    ) -> None:
        self.configured = configured
        self.failure = failure
        self.fail_on_call = fail_on_call
        self.calls = 0
        self.uploads: list[StoredObject] = []
        self.signed: list[tuple[str, timedelta]] = []

    def upload(
        self,
        stream: BinaryIO,
        object_name: str,
        *,
        content_type: str | None = None,
        timeout: float | None = None,
    ) -> str:
        if not self.configured:
            raise StorageNotConfiguredError("no bucket")
        self.calls += 1
        if self.failure is not None and self.calls >= self.fail_on_call:
            raise self.failure
        self.uploads.append(StoredObject(object_name, stream.read(), content_type, timeout))
        return f"{FAKE_BUCKET_URL}/{object_name}"

    def sign(self, object_name: str, ttl: timedelta) -> str:
        if not self.configured:
            raise StorageNotConfiguredError("no bucket")
        self.signed.append((object_name, ttl))
        return f"{FAKE_BUCKET_URL}/{object_name}?signature=test"


def mint_token(
    claims: dict[str, Any],
    *,
    secret: str = TEST_JWT_SECRET,
    expires_in: timedelta = timedelta(minutes=5),
) -> str:
    """Sign arbitrary claims, filling in ``iat``/``exp`` unless given."""
    now = datetime.now(UTC)
    payload = {
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Builds a fresh app per test on an in-memory SQLite database."""

    jwt_secret = TEST_JWT_SECRET

    def setUp(self) -> None:
        self.storage = FakeObjectStorage()
        self.settings = Settings(
            jwt_secret=self.jwt_secret,
            database_url="sqlite://",
            public_bucket=None,
            cors_origins="",
            log_level="WARNING",
        )
        self.app = create_app(self.settings, storage=self.storage)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        self.app.state.engine.dispose()

    def create_admin_record(
        self,
        *,
        username: str = "admin-one",
        email: str = "admin@example.com",
        password: str = DEFAULT_PASSWORD,
        role: Role = Role.ADMIN,
        is_active: bool = True,
    ) -> AdminRecord:
        session = self.app.state.session_factory()
        try:
            return AdminRepository(session).create(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=role.value,
                is_active=is_active,
            )
        finally:
            session.close()

    def token_for(self, admin: AdminRecord) -> str:
        return self.app.state.token_service.issue_token(AuthPrincipal(identity=admin.id, role=admin.role))

    def admin_headers(self) -> dict[str, str]:
        return bearer(mint_token({"admin_id": 1001, "role": Role.ADMIN.value}, secret=self.jwt_secret))

    def superadmin_headers(self) -> dict[str, str]:
        return bearer(mint_token({"admin_id": 1002, "role": Role.SUPERADMIN.value}, secret=self.jwt_secret))
