"""Multipart article writes: keyed uploads, URL injection and storage failures."""

from __future__ import annotations

import json
import unittest

from sqlalchemy import func, select

from api_support import FAKE_BUCKET_URL, ApiTestCase, FakeObjectStorage
from app.adapters.storage import StorageTimeoutError, StorageUploadError
from app.db.models import ArticleRecord

_CONTENT = {
    "blocks": [
        {"type": "paragraph", "data": {"text": "Welcome"}},
        {"type": "image", "data": {"caption": "Gate", "file": {"fileKey": "img1", "url": "blob:local"}}},
        {"type": "embed", "upload_key": "vid1"},
    ]
}


def _form(**overrides: str) -> dict[str, str]:
    fields = {
        "title": "Open House",
        "author": "Admissions",
        "status": "published",
        "content": json.dumps(_CONTENT),
        "photo_header": "https://example.com/header.jpg",
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


class ArticleUploadTests(ApiTestCase):
    def _article_count(self) -> int:
        session = self.app.state.session_factory()
        try:
            return session.scalar(select(func.count()).select_from(ArticleRecord))
        finally:
            session.close()

    def _use_storage(self, storage: FakeObjectStorage) -> None:
        self.storage = storage
        self.app.state.storage = storage

    def test_keyed_files_are_uploaded_and_injected_into_content(self) -> None:
        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[
                ("content_files[img1]", ("gate.png", b"png-bytes", "image/png")),
                ("content_file_vid1", ("tour.mp4", b"mp4-bytes", "video/mp4")),
            ],
        )

        self.assertEqual(response.status_code, 201, response.text)
        names = [stored.object_name for stored in self.storage.uploads]
        self.assertEqual(len(names), 2)
        self.assertRegex(names[0], r"^articles/content/img1_\d+_gate\.png$")
        self.assertRegex(names[1], r"^articles/content/vid1_\d+_tour\.mp4$")
        self.assertEqual(self.storage.uploads[0].body, b"png-bytes")
        self.assertEqual(self.storage.uploads[0].content_type, "image/png")
        self.assertEqual(self.storage.uploads[0].timeout, self.settings.storage_upload_timeout_seconds)

        blocks = response.json()["data"]["content"]["blocks"]
        self.assertEqual(blocks[0], _CONTENT["blocks"][0])
        self.assertEqual(blocks[1]["data"]["file"], {"fileKey": "img1", "url": f"{FAKE_BUCKET_URL}/{names[0]}"})
        self.assertEqual(blocks[2], {"type": "embed", "url": f"{FAKE_BUCKET_URL}/{names[1]}"})

    def test_first_file_wins_for_a_repeated_key(self) -> None:
        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[
                ("content_files[img1]", ("first.png", b"first", "image/png")),
                ("content_files[img1]", ("second.png", b"second", "image/png")),
            ],
        )

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual([stored.body for stored in self.storage.uploads], [b"first"])

    def test_unrelated_and_empty_key_file_fields_are_ignored(self) -> None:
        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[
                ("attachment", ("notes.txt", b"notes", "text/plain")),
                ("content_files[]", ("blank.png", b"blank", "image/png")),
            ],
        )

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(self.storage.uploads, [])
        self.assertEqual(response.json()["data"]["content"], _CONTENT)

    def test_header_file_overrides_photo_header(self) -> None:
        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[("photo_header_file", ("../../hero.jpg", b"hero", "image/jpeg"))],
        )

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(len(self.storage.uploads), 1)
        object_name = self.storage.uploads[0].object_name
        self.assertRegex(object_name, r"^articles/header_\d+_hero\.jpg$")
        self.assertEqual(response.json()["data"]["photo_header"], f"{FAKE_BUCKET_URL}/{object_name}")

    def test_header_file_alone_satisfies_header_requirement(self) -> None:
        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(photo_header=None),
            files=[("photo_header_file", ("hero.jpg", b"hero", "image/jpeg"))],
        )

        self.assertEqual(response.status_code, 201, response.text)

    def test_unconfigured_storage_is_a_client_error_for_header_and_keyed_files(self) -> None:
        self._use_storage(FakeObjectStorage(configured=False))
        for files in (
            [("content_files[img1]", ("a.png", b"a", "image/png"))],
            [("photo_header_file", ("h.jpg", b"h", "image/jpeg"))],
        ):
            with self.subTest(field=files[0][0]):
                response = self.client.post("/admin/articles", headers=self.admin_headers(), data=_form(), files=files)

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["code"], "STORAGE_NOT_CONFIGURED")
        self.assertEqual(self._article_count(), 0)

    def test_writes_without_files_succeed_without_storage(self) -> None:
        self._use_storage(FakeObjectStorage(configured=False))

        response = self.client.post("/admin/articles", headers=self.admin_headers(), data=_form())

        self.assertEqual(response.status_code, 201, response.text)

    def test_upload_timeout_is_retriable(self) -> None:
        self._use_storage(FakeObjectStorage(failure=StorageTimeoutError("slow")))

        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[("content_files[img1]", ("a.png", b"a", "image/png"))],
        )

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["code"], "UPLOAD_TIMEOUT")
        self.assertEqual(self._article_count(), 0)

    def test_failed_upload_aborts_request_and_keeps_earlier_objects(self) -> None:
        self._use_storage(FakeObjectStorage(failure=StorageUploadError("boom"), fail_on_call=2))

        response = self.client.post(
            "/admin/articles",
            headers=self.admin_headers(),
            data=_form(),
            files=[
                ("content_files[img1]", ("a.png", b"a", "image/png")),
                ("content_files[img2]", ("b.png", b"b", "image/png")),
            ],
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"status": "error", "code": "UPLOAD_FAILED", "message": "failed to upload file"})
        self.assertEqual(len(self.storage.uploads), 1)
        self.assertEqual(self._article_count(), 0)

    def test_validation_runs_before_any_upload(self) -> None:
        cases = {
            "missing_title": (_form(title=""), 400, "BAD_REQUEST"),
            "invalid_json": (_form(content="{not json"), 400, "BAD_REQUEST"),
            "missing_header": (_form(photo_header=""), 400, "BAD_REQUEST"),
            "short_title": (_form(title="ab"), 422, "UNPROCESSABLE_ENTITY"),
            "bad_status": (_form(status="archived"), 422, "UNPROCESSABLE_ENTITY"),
        }
        for name, (data, status_code, code) in cases.items():
            with self.subTest(case=name):
                response = self.client.post(
                    "/admin/articles",
                    headers=self.admin_headers(),
                    data=data,
                    files=[("content_files[img1]", ("a.png", b"a", "image/png"))],
                )

                self.assertEqual(response.status_code, status_code, response.text)
                self.assertEqual(response.json()["code"], code)
        self.assertEqual(self.storage.uploads, [])
        self.assertEqual(self._article_count(), 0)

    def test_update_uploads_new_files_and_replaces_content(self) -> None:
        created = self.client.post("/admin/articles", headers=self.admin_headers(), data=_form())
        article_id = created.json()["data"]["id"]

        response = self.client.put(
            f"/admin/articles/{article_id}",
            headers=self.admin_headers(),
            data=_form(title="Open House 2026"),
            files=[("content_files[img1]", ("new.png", b"new", "image/png"))],
        )

        self.assertEqual(response.status_code, 200, response.text)
        data = response.json()["data"]
        self.assertEqual(data["title"], "Open House 2026")
        self.assertTrue(data["content"]["blocks"][1]["data"]["file"]["url"].startswith(f"{FAKE_BUCKET_URL}/articles/content/img1_"))

    def test_update_of_missing_article_uploads_nothing(self) -> None:
        response = self.client.put(
            "/admin/articles/999",
            headers=self.admin_headers(),
            data=_form(),
            files=[("content_files[img1]", ("a.png", b"a", "image/png"))],
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.storage.uploads, [])

    def test_writes_require_admin_token_before_form_is_read(self) -> None:
        response = self.client.post(
            "/admin/articles",
            data=_form(),
            files=[("content_files[img1]", ("a.png", b"a", "image/png"))],
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.storage.uploads, [])


if __name__ == "__main__":
    unittest.main()
