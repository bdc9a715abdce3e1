"""Public registration/contact submissions and their admin views."""

from __future__ import annotations

import unittest

from api_support import ApiTestCase


def _registration(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "student_type": "new",
        "full_name": "Ahmad Fauzi",
        "email": "ahmad@example.com",
        "phone": "081234567890",
        "gender": "male",
        "place_of_birth": "Bandung",
        "date_of_birth": "2012-05-17",
        "address": "Jl. Merdeka No. 10",
        "origin_school": "SD Negeri 1",
        "nisn": "0123456789",
        "father_name": "Budi Santoso",
        "father_occupation": "Teacher",
        "phone_father": "081298765432",
        "date_of_birth_father": "1980-01-02",
        "mother_name": "Siti Aminah",
        "mother_occupation": "Nurse",
        "phone_mother": "081211112222",
        "date_of_birth_mother": "1983-03-04",
    }
    payload.update(overrides)
    return payload


class RegistrationApiTests(ApiTestCase):
    def test_public_submission_is_created(self) -> None:
        response = self.client.post("/registrations", json=_registration())

        self.assertEqual(response.status_code, 201, response.text)
        data = response.json()["data"]
        self.assertEqual(data["nisn"], "0123456789")
        self.assertEqual(data["date_of_birth"], "2012-05-17")
        self.assertIn("created_at", data)

    def test_duplicate_email_or_nisn_conflicts(self) -> None:
        self.client.post("/registrations", json=_registration())

        cases = {
            "email": _registration(nisn="9999999999"),
            "nisn": _registration(email="other@example.com"),
        }
        for name, payload in cases.items():
            with self.subTest(duplicate=name):
                response = self.client.post("/registrations", json=payload)

                self.assertEqual(response.status_code, 409)
                self.assertIn(name, response.json()["message"])

    def test_field_rules_are_enforced(self) -> None:
        cases = (
            {"nisn": "12345"},
            {"phone": "123"},
            {"gender": "other"},
            {"student_type": "exchange"},
            {"date_of_birth": "17-05-2012"},
            {"full_name": "Al"},
        )
        for overrides in cases:
            with self.subTest(overrides=overrides):
                response = self.client.post("/registrations", json=_registration(**overrides))

                self.assertEqual(response.status_code, 422)
                self.assertEqual(response.json()["code"], "UNPROCESSABLE_ENTITY")

    def test_malformed_or_missing_body_is_bad_request(self) -> None:
        malformed = self.client.post(
            "/registrations",
            content=b"{",
            headers={"Content-Type": "application/json"},
        )
        missing = self.client.post("/registrations")

        self.assertEqual(malformed.status_code, 400)
        self.assertEqual(malformed.json()["message"], "invalid body")
        self.assertEqual(missing.status_code, 400)

    def test_admin_views_and_deletes_registrations(self) -> None:
        created = self.client.post("/registrations", json=_registration()).json()["data"]

        listing = self.client.get("/admin/registrations", headers=self.admin_headers())
        single = self.client.get(f"/admin/registrations/{created['id']}", headers=self.admin_headers())
        deleted = self.client.delete(f"/admin/registrations/{created['id']}", headers=self.admin_headers())
        gone = self.client.get(f"/admin/registrations/{created['id']}", headers=self.admin_headers())

        self.assertEqual(listing.json()["data"]["meta"]["total"], 1)
        self.assertEqual(single.json()["data"]["email"], "ahmad@example.com")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(gone.status_code, 404)

    def test_listing_requires_a_token(self) -> None:
        self.assertEqual(self.client.get("/admin/registrations").status_code, 401)


class ContactApiTests(ApiTestCase):
    def test_public_message_is_stored_and_visible_to_admins(self) -> None:
        response = self.client.post(
            "/contacts",
            json={"email": "parent@example.com", "subject": "Fees", "message": "What are the fees?"},
        )
        self.assertEqual(response.status_code, 201, response.text)

        listing = self.client.get("/admin/contacts", headers=self.admin_headers())
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.json()["data"]["items"][0]["subject"], "Fees")

    def test_contact_field_rules(self) -> None:
        cases = (
            {"email": "nope", "subject": "Fees", "message": "Hello there"},
            {"email": "a@example.com", "subject": "Hi", "message": "Hello there"},
            {"email": "a@example.com", "subject": "Fees", "message": "x" * 2001},
        )
        for payload in cases:
            with self.subTest(payload=payload):
                self.assertEqual(self.client.post("/contacts", json=payload).status_code, 422)

    def test_admin_updates_and_deletes_contact(self) -> None:
        contact_id = self.client.post(
            "/contacts",
            json={"email": "parent@example.com", "subject": "Fees", "message": "What are the fees?"},
        ).json()["data"]["id"]

        updated = self.client.put(
            f"/admin/contacts/{contact_id}",
            headers=self.admin_headers(),
            json={"email": "parent@example.com", "subject": "School fees", "message": "Answered by phone."},
        )
        self.assertEqual(updated.status_code, 200, updated.text)
        self.assertEqual(updated.json()["data"]["subject"], "School fees")

        fetched = self.client.get(f"/admin/contacts/{contact_id}", headers=self.admin_headers())
        self.assertEqual(fetched.json()["data"]["message"], "Answered by phone.")

        deleted = self.client.delete(f"/admin/contacts/{contact_id}", headers=self.admin_headers())
        self.assertEqual(deleted.json(), {"status": "success", "message": "contact deleted"})
        self.assertEqual(self.client.get(f"/admin/contacts/{contact_id}", headers=self.admin_headers()).status_code, 404)

    def test_update_of_missing_contact(self) -> None:
        response = self.client.put(
            "/admin/contacts/77",
            headers=self.admin_headers(),
            json={"email": "parent@example.com", "subject": "Fees", "message": "Hello there"},
        )

        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
