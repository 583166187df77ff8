# Overview: Pytest coverage for login and identity routes.

"""
Login tests.

Verifies:
- each role logs in only against its own accounts
- wrong secret and unknown email produce identical 400 bodies
- the issued token works on protected routes
"""

import pytest

from tests.conftest import ADMIN_PASSWORD, CASHIER_PASSWORD, auth_headers, login


class TestLogin:

    def test_cashier_login(self, client, cashier):
        resp = login(client, "cashier", "ada@x.com", CASHIER_PASSWORD)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["token"]
        assert data["expiresAt"].endswith("Z")
        assert data["identity"] == {
            "id": cashier.id,
            "role": "cashier",
            "name": "Ada",
            "email": "ada@x.com",
        }
        assert "secret" not in str(data["identity"]).lower()

    def test_admin_login(self, client, admin):
        resp = login(client, "admin", admin.email, ADMIN_PASSWORD)
        assert resp.status_code == 200
        assert resp.get_json()["identity"]["role"] == "admin"

    def test_password_alias_accepted(self, client, cashier):
        resp = client.post("/auth/login/cashier", json={"email": "ada@x.com", "password": CASHIER_PASSWORD})
        assert resp.status_code == 200

    def test_email_is_case_insensitive(self, client, cashier):
        resp = login(client, "cashier", "ADA@X.COM", CASHIER_PASSWORD)
        assert resp.status_code == 200

    def test_wrong_secret_twice_is_identical(self, client, cashier):
        first = login(client, "cashier", "ada@x.com", "wrong-one")
        second = login(client, "cashier", "ada@x.com", "wrong-two")
        assert first.status_code == 400
        assert second.status_code == 400
        assert first.get_json() == second.get_json()
        assert first.get_json()["message"] == "Invalid email or password"

    def test_unknown_email_indistinguishable_from_wrong_secret(self, client, cashier):
        wrong_secret = login(client, "cashier", "ada@x.com", "nope")
        unknown = login(client, "cashier", "nobody@x.com", "nope")
        assert wrong_secret.status_code == unknown.status_code == 400
        assert wrong_secret.get_json() == unknown.get_json()

    def test_overlong_secret_is_plain_mismatch(self, client, cashier):
        wrong_secret = login(client, "cashier", "ada@x.com", "nope")
        too_long = login(client, "cashier", "ada@x.com", CASHIER_PASSWORD + "x" * 80)
        unknown = login(client, "cashier", "nobody@x.com", "x" * 80)
        assert too_long.status_code == unknown.status_code == 400
        assert too_long.get_json() == wrong_secret.get_json() == unknown.get_json()

    def test_cashier_cannot_log_in_as_admin(self, client, cashier):
        resp = login(client, "admin", "ada@x.com", CASHIER_PASSWORD)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Invalid email or password"

    def test_unknown_role(self, client, cashier):
        resp = login(client, "manager", "ada@x.com", CASHIER_PASSWORD)
        assert resp.status_code == 404
        assert "message" in resp.get_json()

    @pytest.mark.parametrize("body", [
        {},
        {"email": "ada@x.com"},
        {"secret": CASHIER_PASSWORD},
        {"email": "", "secret": CASHIER_PASSWORD},
        {"email": "ada@x.com", "secret": "   "},
    ])
    def test_missing_fields(self, client, cashier, body):
        resp = client.post("/auth/login/cashier", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["message"]

    def test_non_json_body(self, client, cashier):
        resp = client.post("/auth/login/cashier", data="email=ada", content_type="text/plain")
        assert resp.status_code == 400


class TestMe:

    def test_me_reports_identity(self, client, cashier, cashier_headers):
        resp = client.get("/auth/me", headers=cashier_headers)
        assert resp.status_code == 200
        assert resp.get_json()["identity"] == {
            "id": cashier.id,
            "role": "cashier",
            "name": "Ada",
            "email": "ada@x.com",
        }

    def test_me_requires_token(self, client, db_session):
        resp = client.get("/auth/me")
        assert resp.status_code == 401
        assert resp.get_json()["message"]

    def test_token_survives_account_deletion_until_expiry(self, client, cashier, cashier_headers, admin_headers):
        cashier_id = cashier.id
        assert client.delete(f"/cashiers/{cashier_id}", headers=admin_headers).status_code == 200
        resp = client.get("/auth/me", headers=cashier_headers)
        assert resp.status_code == 200
        assert resp.get_json()["identity"] == {"id": cashier_id, "role": "cashier"}

    def test_garbage_token(self, client, db_session):
        resp = client.get("/auth/me", headers=auth_headers("garbage"))
        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Invalid token."
