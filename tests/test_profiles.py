"""Tests for authentication, profile provisioning and the profile API."""

import uuid

import pytest
from jose import jwt
from sqlmodel import select

from airmates.core.auth import default_name_from_email
from airmates.database import _engine_options
from airmates.models.profile import NAME_MAX_LENGTH, Profile

URL = "/api/v1/profiles/me"


class TestAuth:
    def test_first_request_provisions_profile(self, client, session, auth_headers):
        user_id = uuid.uuid4()

        response = client.get(URL, headers=auth_headers(user_id, "new.user@example.com"))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(user_id)
        assert body["name"] == "new.user"
        assert session.get(Profile, user_id) is not None

    def test_missing_token(self, client):
        response = client.get(URL)
        assert response.status_code == 401
        assert response.json()["detail"] == "You must be logged in"

    def test_wrong_signature(self, client):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "email": "x@example.com"},
            "not-the-secret",
            algorithm="HS256",
        )
        response = client.get(URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_sub_must_be_uuid(self, client, auth_headers):
        response = client.get(URL, headers=auth_headers("not-a-uuid", "x@example.com"))
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid sub in token"

    def test_email_owned_by_another_profile_is_conflict(self, client, session, make_profile, auth_headers):
        existing = make_profile("taken@example.com")

        response = client.get(URL, headers=auth_headers(uuid.uuid4(), "taken@example.com"))

        assert response.status_code == 409
        assert response.json()["detail"] == "An account with this email already exists"
        assert [p.id for p in session.exec(select(Profile)).all()] == [existing.id]

    def test_long_local_part_is_truncated_for_default_name(self, client, session, auth_headers):
        user_id = uuid.uuid4()
        local = "a" * 64

        response = client.get(URL, headers=auth_headers(user_id, f"{local}@example.com"))

        assert response.status_code == 200
        assert response.json()["name"] == "a" * NAME_MAX_LENGTH

    @pytest.mark.parametrize(
        "email, expected",
        [("flat.mate@example.com", "flat.mate"), ("no-at-sign", "no-at-sign"), ("b" * 80 + "@x.io", "b" * 50)],
    )
    def test_default_name_from_email(self, email, expected):
        assert default_name_from_email(email) == expected


class TestUpdateProfile:
    def test_partial_update(self, client, me, my_headers):
        response = client.patch(
            URL,
            json={"upi_id": "new@upi", "full_name": "Me Myself"},
            headers=my_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["upi_id"] == "new@upi"
        assert body["full_name"] == "Me Myself"
        assert body["name"] == "Me"
        assert body["mobile_number"] == "+911111111111"

    def test_blank_optional_fields_are_cleared(self, client, my_headers):
        response = client.patch(URL, json={"mobile_number": "  "}, headers=my_headers)

        assert response.status_code == 200
        assert response.json()["mobile_number"] is None

    def test_email_cannot_be_changed(self, client, my_headers):
        response = client.patch(URL, json={"email": "other@example.com"}, headers=my_headers)
        assert response.status_code == 422

    def test_blank_name_rejected(self, client, my_headers):
        response = client.patch(URL, json={"name": "   "}, headers=my_headers)
        assert response.status_code == 422


class TestEngineOptions:
    def test_postgres_url_gets_ssl_and_small_pool(self):
        url, options = _engine_options("postgresql://u:p@db.example.com:6543/postgres")

        assert url.endswith("?sslmode=require")
        assert options["pool_size"] == 1
        assert options["max_overflow"] == 0
        assert options["pool_pre_ping"] is True

    def test_existing_query_string_and_sslmode_kept(self):
        url, _ = _engine_options("postgresql://db/postgres?application_name=airmates")
        assert url == "postgresql://db/postgres?application_name=airmates&sslmode=require"

        url, _ = _engine_options("postgresql://db/postgres?sslmode=disable")
        assert url == "postgresql://db/postgres?sslmode=disable"

    def test_sqlite_url_untouched(self):
        url, options = _engine_options("sqlite:///./airmates.db")
        assert url == "sqlite:///./airmates.db"
        assert "pool_size" not in options
