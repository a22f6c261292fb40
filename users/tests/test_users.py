from unittest import mock

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from users import views

pytestmark = pytest.mark.django_db


def test_register_normalises_email(api_client):
    response = api_client.post(
        "/api/v1/user/register/",
        {"email": "New.Reader@BookNest.test", "name": "New Reader", "password": "long-enough-pw"},
        format="json",
    )

    assert response.status_code == 201
    assert response.data["email"] == "new.reader@booknest.test"
    assert response.data["role"] == "User"
    assert "password" not in response.data


def test_registration_reaches_the_log(api_client):
    with mock.patch.object(views.logger, "handle") as handle:
        api_client.post(
            "/api/v1/user/register/",
            {"email": "logged@booknest.test", "name": "Logged", "password": "long-enough-pw"},
            format="json",
        )

    record = handle.call_args.args[0]
    assert record.levelname == "INFO"
    assert "logged@booknest.test" in record.getMessage()


def test_bearer_header_authenticates(api_client, reader):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(reader)}")

    response = api_client.get("/api/v1/user/me/")

    assert response.status_code == 200
    assert response.data["email"] == reader.email


def test_token_cookie_authenticates(api_client, reader):
    api_client.cookies["token"] = str(AccessToken.for_user(reader))

    response = api_client.get("/api/v1/user/me/")

    assert response.status_code == 200
    assert response.data["kyc_status"] == "Not Submitted"


def test_bad_cookie_is_rejected(api_client):
    api_client.cookies["token"] = "not-a-jwt"

    response = api_client.get("/api/v1/user/me/")

    assert response.status_code == 401
    assert response.data["success"] is False


def test_staff_role_label(librarian):
    assert librarian.role == "Admin"


class TestStaffUserManagement:
    def test_list_all_users(self, api_client, librarian, reader):
        api_client.force_authenticate(librarian)

        response = api_client.get("/api/v1/user/all/")

        assert response.status_code == 200
        emails = {u["email"] for u in response.data["users"]}
        assert emails == {librarian.email, reader.email}

    def test_add_new_admin(self, api_client, librarian):
        api_client.force_authenticate(librarian)

        response = api_client.post(
            "/api/v1/user/add/new-admin/",
            {"email": "Second.Admin@booknest.test", "name": "Second Admin", "password": "long-enough-pw"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["user"]["role"] == "Admin"
        assert response.data["user"]["account_verified"] is True

    def test_duplicate_admin_email(self, api_client, librarian, reader):
        api_client.force_authenticate(librarian)

        response = api_client.post(
            "/api/v1/user/add/new-admin/",
            {"email": reader.email, "name": "Dup", "password": "long-enough-pw"},
            format="json",
        )

        assert response.status_code == 400

    def test_user_details(self, api_client, librarian, reader):
        api_client.force_authenticate(librarian)

        found = api_client.get(f"/api/v1/user/details/{reader.id}/")
        missing = api_client.get("/api/v1/user/details/99999/")

        assert found.data["user"]["email"] == reader.email
        assert missing.status_code == 404
        assert missing.data["message"] == "User not found."

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/v1/user/all/"),
            ("post", "/api/v1/user/add/new-admin/"),
            ("get", "/api/v1/user/details/1/"),
        ],
    )
    def test_members_are_refused(self, api_client, reader, method, path):
        api_client.force_authenticate(reader)

        assert getattr(api_client, method)(path, {}, format="json").status_code == 403
