"""Tests for POST /api/user/{register,login,logout}."""
import pytest


async def _register(client, user_id="alice", password="pw1"):
    return await client.post(
        "/api/user/register", json={"userId": user_id, "password": password}
    )


async def _login(client, user_id="alice", password="pw1"):
    return await client.post(
        "/api/user/login", json={"userId": user_id, "password": password}
    )


async def _logout(client, user_id="alice"):
    return await client.post("/api/user/logout", json={"userId": user_id})


class TestRegisterEndpoint:

    async def test_register_success(self, client, sent_notifications):
        response = await _register(client)
        assert response.status_code == 201
        assert response.json() == {
            "status": 201,
            "message": "User registered successfully",
            "data": {"userId": "alice", "isLoggedIn": False},
            "error": None,
        }
        assert sent_notifications == ["alice"]

    async def test_register_trims_identifier(self, client):
        response = await _register(client, user_id="  alice  ")
        assert response.json()["data"]["userId"] == "alice"
        assert (await _login(client, user_id="alice")).status_code == 200

    async def test_register_missing_password(self, client):
        response = await client.post("/api/user/register", json={"userId": "alice"})
        assert response.status_code == 400
        data = response.json()
        assert data["status"] == 400
        assert data["message"] == "Please fill out all the fields"
        assert data["error"] == "Bad Request"

    async def test_register_empty_identifier(self, client):
        response = await _register(client, user_id="")
        assert response.status_code == 400

    async def test_register_duplicate(self, client, sent_notifications):
        await _register(client)
        response = await _register(client, password="different")
        assert response.status_code == 409
        data = response.json()
        assert data["message"] == "User already exists. Please login"
        assert data["error"] == "Conflict"
        assert sent_notifications == ["alice"]

    async def test_register_wrong_type_is_validation_error(self, client):
        response = await client.post(
            "/api/user/register", json={"userId": "alice", "password": 123}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill out all the fields"

    async def test_register_no_body(self, client):
        response = await client.post("/api/user/register")
        assert response.status_code == 400

    async def test_register_password_with_nul_byte(self, client, sent_notifications):
        response = await _register(client, password="a\u0000b")
        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "message": "Password contains unsupported characters",
            "data": [],
            "error": "Bad Request",
        }
        assert sent_notifications == []
        assert (await _login(client, password="a\u0000b")).status_code == 404

    @pytest.mark.parametrize("content", [b"not json", b"[1, 2]", b"\"alice\""])
    async def test_register_body_not_an_object(self, client, content):
        response = await client.post(
            "/api/user/register",
            content=content,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill out all the fields"


class TestLoginEndpoint:

    async def test_login_success(self, client):
        await _register(client)
        response = await _login(client)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Logged in successfully"
        assert data["data"] == {"userId": "alice", "isLoggedIn": True}
        assert data["error"] is None

    async def test_login_missing_fields(self, client):
        response = await client.post("/api/user/login", json={"userId": "alice"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill out all the fields"

    async def test_login_user_not_found(self, client):
        response = await _login(client, user_id="nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    async def test_login_wrong_password(self, client):
        await _register(client)
        response = await _login(client, password="wrong")
        assert response.status_code == 403
        data = response.json()
        assert data["message"] == "Unauthorized"
        assert "password" not in data["message"].lower()

    async def test_second_login_rejected(self, client):
        await _register(client)
        await _login(client)
        response = await _login(client)
        assert response.status_code == 400
        assert response.json()["message"] == "ID already logged in from another device"

    async def test_active_session_reported_before_bad_password(self, client):
        await _register(client)
        await _login(client)
        response = await _login(client, password="wrong")
        assert response.status_code == 400

    async def test_failed_login_leaves_user_logged_out(self, client):
        await _register(client)
        await _login(client, password="wrong")
        response = await _login(client)
        assert response.status_code == 200


class TestLogoutEndpoint:

    async def test_logout_success(self, client):
        await _register(client)
        await _login(client)
        response = await _logout(client)
        assert response.status_code == 200
        assert response.json() == {
            "status": 200,
            "message": "Logged out successfully",
            "data": {"userId": "alice", "isLoggedIn": False},
            "error": None,
        }

    async def test_logout_is_idempotent(self, client):
        await _register(client)
        first = await _logout(client)
        second = await _logout(client)
        assert first.status_code == second.status_code == 200
        assert second.json()["data"]["isLoggedIn"] is False

    async def test_logout_missing_identifier(self, client):
        response = await client.post("/api/user/logout", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Please provide a userId"

    async def test_logout_unknown_user(self, client):
        response = await _logout(client, user_id="nobody")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    async def test_login_allowed_after_logout(self, client):
        await _register(client)
        await _login(client)
        await _logout(client)
        response = await _login(client)
        assert response.status_code == 200


class TestEndToEnd:

    async def test_alice_session_lifecycle(self, client):
        response = await _register(client, "alice", "pw1")
        assert response.status_code == 201

        response = await _login(client, "alice", "pw1")
        assert response.status_code == 200
        assert response.json()["data"]["isLoggedIn"] is True

        response = await _login(client, "alice", "pw1")
        assert response.status_code == 400

        response = await _logout(client, "alice")
        assert response.status_code == 200
        assert response.json()["data"]["isLoggedIn"] is False

        response = await _login(client, "alice", "wrong")
        assert response.status_code == 403

    @pytest.mark.parametrize("user_id", ["bob", "carol"])
    async def test_users_are_independent(self, client, user_id):
        await _register(client, "alice")
        await _register(client, user_id)
        await _login(client, "alice")
        response = await _login(client, user_id)
        assert response.status_code == 200


class TestFormBodies:
    """HTML forms post urlencoded bodies with the same field names."""

    async def test_register_with_form(self, client):
        response = await client.post(
            "/api/user/register", data={"userId": "bob", "password": "pw1"}
        )
        assert response.status_code == 201
        assert response.json()["data"] == {"userId": "bob", "isLoggedIn": False}

    async def test_form_session_lifecycle(self, client):
        form = {"userId": "bob", "password": "pw1"}
        await client.post("/api/user/register", data=form)

        response = await client.post("/api/user/login", data=form)
        assert response.status_code == 200
        assert response.json()["data"]["isLoggedIn"] is True

        response = await client.post("/api/user/logout", data={"userId": "bob"})
        assert response.status_code == 200
        assert response.json()["data"]["isLoggedIn"] is False

    async def test_form_registration_usable_from_json(self, client):
        await client.post("/api/user/register", data={"userId": "bob", "password": "pw1"})
        assert (await _login(client, "bob", "pw1")).status_code == 200

    async def test_form_missing_password(self, client):
        response = await client.post("/api/user/register", data={"userId": "bob"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill out all the fields"
