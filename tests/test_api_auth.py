"""Integration tests for /api/auth and the request authentication dependency."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from questlog import __version__
from questlog.core.config import settings

from tests._support import bearer, clear_overrides, make_client, register_and_login


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()

    def tearDown(self) -> None:
        clear_overrides()


class TestRegisterEndpoint(ApiTestCase):
    def test_register_returns_201(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "pw"},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), {"msg": "New user created!"})

    def test_missing_field_is_400_with_msg(self) -> None:
        resp = self.client.post("/api/auth/register", json={"username": "alice", "password": "pw"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("email", resp.json()["msg"])

    def test_duplicate_username_is_409(self) -> None:
        body = {"username": "alice", "email": "alice@example.com", "password": "pw"}
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 201)
        resp = self.client.post("/api/auth/register", json=body)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["msg"], "User already exists!")


class TestLoginEndpoint(ApiTestCase):
    def test_login_body_and_header(self) -> None:
        self.client.post(
            "/api/auth/register",
            json={"username": "bob", "email": "bob@example.com", "password": "pw-bob"},
        )
        resp = self.client.post("/api/auth/login", json={"username": "bob", "password": "pw-bob"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["auth"])
        self.assertEqual(data["token_type"], "bearer")
        self.assertEqual(data["expires_in"], settings.ACCESS_TOKEN_EXPIRE_SECONDS)
        self.assertIn("expires_at", data)
        self.assertIn("refresh_token", data)
        self.assertEqual(resp.headers["access_token"], data["access_token"])
        self.assertEqual(data["msg"], "Logged in!")

    def test_wrong_password_and_unknown_user_same_response(self) -> None:
        register_and_login(self.client, "bob")
        wrong = self.client.post("/api/auth/login", json={"username": "bob", "password": "bad"})
        unknown = self.client.post("/api/auth/login", json={"username": "zed", "password": "bad"})
        self.assertEqual(wrong.status_code, 400)
        self.assertEqual(unknown.status_code, 400)
        self.assertEqual(wrong.json(), unknown.json())


class TestRequestAuthentication(ApiTestCase):
    def test_no_token_is_401(self) -> None:
        resp = self.client.get("/api/tasks")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"msg": "Access Denied. No token provided.", "auth": False})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_garbage_token_is_403(self) -> None:
        resp = self.client.get("/api/tasks", headers=bearer("garbage"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"msg": "Invalid Token"})

    def test_expired_token_is_403(self) -> None:
        past = datetime.now(UTC) - timedelta(days=2)
        token = jwt.encode(
            {"id": 1, "iat": past, "exp": past + timedelta(days=1)},
            settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            algorithm="HS256",
        )
        resp = self.client.get("/api/tasks", headers=bearer(token))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"msg": "Invalid Token"})

    def test_refresh_token_is_not_an_access_token(self) -> None:
        tokens = register_and_login(self.client, "frank")
        resp = self.client.get("/api/tasks", headers=bearer(tokens["refresh_token"]))
        self.assertEqual(resp.status_code, 403)

    def test_valid_token_accepted(self) -> None:
        tokens = register_and_login(self.client, "gina")
        resp = self.client.get("/api/tasks", headers=bearer(tokens["access_token"]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_legacy_auth_token_header(self) -> None:
        tokens = register_and_login(self.client, "hank")
        for value in (f"Bearer {tokens['access_token']}", tokens["access_token"]):
            with self.subTest(value=value[:12]):
                resp = self.client.get("/api/user/me", headers={"auth-token": value})
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.json()["username"], "hank")


class TestTokenAndLogoutEndpoints(ApiTestCase):
    def test_refresh_yields_same_identity(self) -> None:
        tokens = register_and_login(self.client, "ivy")
        resp = self.client.post("/api/auth/token", json={"token": tokens["refresh_token"]})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        me = self.client.get("/api/user/me", headers=bearer(data["access_token"]))
        self.assertEqual(me.json()["username"], "ivy")
        self.assertEqual(resp.headers["access_token"], data["access_token"])
        self.assertEqual(data["msg"], "Token refreshed!")

    def test_missing_refresh_token_is_401(self) -> None:
        resp = self.client.post("/api/auth/token", json={})
        self.assertEqual(resp.status_code, 401)
        self.assertFalse(resp.json()["auth"])
        self.assertEqual(self.client.post("/api/auth/token").status_code, 401)

    def test_unregistered_refresh_token_is_403(self) -> None:
        resp = self.client.post("/api/auth/token", json={"token": "never-issued"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"msg": "Invalid Refresh Token"})

    def test_logout_then_refresh_fails_and_logout_is_idempotent(self) -> None:
        tokens = register_and_login(self.client, "jack")
        for _ in range(2):
            resp = self.client.post("/api/auth/logout", json={"token": tokens["refresh_token"]})
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json(), {"msg": "Logout successful"})
        resp = self.client.post("/api/auth/token", json={"token": tokens["refresh_token"]})
        self.assertEqual(resp.status_code, 403)

    def test_logout_without_body(self) -> None:
        self.assertEqual(self.client.post("/api/auth/logout").status_code, 200)


class TestMiscRoutes(ApiTestCase):
    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Questlog API"})

    def test_unknown_route_uses_msg_body(self) -> None:
        resp = self.client.get("/api/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"msg": "Not Found"})

    def test_health_reports_database(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")
        self.assertEqual(resp.json()["version"], __version__)
        self.assertEqual(resp.json()["environment"], settings.APP_ENV)
        self.assertIn("X-Process-Time", resp.headers)


if __name__ == "__main__":
    unittest.main()
