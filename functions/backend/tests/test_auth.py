import importlib
import unittest
from unittest import mock

from fastapi.testclient import TestClient

import backend.app
from backend.app import create_app
from backend.auth import AuthError, verify_token
from backend.config import get_settings
from backend.dependencies import get_db_client
from backend.tests.helpers import ALICE, ApiTestCase, make_settings, make_token


class VerifyTokenTests(unittest.TestCase):
    def setUp(self):
        self.settings = make_settings()

    def test_valid_token(self):
        user = verify_token(make_token(ALICE), self.settings)
        self.assertEqual(user.id, ALICE)
        self.assertEqual(user.role, "authenticated")

    def test_expired_token(self):
        with self.assertRaises(AuthError) as ctx:
            verify_token(make_token(ALICE, expires_in=-60), self.settings)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Token has expired")

    def test_wrong_audience(self):
        with self.assertRaises(AuthError) as ctx:
            verify_token(make_token(ALICE, audience="anon"), self.settings)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_wrong_secret(self):
        token = make_token(ALICE, secret="another-secret-that-is-long-enough-xx")
        with self.assertRaises(AuthError):
            verify_token(token, self.settings)

    def test_missing_secret(self):
        settings = make_settings(supabase_jwt_secret=None)
        with self.assertRaises(AuthError) as ctx:
            verify_token(make_token(ALICE), settings)
        self.assertEqual(ctx.exception.status_code, 500)


class AuthDependencyTests(ApiTestCase):
    def test_malformed_bearer_token(self):
        response = self.client.get(
            self.url("/posts-api/posts"), headers={"Authorization": "Bearer nope"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Unauthorized"})

    def test_unconfigured_secret_is_server_error(self):
        self.settings = make_settings(supabase_jwt_secret=None)
        response = self.get("/posts-api/posts")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(), {"error": "SUPABASE_JWT_SECRET not configured"}
        )


class AppTests(ApiTestCase):
    def test_health(self):
        response = self.get("/health", user=None)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_cors_preflight(self):
        response = self.client.options(
            self.url("/posts-api/posts"),
            headers={
                "Origin": "https://florte.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_custom_prefix(self):
        settings = make_settings(api_prefix="/api")
        app = create_app(settings)
        app.dependency_overrides[get_settings] = lambda: settings
        client = TestClient(app)
        self.assertEqual(client.get("/api/health").status_code, 200)
        self.assertEqual(client.get("/functions/v1/health").status_code, 404)

    def test_unhandled_errors_use_error_envelope(self):
        def broken_db():
            raise RuntimeError("database is down")

        self.app.dependency_overrides[get_db_client] = broken_db
        client = TestClient(self.app, raise_server_exceptions=False)
        response = client.get("/functions/v1/books-api/books")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "database is down"})

    def test_server_errors_keep_cors_headers(self):
        def broken_db():
            raise RuntimeError("database is down")

        self.app.dependency_overrides[get_db_client] = broken_db
        client = TestClient(self.app, raise_server_exceptions=False)
        response = client.get(
            "/functions/v1/books-api/books",
            headers={"Origin": "https://florte.example"},
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "database is down"})
        self.assertEqual(response.headers["access-control-allow-origin"], "*")


class EntryPointTests(unittest.TestCase):
    def test_import_leaves_logging_alone(self):
        with mock.patch("logging.basicConfig") as basic_config:
            importlib.reload(backend.app)
        basic_config.assert_not_called()

    def test_main_configures_logging_and_serves(self):
        settings = make_settings(port=9000, log_level="debug")
        with mock.patch.object(
            backend.app, "get_settings", return_value=settings
        ), mock.patch.object(backend.app.uvicorn, "run") as run, mock.patch.object(
            backend.app.logging, "basicConfig"
        ) as basic_config:
            backend.app.main()

        basic_config.assert_called_once_with(level="DEBUG")
        run.assert_called_once_with(backend.app.app, host="0.0.0.0", port=9000)


if __name__ == "__main__":
    unittest.main()
