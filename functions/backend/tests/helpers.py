"""
Shared fixtures for the API tests.
"""

import time
import unittest

import jwt
from fastapi.testclient import TestClient

from backend.app import create_app
from backend.config import Settings, get_settings
from backend.db import InMemoryDbClient, Profile
from backend.dependencies import get_db_client, get_geocoder, get_storage_client
from backend.storage import InMemoryStorageClient

TEST_JWT_SECRET = "test-jwt-secret-that-is-long-enough-for-hs256"
ALICE = "00000000-0000-0000-0000-00000000000a"
BOB = "00000000-0000-0000-0000-00000000000b"
CAROL = "00000000-0000-0000-0000-00000000000c"


def make_settings(**overrides) -> Settings:
    values = {
        "supabase_jwt_secret": TEST_JWT_SECRET,
        "supabase_url": "https://project.example.test",
        "gemini_api_key": "test-gemini-key",
        "database_url": None,
        "storage_endpoint": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_token(
    user_id: str,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
    expires_in: int = 3600,
) -> str:
    payload = {
        "sub": user_id,
        "aud": audience,
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class FakeGeocoder:
    def __init__(self, location=None, display_name=None, error=None):
        self.location = location
        self.display_name = display_name
        self.error = error
        self.queries = []

    def geocode(self, address):
        self.queries.append(address)
        if self.error:
            raise self.error
        return self.location

    def reverse(self, lat, lon):
        self.queries.append((lat, lon))
        if self.error:
            raise self.error
        return self.display_name


class ApiTestCase(unittest.TestCase):
    """Builds an app wired to fresh in-memory backends for every test."""

    def setUp(self):
        self.settings = make_settings()
        self.db = InMemoryDbClient()
        self.storage = InMemoryStorageClient(base_url="https://project.example.test")
        self.geocoder = FakeGeocoder()

        self.app = create_app(self.settings)
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_storage_client] = lambda: self.storage
        self.app.dependency_overrides[get_geocoder] = lambda: self.geocoder
        self.client = TestClient(self.app)

        self.db.upsert_profile(ALICE, {"full_name": "Alice", "avatar_url": "a.png"})
        self.db.upsert_profile(BOB, {"full_name": "Bob", "bio": "Driver"})

    def url(self, path: str) -> str:
        return f"{self.settings.api_prefix}{path}"

    def get(self, path: str, user: str | None = ALICE, **kwargs):
        return self.client.get(self.url(path), headers=self._headers(user), **kwargs)

    def post(self, path: str, json=None, user: str | None = ALICE, **kwargs):
        return self.client.post(
            self.url(path), json=json, headers=self._headers(user), **kwargs
        )

    def put(self, path: str, json=None, user: str | None = ALICE, **kwargs):
        return self.client.put(
            self.url(path), json=json, headers=self._headers(user), **kwargs
        )

    def delete(self, path: str, json=None, user: str | None = ALICE, **kwargs):
        return self.client.request(
            "DELETE", self.url(path), json=json, headers=self._headers(user), **kwargs
        )

    @staticmethod
    def _headers(user: str | None) -> dict:
        return auth_headers(user) if user else {}


def add_profile(db: InMemoryDbClient, user_id: str, name: str) -> Profile:
    return db.upsert_profile(user_id, {"full_name": name})
