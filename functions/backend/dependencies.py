"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from backend.config import get_settings
from backend.db import DbClient, InMemoryDbClient
from backend.db_postgres import PostgresDbClient
from backend.geocoding import Geocoder, NominatimGeocoder
from backend.storage import InMemoryStorageClient, S3StorageClient, StorageClient

_db_client: DbClient | None = None
_storage_client: StorageClient | None = None
_geocoder: Geocoder | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so in-memory state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.storage_endpoint:
        _storage_client = InMemoryStorageClient(
            base_url=settings.supabase_url or InMemoryStorageClient.base_url
        )
    else:
        _storage_client = S3StorageClient(
            endpoint=settings.storage_endpoint,
            region=settings.storage_region or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.supabase_url or "",
        )
    return _storage_client


def get_geocoder() -> Geocoder:
    global _geocoder
    if _geocoder:
        return _geocoder

    settings = get_settings()
    _geocoder = NominatimGeocoder(
        base_url=settings.geocoding_base_url,
        country_codes=settings.geocoding_country_codes,
        user_agent=settings.geocoding_user_agent,
    )
    return _geocoder
