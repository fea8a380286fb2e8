"""
Storage abstraction for the platform's S3-compatible buckets and in-memory testing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import boto3
from botocore.config import Config


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def presign_get(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        ...

    def presign_put(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        ...

    def public_url(self, bucket: str, path: str) -> str:
        ...


def build_public_url(base_url: str, bucket: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/storage/v1/object/public/{bucket}/{path.lstrip('/')}"


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test"
    signed: list = field(default_factory=list)

    def presign_get(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        self.signed.append(("get", bucket, path))
        return f"{self.base_url}/{bucket}/{path}?op=get&expires={expires_in}"

    def presign_put(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        self.signed.append(("put", bucket, path))
        return f"{self.base_url}/{bucket}/{path}?op=put&expires={expires_in}"

    def public_url(self, bucket: str, path: str) -> str:
        return build_public_url(self.base_url, bucket, path)


@dataclass
class S3StorageClient:
    """
    Client for the platform's S3-compatible storage endpoint.
    """

    endpoint: str
    region: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str

    def __post_init__(self):
        # The storage gateway only understands path-style bucket addressing.
        config = Config(
            s3={"addressing_style": "path"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def presign_get(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": bucket, "Key": path},
            ExpiresIn=expires_in,
        )

    def presign_put(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        # We include a dummy content type so uploads work in browsers by default.
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": bucket,
                "Key": path,
                "ContentType": "application/octet-stream",
            },
            ExpiresIn=expires_in,
        )

    def public_url(self, bucket: str, path: str) -> str:
        return build_public_url(self.public_base_url, bucket, path)
