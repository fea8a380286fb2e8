"""
Signed and public URLs for the platform's storage buckets.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import AuthenticatedUser, get_current_user
from backend.dependencies import get_storage_client
from backend.schemas import SignUrlResponse
from backend.storage import StorageClient
from shared.constants import MEDIA_BUCKETS

router = APIRouter()


def _check_bucket(bucket: str) -> None:
    if bucket not in MEDIA_BUCKETS:
        raise HTTPException(status_code=400, detail=f"Unknown bucket: {bucket}")


@router.get("/sign-url", response_model=SignUrlResponse)
def sign_url(
    bucket: str = Query(..., description="Storage bucket name"),
    path: str = Query(..., min_length=1, description="Object path in storage"),
    op: str = Query("get", pattern="^(get|put)$"),
    expires_in: int = Query(3600, ge=60, le=86400),
    user: AuthenticatedUser = Depends(get_current_user),
    storage: StorageClient = Depends(get_storage_client),
):
    _check_bucket(bucket)
    if op == "get":
        url = storage.presign_get(bucket, path, expires_in=expires_in)
    else:
        # Uploads go under the caller's own folder, e.g. "<user_id>/photo.png".
        if path.lstrip("/").split("/", 1)[0] != user.id:
            raise HTTPException(status_code=403, detail="Uploads must go to your own folder")
        url = storage.presign_put(bucket, path, expires_in=expires_in)
    return SignUrlResponse(url=url)


@router.get("/public-url", response_model=SignUrlResponse)
def public_url(
    bucket: str = Query(...),
    path: str = Query(..., min_length=1),
    storage: StorageClient = Depends(get_storage_client),
):
    _check_bucket(bucket)
    return SignUrlResponse(url=storage.public_url(bucket, path))
