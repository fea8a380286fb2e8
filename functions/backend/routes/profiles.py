"""
profiles-api: friends, projects and profile details.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import DbClient, FriendRequest, Friendship, Project
from backend.dependencies import get_db_client
from backend.schemas import (
    AnswerFriendRequest,
    CountResponse,
    CreateProjectRequest,
    SendFriendRequest,
    SuccessResponse,
    UpdateProfileRequest,
)
from shared.types import FriendRequestStatus

logger = logging.getLogger(__name__)

router = APIRouter()


def _friend_card(profile) -> dict:
    return {
        "id": profile.id,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
        "bio": profile.bio,
    }


@router.get("/friends/{user_id}")
def list_friends(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    friend_ids = db.list_friend_ids(user_id)
    if not friend_ids:
        return []
    profiles = db.get_profiles(friend_ids)
    # Keep the friendship order; friends without a profile row are skipped.
    return [
        _friend_card(profiles[friend_id])
        for friend_id in friend_ids
        if friend_id in profiles
    ]


@router.get("/suggested-users")
def list_suggested_users(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """People the caller could send a friend request to."""
    return [_friend_card(profile) for profile in db.list_suggested_profiles(user.id)]


@router.get("/friends-count/{user_id}", response_model=CountResponse)
def count_friends(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    return CountResponse(count=db.count_friendships(user_id))


@router.get("/projects-count/{user_id}", response_model=CountResponse)
def count_projects(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    return CountResponse(count=db.count_projects(user_id))


@router.get("/projects/{user_id}")
def list_projects(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    return [project.as_dict() for project in db.list_projects(user_id)]


@router.post("/projects", status_code=201)
def create_project(
    payload: CreateProjectRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    project = db.create_project(Project(user_id=user.id, **payload.model_dump()))
    return project.as_dict()


@router.delete("/projects/{project_id}", response_model=SuccessResponse)
def delete_project(
    project_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    db.delete_project(project_id, user.id)
    return SuccessResponse()


@router.get("/profiles/{user_id}")
def get_profile(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    profile = db.get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile.as_dict()


@router.put("/profiles/me")
def update_own_profile(
    payload: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    profile = db.upsert_profile(user.id, payload.model_dump(exclude_unset=True))
    return profile.as_dict()


@router.post("/friend-requests", status_code=201)
def send_friend_request(
    payload: SendFriendRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    if payload.receiver_id == user.id:
        raise HTTPException(status_code=400, detail="Cannot send a friend request to yourself")
    if db.are_friends(user.id, payload.receiver_id):
        raise HTTPException(status_code=409, detail="Already friends")
    if db.find_pending_friend_request(user.id, payload.receiver_id):
        raise HTTPException(status_code=409, detail="Friend request already pending")
    request = db.create_friend_request(
        FriendRequest(sender_id=user.id, receiver_id=payload.receiver_id)
    )
    return request.as_dict()


@router.get("/friend-requests")
def list_friend_requests(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    requests = db.list_pending_friend_requests(user.id)
    profiles = db.get_profiles(r.sender_id for r in requests)
    results = []
    for request in requests:
        sender = profiles.get(request.sender_id)
        results.append(
            {
                **request.as_dict(),
                "sender_profile": {
                    "full_name": sender.full_name if sender else None,
                    "avatar_url": sender.avatar_url if sender else None,
                    "bio": sender.bio if sender else None,
                },
            }
        )
    return results


@router.put("/friend-requests/{request_id}", response_model=SuccessResponse)
def answer_friend_request(
    request_id: str,
    payload: AnswerFriendRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    request = db.get_friend_request(request_id)
    if not request:
        raise HTTPException(status_code=404, detail="Friend request not found")
    if request.receiver_id != user.id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    if request.status != FriendRequestStatus.PENDING.value:
        raise HTTPException(status_code=409, detail="Friend request already answered")

    db.update_friend_request_status(request_id, payload.status)
    if payload.status == FriendRequestStatus.ACCEPTED.value:
        db.create_friendship(
            Friendship(user1_id=request.sender_id, user2_id=request.receiver_id)
        )
        logger.info("Users %s and %s are now friends", request.sender_id, user.id)
    return SuccessResponse()
