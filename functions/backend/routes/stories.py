"""
stories-api: short-lived media posts.
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import DbClient, Story
from backend.dependencies import get_db_client
from backend.routes.common import blank_to_none, profile_summary
from backend.schemas import CreateStoryRequest, SuccessResponse
from shared.constants import DEFAULT_STUDENT_NAME

router = APIRouter()


@router.get("/stories")
def list_stories(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    stories = db.list_active_stories(time.time())
    profiles = db.get_profiles(story.user_id for story in stories)
    return [
        {
            **story.as_dict(),
            "profiles": profile_summary(profiles, story.user_id, DEFAULT_STUDENT_NAME),
        }
        for story in stories
    ]


@router.post("/stories")
def create_story(
    payload: CreateStoryRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    story = db.create_story(
        Story(
            user_id=user.id,
            media_url=payload.media_url,
            media_type=payload.media_type,
            caption=blank_to_none(payload.caption),
        )
    )
    return story.as_dict()


@router.delete("/stories/{story_id}", response_model=SuccessResponse)
def delete_story(
    story_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    # Only the owner's row matches; anyone else's delete is a silent no-op.
    db.delete_story(story_id, user.id)
    return SuccessResponse()
