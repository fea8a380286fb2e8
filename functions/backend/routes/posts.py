"""
posts-api: the feed, reactions and comments.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import Comment, DbClient, Post
from backend.dependencies import get_db_client
from backend.routes.common import blank_to_none, profile_summary
from backend.schemas import (
    CreateCommentRequest,
    CreatePostRequest,
    DeleteCommentRequest,
    DeletePostRequest,
    SuccessResponse,
    ToggleReactionRequest,
    ToggleReactionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts")
def list_posts(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """
    Returns every post, newest first, with author, reactions and comments.
    """
    posts = db.list_posts()
    reactions = {post.id: db.list_reactions(post.id) for post in posts}
    comments = {post.id: db.list_comments(post.id) for post in posts}

    author_ids = {post.user_id for post in posts}
    for post_comments in comments.values():
        author_ids.update(comment.user_id for comment in post_comments)
    profiles = db.get_profiles(author_ids)

    results = []
    for post in posts:
        post_comments = [
            {**comment.as_dict(), "profiles": profile_summary(profiles, comment.user_id)}
            for comment in comments[post.id]
        ]
        post_reactions = [reaction.as_dict() for reaction in reactions[post.id]]
        results.append(
            {
                **post.as_dict(),
                "profiles": profile_summary(profiles, post.user_id),
                "reactions": post_reactions,
                "comments": post_comments,
                "_count": {
                    "reactions": len(post_reactions),
                    "comments": len(post_comments),
                },
            }
        )
    return results


@router.post("/posts", response_model=SuccessResponse)
def create_post(
    payload: CreatePostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    content = blank_to_none(payload.content)
    media_url = blank_to_none(payload.media_url)
    if not content and not media_url:
        raise HTTPException(status_code=400, detail="Post needs content or media")
    db.create_post(
        Post(
            user_id=user.id,
            content=content,
            media_url=media_url,
            media_type=blank_to_none(payload.media_type),
        )
    )
    return SuccessResponse()


@router.delete("/posts", response_model=SuccessResponse)
def delete_post(
    payload: DeletePostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    post = db.get_post(payload.post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    if post.user_id != user.id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    db.delete_post(post.id)
    logger.info("User %s deleted post %s", user.id, post.id)
    return SuccessResponse()


@router.post("/reactions", response_model=ToggleReactionResponse)
def toggle_reaction(
    payload: ToggleReactionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    if not db.get_post(payload.post_id):
        raise HTTPException(status_code=404, detail="Post not found")
    reacted = db.toggle_reaction(payload.post_id, user.id, payload.emoji)
    return ToggleReactionResponse(reacted=reacted)


@router.post("/comments", response_model=SuccessResponse)
def add_comment(
    payload: CreateCommentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    content = blank_to_none(payload.content)
    if not content:
        raise HTTPException(status_code=400, detail="Comment content is required")
    if not db.get_post(payload.post_id):
        raise HTTPException(status_code=404, detail="Post not found")
    db.create_comment(Comment(post_id=payload.post_id, user_id=user.id, content=content))
    return SuccessResponse()


@router.delete("/comments", response_model=SuccessResponse)
def delete_comment(
    payload: DeleteCommentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    comment = db.get_comment(payload.comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.user_id != user.id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    db.delete_comment(comment.id)
    return SuccessResponse()
