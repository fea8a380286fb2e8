"""
HTTP routes for the Florte backend.

Each module replaces one of the platform's edge functions and is mounted
under that function's name so existing client URLs keep working.
"""

from __future__ import annotations

from fastapi import APIRouter

from backend.routes import (
    assistant,
    books,
    chats,
    groups,
    health,
    media,
    posts,
    profiles,
    rides,
    stories,
)

router = APIRouter()
router.include_router(health.router)
router.include_router(posts.router, prefix="/posts-api")
router.include_router(stories.router, prefix="/stories-api")
router.include_router(profiles.router, prefix="/profiles-api")
router.include_router(chats.router, prefix="/chats-api")
router.include_router(groups.router, prefix="/groups-api")
router.include_router(rides.router, prefix="/rides-api")
router.include_router(books.router, prefix="/books-api")
router.include_router(media.router, prefix="/storage")
router.include_router(assistant.router)
