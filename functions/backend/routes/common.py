"""
Helpers shared by the route modules.
"""

from __future__ import annotations

from typing import Optional

from backend.db import Profile


def profile_summary(
    profiles: dict[str, Profile], user_id: str, default_name: Optional[str] = None
) -> dict:
    """Author summary embedded in listings; falls back when the profile row is missing."""
    profile = profiles.get(user_id)
    if profile is None:
        return {"full_name": default_name, "avatar_url": None}
    return profile.summary()


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
