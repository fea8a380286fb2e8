"""
groups-api: study groups with their members, channels and channel messages.

Membership gates everything under a group. Admins manage the group, its
members and its channels; the owner is the first admin and stays a member.
"""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import Channel, ChannelMessage, DbClient, Group, GroupMember
from backend.dependencies import get_db_client
from backend.routes.common import blank_to_none, profile_summary
from backend.schemas import (
    AddGroupMemberRequest,
    CreateChannelRequest,
    CreateGroupRequest,
    SendChannelMessageRequest,
    SuccessResponse,
    UpdateGroupRequest,
)
from shared.constants import DEFAULT_CHANNEL_DESCRIPTION, DEFAULT_CHANNEL_NAME
from shared.types import ChannelType, GroupRole

logger = logging.getLogger(__name__)

router = APIRouter()


def channel_slug(name: str) -> str:
    """Channel names are lowercase with runs of whitespace turned into dashes."""
    return re.sub(r"\s+", "-", name.strip().lower())


def _load_group(db: DbClient, group_id: str) -> Group:
    group = db.get_group(group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


def _membership(db: DbClient, group_id: str, user_id: str) -> GroupMember:
    _load_group(db, group_id)
    member = db.find_group_member(group_id, user_id)
    if not member:
        raise HTTPException(status_code=403, detail="Not a member of this group")
    return member


def _admin_membership(db: DbClient, group_id: str, user_id: str) -> GroupMember:
    member = _membership(db, group_id, user_id)
    if not member.is_admin:
        raise HTTPException(status_code=403, detail="Only group admins can do this")
    return member


def _load_channel(db: DbClient, channel_id: str) -> Channel:
    channel = db.get_channel(channel_id)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    return channel


def _with_role(group: Group, member: GroupMember) -> dict:
    return {**group.as_dict(), "role": member.role, "is_admin": member.is_admin}


@router.post("/groups", status_code=201)
def create_group(
    payload: CreateGroupRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """
    Creates a group owned by the caller.

    The caller joins as admin and the group gets its default text channel.
    """
    name = blank_to_none(payload.name)
    if not name:
        raise HTTPException(status_code=400, detail="Group name is required")
    group = db.create_group(
        Group(
            owner_id=user.id,
            name=name,
            description=blank_to_none(payload.description),
            background_image_url=blank_to_none(payload.background_image_url),
        )
    )
    member = db.add_group_member(
        GroupMember(group_id=group.id, user_id=user.id, role=GroupRole.ADMIN.value)
    )
    db.create_channel(
        Channel(
            group_id=group.id,
            name=DEFAULT_CHANNEL_NAME,
            type=ChannelType.TEXT.value,
            description=DEFAULT_CHANNEL_DESCRIPTION,
            created_by=user.id,
        )
    )
    logger.info("User %s created group %s", user.id, group.id)
    return _with_role(group, member)


@router.get("/groups")
def list_groups(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    results = []
    for group in db.list_groups_for_user(user.id):
        member = db.find_group_member(group.id, user.id)
        if member:
            results.append(_with_role(group, member))
    return results


@router.get("/groups/{group_id}")
def get_group(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    member = _membership(db, group_id, user.id)
    group = db.get_group(group_id)
    return {
        **_with_role(group, member),
        "channels": [channel.as_dict() for channel in db.list_channels(group_id)],
    }


@router.put("/groups/{group_id}")
def update_group(
    group_id: str,
    payload: UpdateGroupRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    member = _admin_membership(db, group_id, user.id)
    fields = payload.model_dump(exclude_unset=True)
    if "name" in fields:
        fields["name"] = blank_to_none(fields["name"])
        if not fields["name"]:
            raise HTTPException(status_code=400, detail="Group name is required")
    group = db.update_group(group_id, fields)
    return _with_role(group, member)


# Members


@router.get("/groups/{group_id}/members")
def list_members(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _membership(db, group_id, user.id)
    members = db.list_group_members(group_id)
    profiles = db.get_profiles(m.user_id for m in members)
    results = []
    for member in members:
        profile = profiles.get(member.user_id)
        results.append(
            {
                **member.as_dict(),
                "profile": {
                    **profile_summary(profiles, member.user_id),
                    "bio": profile.bio if profile else None,
                },
            }
        )
    return results


@router.post("/groups/{group_id}/members", status_code=201)
def add_member(
    group_id: str,
    payload: AddGroupMemberRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _admin_membership(db, group_id, user.id)
    if not db.get_profile(payload.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if db.find_group_member(group_id, payload.user_id):
        raise HTTPException(status_code=409, detail="User is already a member")
    member = db.add_group_member(GroupMember(group_id=group_id, user_id=payload.user_id))
    return member.as_dict()


@router.delete("/members/{member_id}", response_model=SuccessResponse)
def remove_member(
    member_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """Removes a member. Admins can remove anyone but the owner; members can leave."""
    member = db.get_group_member(member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    group = _load_group(db, member.group_id)
    if member.user_id != user.id:
        _admin_membership(db, group.id, user.id)
    if member.user_id == group.owner_id:
        raise HTTPException(status_code=400, detail="The group owner cannot be removed")
    db.delete_group_member(member_id)
    logger.info("User %s removed member %s from group %s", user.id, member_id, group.id)
    return SuccessResponse()


# Channels


@router.get("/groups/{group_id}/channels")
def list_channels(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _membership(db, group_id, user.id)
    return [channel.as_dict() for channel in db.list_channels(group_id)]


@router.post("/groups/{group_id}/channels", status_code=201)
def create_channel(
    group_id: str,
    payload: CreateChannelRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _admin_membership(db, group_id, user.id)
    name = channel_slug(payload.name)
    if not name:
        raise HTTPException(status_code=400, detail="Channel name is required")
    channel = db.create_channel(
        Channel(
            group_id=group_id,
            name=name,
            type=payload.type.value,
            description=blank_to_none(payload.description),
            created_by=user.id,
        )
    )
    return channel.as_dict()


@router.delete("/channels/{channel_id}", response_model=SuccessResponse)
def delete_channel(
    channel_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    channel = _load_channel(db, channel_id)
    _admin_membership(db, channel.group_id, user.id)
    db.delete_channel(channel_id)
    return SuccessResponse()


# Channel messages


@router.get("/channels/{channel_id}/messages")
def list_channel_messages(
    channel_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    channel = _load_channel(db, channel_id)
    _membership(db, channel.group_id, user.id)
    messages = db.list_channel_messages(channel_id)
    profiles = db.get_profiles(m.user_id for m in messages)
    return [
        {**message.as_dict(), "profiles": profile_summary(profiles, message.user_id)}
        for message in messages
    ]


@router.post("/channels/{channel_id}/messages", status_code=201)
def send_channel_message(
    channel_id: str,
    payload: SendChannelMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    channel = _load_channel(db, channel_id)
    _membership(db, channel.group_id, user.id)
    content = blank_to_none(payload.content)
    media_url = blank_to_none(payload.media_url)
    if not content and not media_url:
        raise HTTPException(status_code=400, detail="Message needs content or media")
    message = db.create_channel_message(
        ChannelMessage(
            channel_id=channel_id,
            user_id=user.id,
            content=content,
            media_url=media_url,
            media_type=blank_to_none(payload.media_type),
        )
    )
    return message.as_dict()


@router.delete("/messages/{message_id}", response_model=SuccessResponse)
def delete_channel_message(
    message_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    message = db.get_channel_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    channel = _load_channel(db, message.channel_id)
    member = _membership(db, channel.group_id, user.id)
    if message.user_id != user.id and not member.is_admin:
        raise HTTPException(status_code=403, detail="Unauthorized")
    db.delete_channel_message(message_id)
    return SuccessResponse()
