"""
chats-api: one-to-one private chats and their messages.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import DbClient, PrivateChat, PrivateMessage
from backend.dependencies import get_db_client
from backend.routes.common import blank_to_none, profile_summary
from backend.schemas import (
    EditMessageRequest,
    OpenChatRequest,
    OpenChatResponse,
    SendMessageRequest,
    SuccessResponse,
)
from shared.constants import DELETED_MESSAGE_PLACEHOLDER
from shared.types import DeleteScope

logger = logging.getLogger(__name__)

router = APIRouter()


def _participant_chat(db: DbClient, chat_id: str, user_id: str) -> PrivateChat:
    chat = db.get_chat(chat_id)
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")
    if not chat.has_participant(user_id):
        raise HTTPException(status_code=403, detail="Unauthorized")
    return chat


@router.get("/chats")
def list_chats(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """
    Returns the caller's chats, most recently active first.

    Each chat carries the other participant, the last message with its
    sender, and how many messages from the other participant are unread.
    """
    chats = db.list_chats_for_user(user.id)
    last_messages = {chat.id: db.get_last_message(chat.id) for chat in chats}
    profile_ids = {chat.other_user_id(user.id) for chat in chats}
    profile_ids.update(m.sender_id for m in last_messages.values() if m)
    profiles = db.get_profiles(profile_ids)

    results = []
    for chat in chats:
        other = profiles.get(chat.other_user_id(user.id))
        item = {
            **chat.as_dict(),
            "other_user": (
                {"id": other.id, "full_name": other.full_name, "avatar_url": other.avatar_url}
                if other
                else None
            ),
            "unread_count": db.count_unread_messages(chat.id, user.id),
        }
        last_message = last_messages[chat.id]
        if last_message:
            item["last_message"] = {
                **last_message.as_dict(),
                "sender": profile_summary(profiles, last_message.sender_id),
            }
        results.append(item)
    return results


@router.post("/chats", response_model=OpenChatResponse)
def open_chat(
    payload: OpenChatRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """Returns the chat between the caller and `friend_id`, creating it if needed."""
    if payload.friend_id == user.id:
        raise HTTPException(status_code=400, detail="Cannot open a chat with yourself")
    existing = db.find_chat_between(user.id, payload.friend_id)
    if existing:
        return OpenChatResponse(chat_id=existing.id)

    # The pair is stored in a fixed order so it stays unique.
    user1_id, user2_id = sorted((user.id, payload.friend_id))
    chat = db.create_chat(PrivateChat(user1_id=user1_id, user2_id=user2_id))
    return OpenChatResponse(chat_id=chat.id)


@router.get("/messages/{chat_id}")
def list_messages(
    chat_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _participant_chat(db, chat_id, user.id)
    messages = [m for m in db.list_messages(chat_id) if m.is_visible_to(user.id)]
    profiles = db.get_profiles(m.sender_id for m in messages)
    return [
        {**message.as_dict(), "sender": profile_summary(profiles, message.sender_id)}
        for message in messages
    ]


@router.post("/messages", response_model=SuccessResponse)
def send_message(
    payload: SendMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    chat = _participant_chat(db, payload.chat_id, user.id)
    content = blank_to_none(payload.content)
    media_url = blank_to_none(payload.media_url)
    if not content and not media_url:
        raise HTTPException(status_code=400, detail="Message needs content or media")
    db.create_message(
        PrivateMessage(
            chat_id=chat.id,
            sender_id=user.id,
            content=content,
            media_url=media_url,
            media_type=blank_to_none(payload.media_type),
        )
    )
    db.touch_chat(chat.id)
    return SuccessResponse()


@router.put("/messages/read/{chat_id}", response_model=SuccessResponse)
def mark_read(
    chat_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    _participant_chat(db, chat_id, user.id)
    db.mark_messages_read(chat_id, user.id, time.time())
    return SuccessResponse()


@router.put("/messages/{message_id}", response_model=SuccessResponse)
def edit_message(
    message_id: str,
    payload: EditMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    message = db.get_message(message_id)
    if not message or message.sender_id != user.id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    db.update_message(
        message_id, {"content": payload.content, "edited_at": time.time()}
    )
    return SuccessResponse()


@router.delete("/messages/{message_id}", response_model=SuccessResponse)
def delete_message(
    message_id: str,
    delete_for: DeleteScope = Query(DeleteScope.ME, alias="deleteFor"),
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    """
    Deletes a message for the caller only, or for both participants.

    Only the sender may delete for everyone; the message then stays in the
    thread with placeholder content.
    """
    message = db.get_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    _participant_chat(db, message.chat_id, user.id)

    is_sender = message.sender_id == user.id
    if delete_for == DeleteScope.EVERYONE:
        if not is_sender:
            raise HTTPException(
                status_code=403, detail="Only sender can delete for everyone"
            )
        db.update_message(
            message_id,
            {"deleted_for_everyone": True, "content": DELETED_MESSAGE_PLACEHOLDER},
        )
    else:
        field = "deleted_for_sender" if is_sender else "deleted_for_receiver"
        db.update_message(message_id, {field: True})
    logger.info(
        "User %s deleted message %s for %s", user.id, message_id, delete_for.value
    )
    return SuccessResponse()
