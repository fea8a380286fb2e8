"""
Pydantic schemas for the Florte FastAPI backend.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from shared.constants import (
    MAX_ASSISTANT_MESSAGE_LENGTH,
    MAX_COMMENT_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_POST_LENGTH,
)
from shared.types import ChannelType


class SuccessResponse(BaseModel):
    success: Literal[True] = True


class CountResponse(BaseModel):
    count: int


# posts-api


class CreatePostRequest(BaseModel):
    content: Optional[str] = Field(default=None, max_length=MAX_POST_LENGTH)
    media_url: Optional[str] = None
    media_type: Optional[str] = None


class DeletePostRequest(BaseModel):
    post_id: str


class ToggleReactionRequest(BaseModel):
    post_id: str
    emoji: str = Field(..., min_length=1, max_length=16)


class ToggleReactionResponse(SuccessResponse):
    reacted: bool


class CreateCommentRequest(BaseModel):
    post_id: str
    content: str = Field(..., max_length=MAX_COMMENT_LENGTH)


class DeleteCommentRequest(BaseModel):
    comment_id: str


# stories-api


class CreateStoryRequest(BaseModel):
    media_url: str
    media_type: str
    caption: Optional[str] = None


# profiles-api


class UpdateProfileRequest(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    university: Optional[str] = None
    program: Optional[str] = None
    occupation: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    skills: Optional[str] = None
    graduation_year: Optional[int] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None


class CreateProjectRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: Optional[list[str]] = None


class SendFriendRequest(BaseModel):
    receiver_id: str


class AnswerFriendRequest(BaseModel):
    status: Literal["accepted", "rejected"]


# chats-api


class OpenChatRequest(BaseModel):
    friend_id: str


class OpenChatResponse(BaseModel):
    chat_id: str


class SendMessageRequest(BaseModel):
    chat_id: str
    content: Optional[str] = Field(default=None, max_length=MAX_MESSAGE_LENGTH)
    media_url: Optional[str] = None
    media_type: Optional[str] = None


class EditMessageRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)


# groups-api


class CreateGroupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    background_image_url: Optional[str] = None


class UpdateGroupRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    background_image_url: Optional[str] = None


class AddGroupMemberRequest(BaseModel):
    user_id: str


class CreateChannelRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: ChannelType = ChannelType.TEXT
    description: Optional[str] = None


class SendChannelMessageRequest(BaseModel):
    content: Optional[str] = Field(default=None, max_length=MAX_MESSAGE_LENGTH)
    media_url: Optional[str] = None
    media_type: Optional[str] = None


# rides-api


class RideRoute(BaseModel):
    origin_address: str
    origin_latitude: float = Field(..., ge=-90, le=90)
    origin_longitude: float = Field(..., ge=-180, le=180)
    destination_address: str
    destination_latitude: float = Field(..., ge=-90, le=90)
    destination_longitude: float = Field(..., ge=-180, le=180)
    departure_time: datetime
    description: Optional[str] = None
    expires_at: Optional[datetime] = None


class CreateRideRequest(RideRoute):
    max_passengers: Optional[int] = Field(default=None, ge=1)


class CreateRideOffer(RideRoute):
    available_seats: int = Field(..., ge=1)
    vehicle_description: Optional[str] = None


class CreateMatchRequest(BaseModel):
    request_id: str
    offer_id: str


class GeocodeResponse(BaseModel):
    lat: float
    lon: float


class ReverseGeocodeResponse(BaseModel):
    display_name: str


# books-api


class BookPayload(BaseModel):
    # title/author are validated by the route so the error matches the API contract.
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None


# AI assistant


class ChatTurn(BaseModel):
    role: str
    content: str


class AssistantChatRequest(BaseModel):
    message: str = Field(..., max_length=MAX_ASSISTANT_MESSAGE_LENGTH)
    history: Optional[list[ChatTurn]] = None


class ImageAnalysisRequest(BaseModel):
    image: str
    prompt: Optional[str] = None


class AssistantResponse(BaseModel):
    response: str


# storage


class SignUrlResponse(BaseModel):
    url: str
