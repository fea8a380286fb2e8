"""
Database abstraction for the hosted Postgres tables and an in-memory test implementation.

Records mirror the platform's table schema. Timestamps are kept as epoch
seconds and rendered as ISO-8601 strings when serialized.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, Dict, Iterable, Optional, Protocol

from shared.constants import STORY_TTL_SECONDS
from shared.types import (
    ChannelType,
    FriendRequestStatus,
    GroupRole,
    MatchStatus,
    RideStatus,
)


def new_id() -> str:
    return str(uuid.uuid4())


def iso_timestamp(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


class Record:
    """Base for table records; `as_dict` renders timestamp fields as ISO strings."""

    timestamp_fields: ClassVar[tuple[str, ...]] = ("created_at", "updated_at")

    def as_dict(self) -> dict:
        data = asdict(self)
        for name in self.timestamp_fields:
            if name in data:
                data[name] = iso_timestamp(data[name])
        return data


@dataclass
class Profile(Record):
    id: str
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
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def summary(self) -> dict:
        return {"full_name": self.full_name, "avatar_url": self.avatar_url}


@dataclass
class Post(Record):
    user_id: str
    content: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class Reaction(Record):
    post_id: str
    user_id: str
    emoji: str
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)


@dataclass
class Comment(Record):
    post_id: str
    user_id: str
    content: str
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class Story(Record):
    timestamp_fields: ClassVar[tuple[str, ...]] = ("created_at", "expires_at")

    user_id: str
    media_url: str
    media_type: str
    caption: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    expires_at: float = field(default_factory=lambda: time.time() + STORY_TTL_SECONDS)


@dataclass
class Friendship(Record):
    user1_id: str
    user2_id: str
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)

    def friend_of(self, user_id: str) -> str:
        return self.user2_id if self.user1_id == user_id else self.user1_id


@dataclass
class FriendRequest(Record):
    sender_id: str
    receiver_id: str
    status: str = FriendRequestStatus.PENDING.value
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class Project(Record):
    user_id: str
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: Optional[list[str]] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class PrivateChat(Record):
    user1_id: str
    user2_id: str
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_user_id(self, user_id: str) -> str:
        return self.user2_id if self.user1_id == user_id else self.user1_id


@dataclass
class PrivateMessage(Record):
    timestamp_fields: ClassVar[tuple[str, ...]] = ("created_at", "read_at", "edited_at")

    chat_id: str
    sender_id: str
    content: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    read_at: Optional[float] = None
    edited_at: Optional[float] = None
    deleted_for_sender: bool = False
    deleted_for_receiver: bool = False
    deleted_for_everyone: bool = False
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)

    def is_visible_to(self, user_id: str) -> bool:
        # Messages deleted for everyone stay in the thread as a placeholder.
        if self.deleted_for_everyone:
            return True
        if self.sender_id == user_id:
            return not self.deleted_for_sender
        return not self.deleted_for_receiver


@dataclass
class RideRequest(Record):
    timestamp_fields: ClassVar[tuple[str, ...]] = (
        "departure_time",
        "expires_at",
        "created_at",
        "updated_at",
    )

    student_id: str
    origin_address: str
    origin_latitude: float
    origin_longitude: float
    destination_address: str
    destination_latitude: float
    destination_longitude: float
    departure_time: float
    max_passengers: Optional[int] = None
    description: Optional[str] = None
    status: str = RideStatus.ACTIVE.value
    expires_at: Optional[float] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class RideOffer(Record):
    timestamp_fields: ClassVar[tuple[str, ...]] = (
        "departure_time",
        "expires_at",
        "created_at",
        "updated_at",
    )

    driver_id: str
    origin_address: str
    origin_latitude: float
    origin_longitude: float
    destination_address: str
    destination_latitude: float
    destination_longitude: float
    departure_time: float
    available_seats: int = 1
    vehicle_description: Optional[str] = None
    description: Optional[str] = None
    status: str = RideStatus.ACTIVE.value
    expires_at: Optional[float] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class RideMatch(Record):
    request_id: str
    offer_id: str
    status: str = MatchStatus.PENDING.value
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class Book(Record):
    title: str
    author: str
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class Group(Record):
    owner_id: str
    name: str
    description: Optional[str] = None
    background_image_url: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class GroupMember(Record):
    timestamp_fields: ClassVar[tuple[str, ...]] = ("joined_at",)

    group_id: str
    user_id: str
    role: str = GroupRole.MEMBER.value
    id: str = field(default_factory=new_id)
    joined_at: float = field(default_factory=time.time)

    @property
    def is_admin(self) -> bool:
        return self.role == GroupRole.ADMIN.value


@dataclass
class Channel(Record):
    group_id: str
    name: str
    created_by: str
    type: str = ChannelType.TEXT.value
    description: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


@dataclass
class ChannelMessage(Record):
    channel_id: str
    user_id: str
    content: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


def is_listed(expires_at: Optional[float], now: float) -> bool:
    """Rows without an expiry never show up in time-bounded listings."""
    return expires_at is not None and expires_at > now


class DbClient(Protocol):
    """Interface for database access."""

    # Profiles
    def get_profile(self, user_id: str) -> Optional[Profile]:
        ...

    def get_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        ...

    def upsert_profile(self, user_id: str, fields: dict) -> Profile:
        ...

    def list_suggested_profiles(self, user_id: str) -> list[Profile]:
        """Other profiles with no friendship or pending request involving `user_id`."""
        ...

    # Posts
    def list_posts(self) -> list[Post]:
        ...

    def get_post(self, post_id: str) -> Optional[Post]:
        ...

    def create_post(self, post: Post) -> Post:
        ...

    def delete_post(self, post_id: str) -> None:
        ...

    def list_reactions(self, post_id: str) -> list[Reaction]:
        ...

    def toggle_reaction(self, post_id: str, user_id: str, emoji: str) -> bool:
        ...

    def list_comments(self, post_id: str) -> list[Comment]:
        ...

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        ...

    def create_comment(self, comment: Comment) -> Comment:
        ...

    def delete_comment(self, comment_id: str) -> None:
        ...

    # Stories
    def list_active_stories(self, now: float) -> list[Story]:
        ...

    def create_story(self, story: Story) -> Story:
        ...

    def delete_story(self, story_id: str, user_id: str) -> int:
        ...

    # Friends
    def list_friend_ids(self, user_id: str) -> list[str]:
        ...

    def count_friendships(self, user_id: str) -> int:
        ...

    def are_friends(self, user_a: str, user_b: str) -> bool:
        ...

    def create_friendship(self, friendship: Friendship) -> Friendship:
        ...

    def create_friend_request(self, request: FriendRequest) -> FriendRequest:
        ...

    def get_friend_request(self, request_id: str) -> Optional[FriendRequest]:
        ...

    def find_pending_friend_request(
        self, user_a: str, user_b: str
    ) -> Optional[FriendRequest]:
        ...

    def list_pending_friend_requests(self, receiver_id: str) -> list[FriendRequest]:
        ...

    def update_friend_request_status(self, request_id: str, status: str) -> None:
        ...

    # Projects
    def list_projects(self, user_id: str) -> list[Project]:
        ...

    def count_projects(self, user_id: str) -> int:
        ...

    def create_project(self, project: Project) -> Project:
        ...

    def delete_project(self, project_id: str, user_id: str) -> int:
        ...

    # Private chats
    def list_chats_for_user(self, user_id: str) -> list[PrivateChat]:
        ...

    def get_chat(self, chat_id: str) -> Optional[PrivateChat]:
        ...

    def find_chat_between(self, user_a: str, user_b: str) -> Optional[PrivateChat]:
        ...

    def create_chat(self, chat: PrivateChat) -> PrivateChat:
        ...

    def touch_chat(self, chat_id: str) -> None:
        ...

    def list_messages(self, chat_id: str) -> list[PrivateMessage]:
        ...

    def get_last_message(self, chat_id: str) -> Optional[PrivateMessage]:
        ...

    def count_unread_messages(self, chat_id: str, reader_id: str) -> int:
        ...

    def get_message(self, message_id: str) -> Optional[PrivateMessage]:
        ...

    def create_message(self, message: PrivateMessage) -> PrivateMessage:
        ...

    def update_message(self, message_id: str, fields: dict) -> None:
        ...

    def mark_messages_read(self, chat_id: str, reader_id: str, read_at: float) -> int:
        ...

    # Rides
    def list_active_ride_requests(self, now: float) -> list[RideRequest]:
        ...

    def list_active_ride_offers(self, now: float) -> list[RideOffer]:
        ...

    def get_ride_request(self, request_id: str) -> Optional[RideRequest]:
        ...

    def get_ride_offer(self, offer_id: str) -> Optional[RideOffer]:
        ...

    def create_ride_request(self, request: RideRequest) -> RideRequest:
        ...

    def create_ride_offer(self, offer: RideOffer) -> RideOffer:
        ...

    def create_ride_match(self, match: RideMatch) -> RideMatch:
        ...

    # Books
    def list_books(self) -> list[Book]:
        ...

    def get_book(self, book_id: str) -> Optional[Book]:
        ...

    def create_book(self, book: Book) -> Book:
        ...

    def update_book(self, book_id: str, fields: dict) -> Optional[Book]:
        ...

    def delete_book(self, book_id: str) -> bool:
        ...

    # Groups and channels
    def create_group(self, group: Group) -> Group:
        ...

    def get_group(self, group_id: str) -> Optional[Group]:
        ...

    def update_group(self, group_id: str, fields: dict) -> Optional[Group]:
        ...

    def list_groups_for_user(self, user_id: str) -> list[Group]:
        ...

    def add_group_member(self, member: GroupMember) -> GroupMember:
        ...

    def get_group_member(self, member_id: str) -> Optional[GroupMember]:
        ...

    def find_group_member(self, group_id: str, user_id: str) -> Optional[GroupMember]:
        ...

    def list_group_members(self, group_id: str) -> list[GroupMember]:
        ...

    def delete_group_member(self, member_id: str) -> None:
        ...

    def create_channel(self, channel: Channel) -> Channel:
        ...

    def get_channel(self, channel_id: str) -> Optional[Channel]:
        ...

    def list_channels(self, group_id: str) -> list[Channel]:
        ...

    def delete_channel(self, channel_id: str) -> None:
        ...

    def list_channel_messages(self, channel_id: str) -> list[ChannelMessage]:
        ...

    def get_channel_message(self, message_id: str) -> Optional[ChannelMessage]:
        ...

    def create_channel_message(self, message: ChannelMessage) -> ChannelMessage:
        ...

    def delete_channel_message(self, message_id: str) -> None:
        ...


def _newest_first(items: Iterable, key: str = "created_at") -> list:
    return sorted(items, key=lambda item: getattr(item, key), reverse=True)


def _oldest_first(items: Iterable, key: str = "created_at") -> list:
    return sorted(items, key=lambda item: getattr(item, key))


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.profiles: Dict[str, Profile] = {}
        self.posts: Dict[str, Post] = {}
        self.reactions: Dict[str, Reaction] = {}
        self.comments: Dict[str, Comment] = {}
        self.stories: Dict[str, Story] = {}
        self.friendships: Dict[str, Friendship] = {}
        self.friend_requests: Dict[str, FriendRequest] = {}
        self.projects: Dict[str, Project] = {}
        self.chats: Dict[str, PrivateChat] = {}
        self.messages: Dict[str, PrivateMessage] = {}
        self.ride_requests: Dict[str, RideRequest] = {}
        self.ride_offers: Dict[str, RideOffer] = {}
        self.ride_matches: Dict[str, RideMatch] = {}
        self.books: Dict[str, Book] = {}
        self.groups: Dict[str, Group] = {}
        self.group_members: Dict[str, GroupMember] = {}
        self.channels: Dict[str, Channel] = {}
        self.channel_messages: Dict[str, ChannelMessage] = {}

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        for table in vars(self).values():
            table.clear()

    # Profiles

    def get_profile(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)

    def get_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        return {uid: self.profiles[uid] for uid in set(user_ids) if uid in self.profiles}

    def upsert_profile(self, user_id: str, fields: dict) -> Profile:
        profile = self.profiles.get(user_id)
        if profile is None:
            profile = Profile(id=user_id, **fields)
            self.profiles[user_id] = profile
            return profile
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.updated_at = time.time()
        return profile

    def list_suggested_profiles(self, user_id: str) -> list[Profile]:
        excluded = {user_id, *self.list_friend_ids(user_id)}
        for request in self.friend_requests.values():
            if request.status != FriendRequestStatus.PENDING.value:
                continue
            if request.sender_id == user_id:
                excluded.add(request.receiver_id)
            elif request.receiver_id == user_id:
                excluded.add(request.sender_id)
        return _newest_first(p for p in self.profiles.values() if p.id not in excluded)

    # Posts

    def list_posts(self) -> list[Post]:
        return _newest_first(self.posts.values())

    def get_post(self, post_id: str) -> Optional[Post]:
        return self.posts.get(post_id)

    def create_post(self, post: Post) -> Post:
        self.posts[post.id] = post
        return post

    def delete_post(self, post_id: str) -> None:
        self.posts.pop(post_id, None)
        for key in [k for k, r in self.reactions.items() if r.post_id == post_id]:
            del self.reactions[key]
        for key in [k for k, c in self.comments.items() if c.post_id == post_id]:
            del self.comments[key]

    def list_reactions(self, post_id: str) -> list[Reaction]:
        return _oldest_first(r for r in self.reactions.values() if r.post_id == post_id)

    def toggle_reaction(self, post_id: str, user_id: str, emoji: str) -> bool:
        for key, reaction in self.reactions.items():
            if (reaction.post_id, reaction.user_id, reaction.emoji) == (
                post_id,
                user_id,
                emoji,
            ):
                del self.reactions[key]
                return False
        reaction = Reaction(post_id=post_id, user_id=user_id, emoji=emoji)
        self.reactions[reaction.id] = reaction
        return True

    def list_comments(self, post_id: str) -> list[Comment]:
        return _oldest_first(c for c in self.comments.values() if c.post_id == post_id)

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        return self.comments.get(comment_id)

    def create_comment(self, comment: Comment) -> Comment:
        self.comments[comment.id] = comment
        return comment

    def delete_comment(self, comment_id: str) -> None:
        self.comments.pop(comment_id, None)

    # Stories

    def list_active_stories(self, now: float) -> list[Story]:
        return _newest_first(
            s for s in self.stories.values() if is_listed(s.expires_at, now)
        )

    def create_story(self, story: Story) -> Story:
        self.stories[story.id] = story
        return story

    def delete_story(self, story_id: str, user_id: str) -> int:
        story = self.stories.get(story_id)
        if not story or story.user_id != user_id:
            return 0
        del self.stories[story_id]
        return 1

    # Friends

    def _friendships_of(self, user_id: str) -> list[Friendship]:
        return _oldest_first(
            f for f in self.friendships.values() if user_id in (f.user1_id, f.user2_id)
        )

    def list_friend_ids(self, user_id: str) -> list[str]:
        return [f.friend_of(user_id) for f in self._friendships_of(user_id)]

    def count_friendships(self, user_id: str) -> int:
        return len(self._friendships_of(user_id))

    def are_friends(self, user_a: str, user_b: str) -> bool:
        return user_b in self.list_friend_ids(user_a)

    def create_friendship(self, friendship: Friendship) -> Friendship:
        self.friendships[friendship.id] = friendship
        return friendship

    def create_friend_request(self, request: FriendRequest) -> FriendRequest:
        self.friend_requests[request.id] = request
        return request

    def get_friend_request(self, request_id: str) -> Optional[FriendRequest]:
        return self.friend_requests.get(request_id)

    def find_pending_friend_request(
        self, user_a: str, user_b: str
    ) -> Optional[FriendRequest]:
        pair = {user_a, user_b}
        for request in self.friend_requests.values():
            if (
                request.status == FriendRequestStatus.PENDING.value
                and {request.sender_id, request.receiver_id} == pair
            ):
                return request
        return None

    def list_pending_friend_requests(self, receiver_id: str) -> list[FriendRequest]:
        return _newest_first(
            r
            for r in self.friend_requests.values()
            if r.receiver_id == receiver_id
            and r.status == FriendRequestStatus.PENDING.value
        )

    def update_friend_request_status(self, request_id: str, status: str) -> None:
        request = self.friend_requests.get(request_id)
        if request:
            request.status = status
            request.updated_at = time.time()

    # Projects

    def list_projects(self, user_id: str) -> list[Project]:
        return _newest_first(p for p in self.projects.values() if p.user_id == user_id)

    def count_projects(self, user_id: str) -> int:
        return sum(1 for p in self.projects.values() if p.user_id == user_id)

    def create_project(self, project: Project) -> Project:
        self.projects[project.id] = project
        return project

    def delete_project(self, project_id: str, user_id: str) -> int:
        project = self.projects.get(project_id)
        if not project or project.user_id != user_id:
            return 0
        del self.projects[project_id]
        return 1

    # Private chats

    def list_chats_for_user(self, user_id: str) -> list[PrivateChat]:
        return _newest_first(
            (c for c in self.chats.values() if c.has_participant(user_id)),
            key="updated_at",
        )

    def get_chat(self, chat_id: str) -> Optional[PrivateChat]:
        return self.chats.get(chat_id)

    def find_chat_between(self, user_a: str, user_b: str) -> Optional[PrivateChat]:
        pair = {user_a, user_b}
        for chat in self.chats.values():
            if {chat.user1_id, chat.user2_id} == pair:
                return chat
        return None

    def create_chat(self, chat: PrivateChat) -> PrivateChat:
        self.chats[chat.id] = chat
        return chat

    def touch_chat(self, chat_id: str) -> None:
        chat = self.chats.get(chat_id)
        if chat:
            chat.updated_at = time.time()

    def list_messages(self, chat_id: str) -> list[PrivateMessage]:
        return _oldest_first(m for m in self.messages.values() if m.chat_id == chat_id)

    def get_last_message(self, chat_id: str) -> Optional[PrivateMessage]:
        messages = self.list_messages(chat_id)
        return messages[-1] if messages else None

    def count_unread_messages(self, chat_id: str, reader_id: str) -> int:
        return sum(
            1
            for m in self.messages.values()
            if m.chat_id == chat_id and m.sender_id != reader_id and m.read_at is None
        )

    def get_message(self, message_id: str) -> Optional[PrivateMessage]:
        return self.messages.get(message_id)

    def create_message(self, message: PrivateMessage) -> PrivateMessage:
        self.messages[message.id] = message
        return message

    def update_message(self, message_id: str, fields: dict) -> None:
        message = self.messages.get(message_id)
        if not message:
            return
        for name, value in fields.items():
            setattr(message, name, value)

    def mark_messages_read(self, chat_id: str, reader_id: str, read_at: float) -> int:
        updated = 0
        for message in self.messages.values():
            if (
                message.chat_id == chat_id
                and message.sender_id != reader_id
                and message.read_at is None
            ):
                message.read_at = read_at
                updated += 1
        return updated

    # Rides

    def list_active_ride_requests(self, now: float) -> list[RideRequest]:
        return _newest_first(
            r
            for r in self.ride_requests.values()
            if r.status == RideStatus.ACTIVE.value and is_listed(r.expires_at, now)
        )

    def list_active_ride_offers(self, now: float) -> list[RideOffer]:
        return _newest_first(
            o
            for o in self.ride_offers.values()
            if o.status == RideStatus.ACTIVE.value and is_listed(o.expires_at, now)
        )

    def get_ride_request(self, request_id: str) -> Optional[RideRequest]:
        return self.ride_requests.get(request_id)

    def get_ride_offer(self, offer_id: str) -> Optional[RideOffer]:
        return self.ride_offers.get(offer_id)

    def create_ride_request(self, request: RideRequest) -> RideRequest:
        self.ride_requests[request.id] = request
        return request

    def create_ride_offer(self, offer: RideOffer) -> RideOffer:
        self.ride_offers[offer.id] = offer
        return offer

    def create_ride_match(self, match: RideMatch) -> RideMatch:
        self.ride_matches[match.id] = match
        return match

    # Books

    def list_books(self) -> list[Book]:
        return _newest_first(self.books.values())

    def get_book(self, book_id: str) -> Optional[Book]:
        return self.books.get(book_id)

    def create_book(self, book: Book) -> Book:
        self.books[book.id] = book
        return book

    def update_book(self, book_id: str, fields: dict) -> Optional[Book]:
        book = self.books.get(book_id)
        if not book:
            return None
        for name, value in fields.items():
            setattr(book, name, value)
        book.updated_at = time.time()
        return book

    def delete_book(self, book_id: str) -> bool:
        return self.books.pop(book_id, None) is not None

    # Groups and channels

    def create_group(self, group: Group) -> Group:
        self.groups[group.id] = group
        return group

    def get_group(self, group_id: str) -> Optional[Group]:
        return self.groups.get(group_id)

    def update_group(self, group_id: str, fields: dict) -> Optional[Group]:
        group = self.groups.get(group_id)
        if not group:
            return None
        for name, value in fields.items():
            setattr(group, name, value)
        group.updated_at = time.time()
        return group

    def list_groups_for_user(self, user_id: str) -> list[Group]:
        group_ids = {
            m.group_id for m in self.group_members.values() if m.user_id == user_id
        }
        return _newest_first(g for g in self.groups.values() if g.id in group_ids)

    def add_group_member(self, member: GroupMember) -> GroupMember:
        self.group_members[member.id] = member
        return member

    def get_group_member(self, member_id: str) -> Optional[GroupMember]:
        return self.group_members.get(member_id)

    def find_group_member(self, group_id: str, user_id: str) -> Optional[GroupMember]:
        for member in self.group_members.values():
            if member.group_id == group_id and member.user_id == user_id:
                return member
        return None

    def list_group_members(self, group_id: str) -> list[GroupMember]:
        return _oldest_first(
            (m for m in self.group_members.values() if m.group_id == group_id),
            key="joined_at",
        )

    def delete_group_member(self, member_id: str) -> None:
        self.group_members.pop(member_id, None)

    def create_channel(self, channel: Channel) -> Channel:
        self.channels[channel.id] = channel
        return channel

    def get_channel(self, channel_id: str) -> Optional[Channel]:
        return self.channels.get(channel_id)

    def list_channels(self, group_id: str) -> list[Channel]:
        return _oldest_first(c for c in self.channels.values() if c.group_id == group_id)

    def delete_channel(self, channel_id: str) -> None:
        self.channels.pop(channel_id, None)
        for key in [
            k for k, m in self.channel_messages.items() if m.channel_id == channel_id
        ]:
            del self.channel_messages[key]

    def list_channel_messages(self, channel_id: str) -> list[ChannelMessage]:
        return _oldest_first(
            m for m in self.channel_messages.values() if m.channel_id == channel_id
        )

    def get_channel_message(self, message_id: str) -> Optional[ChannelMessage]:
        return self.channel_messages.get(message_id)

    def create_channel_message(self, message: ChannelMessage) -> ChannelMessage:
        self.channel_messages[message.id] = message
        return message

    def delete_channel_message(self, message_id: str) -> None:
        self.channel_messages.pop(message_id, None)
