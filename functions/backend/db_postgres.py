"""
SQLAlchemy-backed implementation of the database client.

Rows follow the hosted platform's schema: uuid keys, timestamptz columns and
text[] arrays. Records keep timestamps as epoch seconds, so values are
converted whenever they cross the row boundary.
"""

from __future__ import annotations

from dataclasses import fields as dataclass_fields
from datetime import datetime, timezone
from typing import Iterable, Optional, Type, TypeVar

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    and_,
    create_engine,
    delete,
    func,
    not_,
    or_,
    select,
    update,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DataError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend.db import (
    Book,
    Channel,
    ChannelMessage,
    Comment,
    FriendRequest,
    Friendship,
    Group,
    GroupMember,
    Post,
    PrivateChat,
    PrivateMessage,
    Profile,
    Project,
    Reaction,
    RideMatch,
    RideOffer,
    RideRequest,
    Story,
)
from shared.types import FriendRequestStatus, RideStatus

R = TypeVar("R")

Base = declarative_base()

Id = postgresql.UUID(as_uuid=False).with_variant(String, "sqlite")
Timestamp = DateTime(timezone=True)
StringList = postgresql.ARRAY(String).with_variant(JSON, "sqlite")


def to_datetime(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def to_epoch(value: Optional[datetime]) -> Optional[float]:
    if value is None:
        return None
    # SQLite hands back naive datetimes; the hosted columns are UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_record(row, record_cls: Type[R]) -> R:
    values = {f.name: getattr(row, f.name) for f in dataclass_fields(record_cls)}
    for name in record_cls.timestamp_fields:
        if name in values:
            values[name] = to_epoch(values[name])
    return record_cls(**values)


def _to_row(record, row_cls):
    values = {f.name: getattr(record, f.name) for f in dataclass_fields(record)}
    return row_cls(**_row_values(type(record), values))


def _row_values(record_cls, values: dict) -> dict:
    """Converts the epoch timestamps in `values` to datetimes for the columns."""
    converted = dict(values)
    for name in record_cls.timestamp_fields:
        if name in converted:
            converted[name] = to_datetime(converted[name])
    return converted


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    The hosted tables are managed by the platform's migrations; pass
    `create_tables=True` only for scratch databases such as SQLite in tests.
    """

    def __init__(self, database_url: str, create_tables: bool = False):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        if create_tables:
            Base.metadata.create_all(self.engine)

    def _insert(self, record: R, row_cls) -> R:
        with self.Session() as session:
            session.add(_to_row(record, row_cls))
            session.commit()
        return record

    def _get(self, row_cls, key, record_cls: Type[R]) -> Optional[R]:
        with self.Session() as session:
            try:
                row = session.get(row_cls, key)
            except DataError:
                # A malformed id can never match a uuid key.
                return None
            return _to_record(row, record_cls) if row else None

    def _all(self, stmt, record_cls: Type[R]) -> list[R]:
        with self.Session() as session:
            try:
                rows = session.execute(stmt).scalars().all()
            except DataError:
                return []
            return [_to_record(row, record_cls) for row in rows]

    def _count(self, stmt) -> int:
        with self.Session() as session:
            try:
                return session.execute(stmt).scalar_one() or 0
            except DataError:
                return 0

    def _execute(self, stmt) -> int:
        with self.Session() as session:
            try:
                result = session.execute(stmt)
            except DataError:
                return 0
            session.commit()
            return result.rowcount or 0

    # Profiles

    def get_profile(self, user_id: str) -> Optional[Profile]:
        return self._get(ProfileRow, user_id, Profile)

    def get_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        profiles = self._all(select(ProfileRow).where(ProfileRow.id.in_(ids)), Profile)
        return {profile.id: profile for profile in profiles}

    def upsert_profile(self, user_id: str, fields: dict) -> Profile:
        with self.Session() as session:
            row = session.get(ProfileRow, user_id)
            if row:
                for name, value in fields.items():
                    setattr(row, name, value)
                row.updated_at = _utcnow()
            else:
                row = _to_row(Profile(id=user_id, **fields), ProfileRow)
                session.add(row)
            session.commit()
            return _to_record(row, Profile)

    def list_suggested_profiles(self, user_id: str) -> list[Profile]:
        excluded = {user_id, *self.list_friend_ids(user_id)}
        pending = self._all(
            select(FriendRequestRow).where(
                FriendRequestRow.status == FriendRequestStatus.PENDING.value,
                or_(
                    FriendRequestRow.sender_id == user_id,
                    FriendRequestRow.receiver_id == user_id,
                ),
            ),
            FriendRequest,
        )
        for request in pending:
            excluded.update((request.sender_id, request.receiver_id))
        stmt = (
            select(ProfileRow)
            .where(not_(ProfileRow.id.in_(list(excluded))))
            .order_by(ProfileRow.created_at.desc())
        )
        return self._all(stmt, Profile)

    # Posts

    def list_posts(self) -> list[Post]:
        return self._all(select(PostRow).order_by(PostRow.created_at.desc()), Post)

    def get_post(self, post_id: str) -> Optional[Post]:
        return self._get(PostRow, post_id, Post)

    def create_post(self, post: Post) -> Post:
        return self._insert(post, PostRow)

    def delete_post(self, post_id: str) -> None:
        with self.Session() as session:
            session.execute(delete(ReactionRow).where(ReactionRow.post_id == post_id))
            session.execute(delete(CommentRow).where(CommentRow.post_id == post_id))
            session.execute(delete(PostRow).where(PostRow.id == post_id))
            session.commit()

    def list_reactions(self, post_id: str) -> list[Reaction]:
        stmt = (
            select(ReactionRow)
            .where(ReactionRow.post_id == post_id)
            .order_by(ReactionRow.created_at.asc())
        )
        return self._all(stmt, Reaction)

    def toggle_reaction(self, post_id: str, user_id: str, emoji: str) -> bool:
        with self.Session() as session:
            existing = session.execute(
                select(ReactionRow).where(
                    ReactionRow.post_id == post_id,
                    ReactionRow.user_id == user_id,
                    ReactionRow.emoji == emoji,
                )
            ).scalars().first()
            if existing:
                session.delete(existing)
                session.commit()
                return False
            session.add(
                _to_row(Reaction(post_id=post_id, user_id=user_id, emoji=emoji), ReactionRow)
            )
            session.commit()
            return True

    def list_comments(self, post_id: str) -> list[Comment]:
        stmt = (
            select(CommentRow)
            .where(CommentRow.post_id == post_id)
            .order_by(CommentRow.created_at.asc())
        )
        return self._all(stmt, Comment)

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        return self._get(CommentRow, comment_id, Comment)

    def create_comment(self, comment: Comment) -> Comment:
        return self._insert(comment, CommentRow)

    def delete_comment(self, comment_id: str) -> None:
        self._execute(delete(CommentRow).where(CommentRow.id == comment_id))

    # Stories

    def list_active_stories(self, now: float) -> list[Story]:
        stmt = (
            select(StoryRow)
            .where(StoryRow.expires_at > to_datetime(now))
            .order_by(StoryRow.created_at.desc())
        )
        return self._all(stmt, Story)

    def create_story(self, story: Story) -> Story:
        return self._insert(story, StoryRow)

    def delete_story(self, story_id: str, user_id: str) -> int:
        return self._execute(
            delete(StoryRow).where(StoryRow.id == story_id, StoryRow.user_id == user_id)
        )

    # Friends

    @staticmethod
    def _involves(user_id: str):
        return or_(FriendshipRow.user1_id == user_id, FriendshipRow.user2_id == user_id)

    def list_friend_ids(self, user_id: str) -> list[str]:
        friendships = self._all(
            select(FriendshipRow)
            .where(self._involves(user_id))
            .order_by(FriendshipRow.created_at.asc()),
            Friendship,
        )
        return [f.friend_of(user_id) for f in friendships]

    def count_friendships(self, user_id: str) -> int:
        return self._count(
            select(func.count()).select_from(FriendshipRow).where(self._involves(user_id))
        )

    def are_friends(self, user_a: str, user_b: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(FriendshipRow)
            .where(
                or_(
                    and_(FriendshipRow.user1_id == user_a, FriendshipRow.user2_id == user_b),
                    and_(FriendshipRow.user1_id == user_b, FriendshipRow.user2_id == user_a),
                )
            )
        )
        return self._count(stmt) > 0

    def create_friendship(self, friendship: Friendship) -> Friendship:
        return self._insert(friendship, FriendshipRow)

    def create_friend_request(self, request: FriendRequest) -> FriendRequest:
        return self._insert(request, FriendRequestRow)

    def get_friend_request(self, request_id: str) -> Optional[FriendRequest]:
        return self._get(FriendRequestRow, request_id, FriendRequest)

    def find_pending_friend_request(
        self, user_a: str, user_b: str
    ) -> Optional[FriendRequest]:
        stmt = select(FriendRequestRow).where(
            FriendRequestRow.status == FriendRequestStatus.PENDING.value,
            or_(
                and_(
                    FriendRequestRow.sender_id == user_a,
                    FriendRequestRow.receiver_id == user_b,
                ),
                and_(
                    FriendRequestRow.sender_id == user_b,
                    FriendRequestRow.receiver_id == user_a,
                ),
            ),
        )
        found = self._all(stmt.limit(1), FriendRequest)
        return found[0] if found else None

    def list_pending_friend_requests(self, receiver_id: str) -> list[FriendRequest]:
        stmt = (
            select(FriendRequestRow)
            .where(
                FriendRequestRow.receiver_id == receiver_id,
                FriendRequestRow.status == FriendRequestStatus.PENDING.value,
            )
            .order_by(FriendRequestRow.created_at.desc())
        )
        return self._all(stmt, FriendRequest)

    def update_friend_request_status(self, request_id: str, status: str) -> None:
        self._execute(
            update(FriendRequestRow)
            .where(FriendRequestRow.id == request_id)
            .values(status=status, updated_at=_utcnow())
        )

    # Projects

    def list_projects(self, user_id: str) -> list[Project]:
        stmt = (
            select(ProjectRow)
            .where(ProjectRow.user_id == user_id)
            .order_by(ProjectRow.created_at.desc())
        )
        return self._all(stmt, Project)

    def count_projects(self, user_id: str) -> int:
        return self._count(
            select(func.count()).select_from(ProjectRow).where(ProjectRow.user_id == user_id)
        )

    def create_project(self, project: Project) -> Project:
        return self._insert(project, ProjectRow)

    def delete_project(self, project_id: str, user_id: str) -> int:
        return self._execute(
            delete(ProjectRow).where(
                ProjectRow.id == project_id, ProjectRow.user_id == user_id
            )
        )

    # Private chats

    def list_chats_for_user(self, user_id: str) -> list[PrivateChat]:
        stmt = (
            select(PrivateChatRow)
            .where(
                or_(PrivateChatRow.user1_id == user_id, PrivateChatRow.user2_id == user_id)
            )
            .order_by(PrivateChatRow.updated_at.desc())
        )
        return self._all(stmt, PrivateChat)

    def get_chat(self, chat_id: str) -> Optional[PrivateChat]:
        return self._get(PrivateChatRow, chat_id, PrivateChat)

    def find_chat_between(self, user_a: str, user_b: str) -> Optional[PrivateChat]:
        stmt = select(PrivateChatRow).where(
            or_(
                and_(PrivateChatRow.user1_id == user_a, PrivateChatRow.user2_id == user_b),
                and_(PrivateChatRow.user1_id == user_b, PrivateChatRow.user2_id == user_a),
            )
        )
        found = self._all(stmt.limit(1), PrivateChat)
        return found[0] if found else None

    def create_chat(self, chat: PrivateChat) -> PrivateChat:
        return self._insert(chat, PrivateChatRow)

    def touch_chat(self, chat_id: str) -> None:
        self._execute(
            update(PrivateChatRow)
            .where(PrivateChatRow.id == chat_id)
            .values(updated_at=_utcnow())
        )

    def list_messages(self, chat_id: str) -> list[PrivateMessage]:
        stmt = (
            select(PrivateMessageRow)
            .where(PrivateMessageRow.chat_id == chat_id)
            .order_by(PrivateMessageRow.created_at.asc())
        )
        return self._all(stmt, PrivateMessage)

    def get_last_message(self, chat_id: str) -> Optional[PrivateMessage]:
        stmt = (
            select(PrivateMessageRow)
            .where(PrivateMessageRow.chat_id == chat_id)
            .order_by(PrivateMessageRow.created_at.desc())
            .limit(1)
        )
        found = self._all(stmt, PrivateMessage)
        return found[0] if found else None

    def count_unread_messages(self, chat_id: str, reader_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(PrivateMessageRow)
            .where(
                PrivateMessageRow.chat_id == chat_id,
                PrivateMessageRow.sender_id != reader_id,
                PrivateMessageRow.read_at.is_(None),
            )
        )
        return self._count(stmt)

    def get_message(self, message_id: str) -> Optional[PrivateMessage]:
        return self._get(PrivateMessageRow, message_id, PrivateMessage)

    def create_message(self, message: PrivateMessage) -> PrivateMessage:
        return self._insert(message, PrivateMessageRow)

    def update_message(self, message_id: str, fields: dict) -> None:
        if not fields:
            return
        self._execute(
            update(PrivateMessageRow)
            .where(PrivateMessageRow.id == message_id)
            .values(**_row_values(PrivateMessage, fields))
        )

    def mark_messages_read(self, chat_id: str, reader_id: str, read_at: float) -> int:
        return self._execute(
            update(PrivateMessageRow)
            .where(
                PrivateMessageRow.chat_id == chat_id,
                PrivateMessageRow.sender_id != reader_id,
                PrivateMessageRow.read_at.is_(None),
            )
            .values(read_at=to_datetime(read_at))
        )

    # Rides

    def list_active_ride_requests(self, now: float) -> list[RideRequest]:
        stmt = (
            select(RideRequestRow)
            .where(
                RideRequestRow.status == RideStatus.ACTIVE.value,
                RideRequestRow.expires_at > to_datetime(now),
            )
            .order_by(RideRequestRow.created_at.desc())
        )
        return self._all(stmt, RideRequest)

    def list_active_ride_offers(self, now: float) -> list[RideOffer]:
        stmt = (
            select(RideOfferRow)
            .where(
                RideOfferRow.status == RideStatus.ACTIVE.value,
                RideOfferRow.expires_at > to_datetime(now),
            )
            .order_by(RideOfferRow.created_at.desc())
        )
        return self._all(stmt, RideOffer)

    def get_ride_request(self, request_id: str) -> Optional[RideRequest]:
        return self._get(RideRequestRow, request_id, RideRequest)

    def get_ride_offer(self, offer_id: str) -> Optional[RideOffer]:
        return self._get(RideOfferRow, offer_id, RideOffer)

    def create_ride_request(self, request: RideRequest) -> RideRequest:
        return self._insert(request, RideRequestRow)

    def create_ride_offer(self, offer: RideOffer) -> RideOffer:
        return self._insert(offer, RideOfferRow)

    def create_ride_match(self, match: RideMatch) -> RideMatch:
        return self._insert(match, RideMatchRow)

    # Books

    def list_books(self) -> list[Book]:
        return self._all(select(BookRow).order_by(BookRow.created_at.desc()), Book)

    def get_book(self, book_id: str) -> Optional[Book]:
        return self._get(BookRow, book_id, Book)

    def create_book(self, book: Book) -> Book:
        return self._insert(book, BookRow)

    def update_book(self, book_id: str, fields: dict) -> Optional[Book]:
        with self.Session() as session:
            try:
                row = session.get(BookRow, book_id)
            except DataError:
                return None
            if not row:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            row.updated_at = _utcnow()
            session.commit()
            return _to_record(row, Book)

    def delete_book(self, book_id: str) -> bool:
        return self._execute(delete(BookRow).where(BookRow.id == book_id)) > 0

    # Groups and channels

    def create_group(self, group: Group) -> Group:
        return self._insert(group, GroupRow)

    def get_group(self, group_id: str) -> Optional[Group]:
        return self._get(GroupRow, group_id, Group)

    def update_group(self, group_id: str, fields: dict) -> Optional[Group]:
        with self.Session() as session:
            try:
                row = session.get(GroupRow, group_id)
            except DataError:
                return None
            if not row:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            row.updated_at = _utcnow()
            session.commit()
            return _to_record(row, Group)

    def list_groups_for_user(self, user_id: str) -> list[Group]:
        stmt = (
            select(GroupRow)
            .join(GroupMemberRow, GroupMemberRow.group_id == GroupRow.id)
            .where(GroupMemberRow.user_id == user_id)
            .order_by(GroupRow.created_at.desc())
        )
        return self._all(stmt, Group)

    def add_group_member(self, member: GroupMember) -> GroupMember:
        return self._insert(member, GroupMemberRow)

    def get_group_member(self, member_id: str) -> Optional[GroupMember]:
        return self._get(GroupMemberRow, member_id, GroupMember)

    def find_group_member(self, group_id: str, user_id: str) -> Optional[GroupMember]:
        stmt = select(GroupMemberRow).where(
            GroupMemberRow.group_id == group_id, GroupMemberRow.user_id == user_id
        )
        found = self._all(stmt.limit(1), GroupMember)
        return found[0] if found else None

    def list_group_members(self, group_id: str) -> list[GroupMember]:
        stmt = (
            select(GroupMemberRow)
            .where(GroupMemberRow.group_id == group_id)
            .order_by(GroupMemberRow.joined_at.asc())
        )
        return self._all(stmt, GroupMember)

    def delete_group_member(self, member_id: str) -> None:
        self._execute(delete(GroupMemberRow).where(GroupMemberRow.id == member_id))

    def create_channel(self, channel: Channel) -> Channel:
        return self._insert(channel, ChannelRow)

    def get_channel(self, channel_id: str) -> Optional[Channel]:
        return self._get(ChannelRow, channel_id, Channel)

    def list_channels(self, group_id: str) -> list[Channel]:
        stmt = (
            select(ChannelRow)
            .where(ChannelRow.group_id == group_id)
            .order_by(ChannelRow.created_at.asc())
        )
        return self._all(stmt, Channel)

    def delete_channel(self, channel_id: str) -> None:
        with self.Session() as session:
            session.execute(
                delete(ChannelMessageRow).where(ChannelMessageRow.channel_id == channel_id)
            )
            session.execute(delete(ChannelRow).where(ChannelRow.id == channel_id))
            session.commit()

    def list_channel_messages(self, channel_id: str) -> list[ChannelMessage]:
        stmt = (
            select(ChannelMessageRow)
            .where(ChannelMessageRow.channel_id == channel_id)
            .order_by(ChannelMessageRow.created_at.asc())
        )
        return self._all(stmt, ChannelMessage)

    def get_channel_message(self, message_id: str) -> Optional[ChannelMessage]:
        return self._get(ChannelMessageRow, message_id, ChannelMessage)

    def create_channel_message(self, message: ChannelMessage) -> ChannelMessage:
        return self._insert(message, ChannelMessageRow)

    def delete_channel_message(self, message_id: str) -> None:
        self._execute(delete(ChannelMessageRow).where(ChannelMessageRow.id == message_id))


class ProfileRow(Base):
    __tablename__ = "profiles"

    id = Column(Id, primary_key=True)
    full_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    university = Column(String, nullable=True)
    program = Column(String, nullable=True)
    occupation = Column(String, nullable=True)
    location = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    skills = Column(String, nullable=True)
    graduation_year = Column(Integer, nullable=True)
    github_url = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class PostRow(Base):
    __tablename__ = "posts"

    id = Column(Id, primary_key=True)
    user_id = Column(Id, nullable=False, index=True)
    content = Column(String, nullable=True)
    media_url = Column(String, nullable=True)
    media_type = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False, index=True)
    updated_at = Column(Timestamp, nullable=False)


class ReactionRow(Base):
    __tablename__ = "post_reactions"

    id = Column(Id, primary_key=True)
    post_id = Column(Id, nullable=False, index=True)
    user_id = Column(Id, nullable=False)
    emoji = Column(String, nullable=False)
    created_at = Column(Timestamp, nullable=False)


class CommentRow(Base):
    __tablename__ = "post_comments"

    id = Column(Id, primary_key=True)
    post_id = Column(Id, nullable=False, index=True)
    user_id = Column(Id, nullable=False)
    content = Column(String, nullable=False)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class StoryRow(Base):
    __tablename__ = "stories"

    id = Column(Id, primary_key=True)
    user_id = Column(Id, nullable=False, index=True)
    media_url = Column(String, nullable=False)
    media_type = Column(String, nullable=False)
    caption = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    expires_at = Column(Timestamp, nullable=False, index=True)


class FriendshipRow(Base):
    __tablename__ = "friendships"

    id = Column(Id, primary_key=True)
    user1_id = Column(Id, nullable=False, index=True)
    user2_id = Column(Id, nullable=False, index=True)
    created_at = Column(Timestamp, nullable=False)


class FriendRequestRow(Base):
    __tablename__ = "friend_requests"

    id = Column(Id, primary_key=True)
    sender_id = Column(Id, nullable=False, index=True)
    receiver_id = Column(Id, nullable=False, index=True)
    status = Column(String, nullable=False)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(Id, primary_key=True)
    user_id = Column(Id, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    project_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    technologies = Column(StringList, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class PrivateChatRow(Base):
    __tablename__ = "private_chats"

    id = Column(Id, primary_key=True)
    user1_id = Column(Id, nullable=False, index=True)
    user2_id = Column(Id, nullable=False, index=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class PrivateMessageRow(Base):
    __tablename__ = "private_messages"

    id = Column(Id, primary_key=True)
    chat_id = Column(Id, nullable=False, index=True)
    sender_id = Column(Id, nullable=False)
    content = Column(String, nullable=True)
    media_url = Column(String, nullable=True)
    media_type = Column(String, nullable=True)
    read_at = Column(Timestamp, nullable=True)
    edited_at = Column(Timestamp, nullable=True)
    deleted_for_sender = Column(Boolean, nullable=False, default=False)
    deleted_for_receiver = Column(Boolean, nullable=False, default=False)
    deleted_for_everyone = Column(Boolean, nullable=False, default=False)
    created_at = Column(Timestamp, nullable=False)


class RideRequestRow(Base):
    __tablename__ = "ride_requests"

    id = Column(Id, primary_key=True)
    student_id = Column(Id, nullable=False, index=True)
    origin_address = Column(String, nullable=False)
    origin_latitude = Column(Float, nullable=False)
    origin_longitude = Column(Float, nullable=False)
    destination_address = Column(String, nullable=False)
    destination_latitude = Column(Float, nullable=False)
    destination_longitude = Column(Float, nullable=False)
    departure_time = Column(Timestamp, nullable=False)
    max_passengers = Column(Integer, nullable=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    expires_at = Column(Timestamp, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class RideOfferRow(Base):
    __tablename__ = "ride_offers"

    id = Column(Id, primary_key=True)
    driver_id = Column(Id, nullable=False, index=True)
    origin_address = Column(String, nullable=False)
    origin_latitude = Column(Float, nullable=False)
    origin_longitude = Column(Float, nullable=False)
    destination_address = Column(String, nullable=False)
    destination_latitude = Column(Float, nullable=False)
    destination_longitude = Column(Float, nullable=False)
    departure_time = Column(Timestamp, nullable=False)
    available_seats = Column(Integer, nullable=False)
    vehicle_description = Column(String, nullable=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    expires_at = Column(Timestamp, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class RideMatchRow(Base):
    __tablename__ = "ride_matches"

    id = Column(Id, primary_key=True)
    request_id = Column(Id, nullable=False, index=True)
    offer_id = Column(Id, nullable=False, index=True)
    status = Column(String, nullable=False)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class BookRow(Base):
    __tablename__ = "books"

    id = Column(Id, primary_key=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    isbn = Column(String, nullable=True)
    publication_year = Column(Integer, nullable=True)
    genre = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class GroupRow(Base):
    __tablename__ = "groups"

    id = Column(Id, primary_key=True)
    owner_id = Column(Id, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    background_image_url = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class GroupMemberRow(Base):
    __tablename__ = "group_members"

    id = Column(Id, primary_key=True)
    group_id = Column(Id, nullable=False, index=True)
    user_id = Column(Id, nullable=False, index=True)
    role = Column(String, nullable=False)
    joined_at = Column(Timestamp, nullable=False)


class ChannelRow(Base):
    __tablename__ = "channels"

    id = Column(Id, primary_key=True)
    group_id = Column(Id, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_by = Column(Id, nullable=False)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)


class ChannelMessageRow(Base):
    __tablename__ = "messages"

    id = Column(Id, primary_key=True)
    channel_id = Column(Id, nullable=False, index=True)
    user_id = Column(Id, nullable=False)
    content = Column(String, nullable=True)
    media_url = Column(String, nullable=True)
    media_type = Column(String, nullable=True)
    created_at = Column(Timestamp, nullable=False, index=True)
    updated_at = Column(Timestamp, nullable=False)
