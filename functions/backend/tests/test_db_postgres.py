import time
import unittest
from datetime import datetime, timezone

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
    Project,
    RideMatch,
    RideOffer,
    RideRequest,
    Story,
)
from backend.db_postgres import PostgresDbClient, StoryRow, to_epoch

ROUTE = dict(
    origin_address="A",
    origin_latitude=4.6,
    origin_longitude=-74.0,
    destination_address="B",
    destination_latitude=4.7,
    destination_longitude=-74.1,
)


class PostgresDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the Postgres client logic.
    """

    def setUp(self):
        self.db = PostgresDbClient("sqlite+pysqlite:///:memory:", create_tables=True)

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            PostgresDbClient("")

    def test_profile_upsert(self):
        created = self.db.upsert_profile("u1", {"full_name": "Ana"})
        self.assertEqual(created.full_name, "Ana")

        updated = self.db.upsert_profile("u1", {"bio": "hola"})
        self.assertEqual(updated.full_name, "Ana")
        self.assertEqual(updated.bio, "hola")
        self.assertEqual(set(self.db.get_profiles(["u1", "u2"])), {"u1"})
        self.assertEqual(self.db.get_profiles([]), {})

    def test_posts_reactions_and_comments(self):
        old = self.db.create_post(Post(user_id="u1", content="old", created_at=1.0))
        new = self.db.create_post(Post(user_id="u1", content="new", created_at=2.0))
        self.assertEqual([p.id for p in self.db.list_posts()], [new.id, old.id])

        self.assertTrue(self.db.toggle_reaction(old.id, "u2", "👍"))
        self.assertEqual(len(self.db.list_reactions(old.id)), 1)
        self.assertFalse(self.db.toggle_reaction(old.id, "u2", "👍"))
        self.assertEqual(self.db.list_reactions(old.id), [])

        comment = self.db.create_comment(Comment(post_id=old.id, user_id="u2", content="c"))
        self.assertEqual(self.db.get_comment(comment.id).content, "c")
        self.db.toggle_reaction(old.id, "u2", "❤️")

        self.db.delete_post(old.id)
        self.assertIsNone(self.db.get_post(old.id))
        self.assertEqual(self.db.list_comments(old.id), [])
        self.assertEqual(self.db.list_reactions(old.id), [])

    def test_stories(self):
        now = time.time()
        active = self.db.create_story(Story(user_id="u1", media_url="a", media_type="image"))
        self.db.create_story(
            Story(user_id="u1", media_url="b", media_type="image", expires_at=now - 1)
        )
        self.assertEqual([s.id for s in self.db.list_active_stories(now)], [active.id])

        self.assertEqual(self.db.delete_story(active.id, "u2"), 0)
        self.assertEqual(self.db.delete_story(active.id, "u1"), 1)

    def test_timestamps_are_timezone_aware_columns(self):
        expired = datetime(2020, 1, 1, tzinfo=timezone.utc)
        with self.db.Session() as session:
            session.add(
                StoryRow(
                    id="s-old",
                    user_id="u1",
                    media_url="a",
                    media_type="image",
                    created_at=expired,
                    expires_at=expired,
                )
            )
            session.commit()
        fresh = self.db.create_story(Story(user_id="u1", media_url="b", media_type="image"))

        stories = self.db.list_active_stories(time.time())
        self.assertEqual([s.id for s in stories], [fresh.id])

        with self.db.Session() as session:
            row = session.get(StoryRow, fresh.id)
            self.assertIsInstance(row.expires_at, datetime)
            self.assertAlmostEqual(to_epoch(row.expires_at), fresh.expires_at, places=3)
        rendered = stories[0].as_dict()
        self.assertTrue(rendered["created_at"].endswith("+00:00"))

    def test_to_epoch_treats_naive_values_as_utc(self):
        self.assertEqual(to_epoch(datetime(1970, 1, 1, 0, 1)), 60.0)
        self.assertEqual(to_epoch(datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)), 60.0)
        self.assertIsNone(to_epoch(None))

    def test_groups_members_and_channels(self):
        group = self.db.create_group(Group(owner_id="u1", name="ADSO", created_at=1.0))
        other = self.db.create_group(Group(owner_id="u3", name="Otro", created_at=2.0))
        admin = self.db.add_group_member(
            GroupMember(group_id=group.id, user_id="u1", role="admin", joined_at=1.0)
        )
        member = self.db.add_group_member(
            GroupMember(group_id=group.id, user_id="u2", joined_at=2.0)
        )
        self.db.add_group_member(GroupMember(group_id=other.id, user_id="u2"))

        self.assertEqual(
            [g.id for g in self.db.list_groups_for_user("u2")], [other.id, group.id]
        )
        self.assertEqual([g.id for g in self.db.list_groups_for_user("u1")], [group.id])
        self.assertEqual(self.db.find_group_member(group.id, "u1").id, admin.id)
        self.assertTrue(self.db.get_group_member(admin.id).is_admin)
        self.assertIsNone(self.db.find_group_member(group.id, "u3"))
        self.assertEqual(
            [m.id for m in self.db.list_group_members(group.id)], [admin.id, member.id]
        )

        updated = self.db.update_group(group.id, {"description": "Grupo de estudio"})
        self.assertEqual(updated.description, "Grupo de estudio")
        self.assertEqual(updated.name, "ADSO")
        self.assertIsNone(self.db.update_group("missing", {"name": "x"}))

        self.db.delete_group_member(member.id)
        self.assertIsNone(self.db.get_group_member(member.id))

    def test_channels_and_channel_messages(self):
        group = self.db.create_group(Group(owner_id="u1", name="ADSO"))
        general = self.db.create_channel(
            Channel(group_id=group.id, name="general", created_by="u1", created_at=1.0)
        )
        voice = self.db.create_channel(
            Channel(
                group_id=group.id, name="voz", type="voice", created_by="u1", created_at=2.0
            )
        )
        self.assertEqual(
            [c.id for c in self.db.list_channels(group.id)], [general.id, voice.id]
        )

        second = self.db.create_channel_message(
            ChannelMessage(channel_id=general.id, user_id="u2", content="b", created_at=2.0)
        )
        first = self.db.create_channel_message(
            ChannelMessage(channel_id=general.id, user_id="u1", content="a", created_at=1.0)
        )
        self.assertEqual(
            [m.id for m in self.db.list_channel_messages(general.id)], [first.id, second.id]
        )
        self.assertEqual(self.db.get_channel_message(first.id).content, "a")

        self.db.delete_channel_message(first.id)
        self.assertIsNone(self.db.get_channel_message(first.id))

        self.db.delete_channel(general.id)
        self.assertIsNone(self.db.get_channel(general.id))
        self.assertEqual(self.db.list_channel_messages(general.id), [])
        self.assertEqual([c.id for c in self.db.list_channels(group.id)], [voice.id])

    def test_suggested_profiles(self):
        for user_id in ("u1", "u2", "u3", "u4"):
            self.db.upsert_profile(user_id, {"full_name": user_id})
        self.db.create_friendship(Friendship(user1_id="u2", user2_id="u1"))
        self.db.create_friend_request(FriendRequest(sender_id="u1", receiver_id="u3"))
        self.db.create_friend_request(
            FriendRequest(sender_id="u4", receiver_id="u1", status="rejected")
        )

        self.assertEqual([p.id for p in self.db.list_suggested_profiles("u1")], ["u4"])
        self.assertEqual(
            sorted(p.id for p in self.db.list_suggested_profiles("u4")), ["u1", "u2", "u3"]
        )

    def test_friendships_and_requests(self):
        self.db.create_friendship(Friendship(user1_id="u1", user2_id="u2"))
        self.db.create_friendship(Friendship(user1_id="u3", user2_id="u1"))
        self.assertEqual(sorted(self.db.list_friend_ids("u1")), ["u2", "u3"])
        self.assertEqual(self.db.count_friendships("u1"), 2)
        self.assertTrue(self.db.are_friends("u2", "u1"))
        self.assertFalse(self.db.are_friends("u2", "u3"))

        request = self.db.create_friend_request(FriendRequest(sender_id="u2", receiver_id="u3"))
        self.assertEqual(self.db.find_pending_friend_request("u3", "u2").id, request.id)
        self.assertEqual(
            [r.id for r in self.db.list_pending_friend_requests("u3")], [request.id]
        )
        self.db.update_friend_request_status(request.id, "accepted")
        self.assertEqual(self.db.get_friend_request(request.id).status, "accepted")
        self.assertIsNone(self.db.find_pending_friend_request("u2", "u3"))

    def test_projects(self):
        project = self.db.create_project(
            Project(user_id="u1", title="Florte", technologies=["react", "python"])
        )
        self.assertEqual(self.db.list_projects("u1")[0].technologies, ["react", "python"])
        self.assertEqual(self.db.count_projects("u1"), 1)
        self.assertEqual(self.db.delete_project(project.id, "u2"), 0)
        self.assertEqual(self.db.delete_project(project.id, "u1"), 1)
        self.assertEqual(self.db.count_projects("u1"), 0)

    def test_chats_and_messages(self):
        chat = self.db.create_chat(PrivateChat(user1_id="u1", user2_id="u2", updated_at=1.0))
        self.assertEqual(self.db.find_chat_between("u2", "u1").id, chat.id)
        self.assertIsNone(self.db.find_chat_between("u1", "u3"))

        first = self.db.create_message(
            PrivateMessage(chat_id=chat.id, sender_id="u1", content="hola", created_at=1.0)
        )
        last = self.db.create_message(
            PrivateMessage(chat_id=chat.id, sender_id="u2", content="hey", created_at=2.0)
        )
        self.assertEqual([m.id for m in self.db.list_messages(chat.id)], [first.id, last.id])
        self.assertEqual(self.db.get_last_message(chat.id).id, last.id)
        self.assertEqual(self.db.count_unread_messages(chat.id, "u1"), 1)

        self.assertEqual(self.db.mark_messages_read(chat.id, "u1", 5.0), 1)
        self.assertEqual(self.db.count_unread_messages(chat.id, "u1"), 0)
        self.assertEqual(self.db.get_message(last.id).read_at, 5.0)
        self.assertIsNone(self.db.get_message(first.id).read_at)

        self.db.update_message(first.id, {"deleted_for_sender": True})
        self.assertTrue(self.db.get_message(first.id).deleted_for_sender)

        self.db.touch_chat(chat.id)
        self.assertGreater(self.db.get_chat(chat.id).updated_at, 1.0)
        self.assertEqual([c.id for c in self.db.list_chats_for_user("u2")], [chat.id])

    def test_rides(self):
        now = time.time()
        request = self.db.create_ride_request(
            RideRequest(student_id="u1", departure_time=now + 60, expires_at=now + 60, **ROUTE)
        )
        self.db.create_ride_request(
            RideRequest(student_id="u1", departure_time=now - 60, expires_at=now - 60, **ROUTE)
        )
        offer = self.db.create_ride_offer(
            RideOffer(
                driver_id="u2",
                departure_time=now + 60,
                expires_at=now + 60,
                available_seats=2,
                **ROUTE,
            )
        )
        self.assertEqual([r.id for r in self.db.list_active_ride_requests(now)], [request.id])
        self.assertEqual([o.id for o in self.db.list_active_ride_offers(now)], [offer.id])

        match = self.db.create_ride_match(RideMatch(request_id=request.id, offer_id=offer.id))
        self.assertEqual(match.status, "pending")

    def test_books(self):
        book = self.db.create_book(Book(title="María", author="Jorge Isaacs"))
        self.assertEqual([b.id for b in self.db.list_books()], [book.id])

        updated = self.db.update_book(book.id, {"genre": "Novela"})
        self.assertEqual(updated.genre, "Novela")
        self.assertEqual(updated.title, "María")
        self.assertIsNone(self.db.update_book("missing", {"genre": "x"}))

        self.assertTrue(self.db.delete_book(book.id))
        self.assertFalse(self.db.delete_book(book.id))
        self.assertIsNone(self.db.get_book(book.id))


if __name__ == "__main__":
    unittest.main()
