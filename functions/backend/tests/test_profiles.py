import unittest

from backend.db import FriendRequest, Friendship, Project
from backend.tests.helpers import ALICE, BOB, CAROL, ApiTestCase, add_profile


class FriendsTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        add_profile(self.db, CAROL, "Carol")
        self.db.create_friendship(Friendship(user1_id=ALICE, user2_id=BOB))
        self.db.create_friendship(Friendship(user1_id=CAROL, user2_id=ALICE))

    def test_list_friends_from_either_side(self):
        response = self.get(f"/profiles-api/friends/{ALICE}")
        self.assertEqual(response.status_code, 200)
        friends = sorted(response.json(), key=lambda f: f["full_name"])
        self.assertEqual([f["id"] for f in friends], [BOB, CAROL])
        self.assertEqual(friends[0]["bio"], "Driver")
        self.assertEqual(set(friends[0]), {"id", "full_name", "avatar_url", "bio"})

    def test_friends_keep_friendship_order(self):
        self.db.reset()
        for user_id, name in ((ALICE, "Alice"), (BOB, "Bob"), (CAROL, "Carol")):
            add_profile(self.db, user_id, name)
        self.db.create_friendship(
            Friendship(user1_id=ALICE, user2_id=BOB, created_at=200.0)
        )
        self.db.create_friendship(
            Friendship(user1_id=CAROL, user2_id=ALICE, created_at=100.0)
        )
        self.db.create_friendship(
            Friendship(user1_id=ALICE, user2_id="no-profile", created_at=50.0)
        )

        response = self.get(f"/profiles-api/friends/{ALICE}")
        self.assertEqual([f["id"] for f in response.json()], [CAROL, BOB])

    def test_list_friends_of_user_without_friends(self):
        response = self.get("/profiles-api/friends/nobody")
        self.assertEqual(response.json(), [])

    def test_friends_count(self):
        response = self.get(f"/profiles-api/friends-count/{ALICE}")
        self.assertEqual(response.json(), {"count": 2})
        response = self.get(f"/profiles-api/friends-count/{BOB}")
        self.assertEqual(response.json(), {"count": 1})


class ProjectsTests(ApiTestCase):
    def test_create_list_and_count_projects(self):
        response = self.post(
            "/profiles-api/projects",
            {"title": "Florte", "technologies": ["react", "python"]},
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["technologies"], ["react", "python"])

        projects = self.get(f"/profiles-api/projects/{ALICE}").json()
        self.assertEqual([p["title"] for p in projects], ["Florte"])
        self.assertEqual(
            self.get(f"/profiles-api/projects-count/{ALICE}").json(), {"count": 1}
        )
        self.assertEqual(
            self.get(f"/profiles-api/projects-count/{BOB}").json(), {"count": 0}
        )

    def test_project_title_is_required(self):
        response = self.post("/profiles-api/projects", {"title": ""})
        self.assertEqual(response.status_code, 400)

    def test_delete_only_own_project(self):
        theirs = self.db.create_project(Project(user_id=BOB, title="b"))
        mine = self.db.create_project(Project(user_id=ALICE, title="a"))

        self.delete(f"/profiles-api/projects/{theirs.id}")
        self.delete(f"/profiles-api/projects/{mine.id}")
        self.assertEqual(list(self.db.projects), [theirs.id])


class ProfileTests(ApiTestCase):
    def test_get_profile(self):
        response = self.get(f"/profiles-api/profiles/{BOB}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["full_name"], "Bob")

    def test_get_unknown_profile(self):
        response = self.get("/profiles-api/profiles/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Profile not found"})

    def test_update_own_profile_keeps_unset_fields(self):
        response = self.put("/profiles-api/profiles/me", {"bio": "Estudiante ADSO"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["bio"], "Estudiante ADSO")
        self.assertEqual(body["full_name"], "Alice")

    def test_update_creates_missing_profile(self):
        response = self.put(
            "/profiles-api/profiles/me", {"full_name": "Carol"}, user=CAROL
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.db.get_profile(CAROL).full_name, "Carol")


class SuggestedUsersTests(ApiTestCase):
    def test_suggestions_skip_self_friends_and_pending_requests(self):
        add_profile(self.db, CAROL, "Carol")
        dave = add_profile(self.db, "00000000-0000-0000-0000-00000000000d", "Dave")
        self.db.create_friendship(Friendship(user1_id=BOB, user2_id=ALICE))

        response = self.get("/profiles-api/suggested-users")
        self.assertEqual(response.status_code, 200)
        suggested = response.json()
        self.assertEqual({u["id"] for u in suggested}, {CAROL, dave.id})
        self.assertEqual(set(suggested[0]), {"id", "full_name", "avatar_url", "bio"})

        self.db.create_friend_request(FriendRequest(sender_id=dave.id, receiver_id=ALICE))
        suggested = self.get("/profiles-api/suggested-users").json()
        self.assertEqual([u["id"] for u in suggested], [CAROL])

    def test_answered_requests_do_not_hide_suggestions(self):
        add_profile(self.db, CAROL, "Carol")
        self.db.create_friend_request(
            FriendRequest(sender_id=ALICE, receiver_id=CAROL, status="rejected")
        )
        suggested = self.get("/profiles-api/suggested-users", user=BOB).json()
        self.assertEqual({u["id"] for u in suggested}, {ALICE, CAROL})
        suggested = self.get("/profiles-api/suggested-users").json()
        self.assertEqual({u["id"] for u in suggested}, {BOB, CAROL})

    def test_suggestions_need_a_token(self):
        response = self.get("/profiles-api/suggested-users", user=None)
        self.assertEqual(response.status_code, 401)


class FriendRequestTests(ApiTestCase):
    def test_send_and_accept(self):
        response = self.post("/profiles-api/friend-requests", {"receiver_id": BOB})
        self.assertEqual(response.status_code, 201)
        request_id = response.json()["id"]

        pending = self.get("/profiles-api/friend-requests", user=BOB).json()
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0]["sender_profile"]["full_name"], "Alice")

        response = self.put(
            f"/profiles-api/friend-requests/{request_id}",
            {"status": "accepted"},
            user=BOB,
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.db.are_friends(ALICE, BOB))
        self.assertEqual(self.get("/profiles-api/friend-requests", user=BOB).json(), [])

    def test_reject_does_not_create_friendship(self):
        request = self.db.create_friend_request(
            FriendRequest(sender_id=ALICE, receiver_id=BOB)
        )
        response = self.put(
            f"/profiles-api/friend-requests/{request.id}",
            {"status": "rejected"},
            user=BOB,
        )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(self.db.are_friends(ALICE, BOB))
        self.assertEqual(self.db.get_friend_request(request.id).status, "rejected")

    def test_only_receiver_can_answer(self):
        request = self.db.create_friend_request(
            FriendRequest(sender_id=ALICE, receiver_id=BOB)
        )
        response = self.put(
            f"/profiles-api/friend-requests/{request.id}", {"status": "accepted"}
        )
        self.assertEqual(response.status_code, 403)

    def test_answered_request_cannot_be_answered_again(self):
        request = self.db.create_friend_request(
            FriendRequest(sender_id=ALICE, receiver_id=BOB, status="rejected")
        )
        response = self.put(
            f"/profiles-api/friend-requests/{request.id}",
            {"status": "accepted"},
            user=BOB,
        )
        self.assertEqual(response.status_code, 409)

    def test_invalid_answer_status(self):
        request = self.db.create_friend_request(
            FriendRequest(sender_id=ALICE, receiver_id=BOB)
        )
        response = self.put(
            f"/profiles-api/friend-requests/{request.id}", {"status": "maybe"}, user=BOB
        )
        self.assertEqual(response.status_code, 400)

    def test_duplicate_and_self_requests(self):
        response = self.post("/profiles-api/friend-requests", {"receiver_id": ALICE})
        self.assertEqual(response.status_code, 400)

        self.post("/profiles-api/friend-requests", {"receiver_id": BOB})
        response = self.post(
            "/profiles-api/friend-requests", {"receiver_id": ALICE}, user=BOB
        )
        self.assertEqual(response.status_code, 409)

    def test_request_to_existing_friend(self):
        self.db.create_friendship(Friendship(user1_id=BOB, user2_id=ALICE))
        response = self.post("/profiles-api/friend-requests", {"receiver_id": BOB})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {"error": "Already friends"})


if __name__ == "__main__":
    unittest.main()
