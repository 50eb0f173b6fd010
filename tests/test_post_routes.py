import unittest
from datetime import datetime, timedelta

from support import AppTestCase


class TestPostRoutes(AppTestCase):
    def test_create_post_and_list_posts(self):
        headers = self._auth_header("alice")

        created = self._create_post(headers, content="hi")
        self.assertEqual(created["content"], "hi")
        self.assertIsNone(created["title"])
        self.assertEqual(created["author"]["username"], "alice")
        self.assertFalse(created["pinned"])
        self.assertEqual(created["photos"], [])

        response = self.client.get("/api/v2/posts", headers=headers)
        self.assertEqual(response.status_code, 200)
        posts = response.get_json()
        self.assertEqual(len(posts), 1)
        self.assertEqual(posts[0]["content"], "hi")
        self.assertEqual(posts[0]["reactions"], [])
        self.assertEqual(posts[0]["comments"], [])
        self.assertEqual(posts[0]["author"]["id"], created["author"]["id"])

    def test_create_post_with_title_and_photos(self):
        headers = self._auth_header("alice")

        created = self._create_post(headers, content="body", title="Title", photos=[3, 1])
        self.assertEqual(created["title"], "Title")
        self.assertEqual(created["photos"], [3, 1])

    def test_create_post_requires_content(self):
        headers = self._auth_header("alice")

        missing = self.client.post("/api/v2/posts", json={"title": "t"}, headers=headers)
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.get_json()["error"], "Content is required")

        blank = self.client.post("/api/v2/posts", json={"content": "  "}, headers=headers)
        self.assertEqual(blank.status_code, 400)

        bad_photos = self.client.post(
            "/api/v2/posts",
            json={"content": "x", "photos": ["abc"]},
            headers=headers,
        )
        self.assertEqual(bad_photos.status_code, 400)
        self.assertTrue(bad_photos.get_json()["error"].startswith("photos.0"))

    def test_post_routes_require_auth(self):
        self.assertEqual(self.client.get("/api/v2/posts").status_code, 401)
        self.assertEqual(
            self.client.post("/api/v2/posts", json={"content": "x"}).status_code, 401
        )

    def test_non_author_cannot_update_or_delete(self):
        alice = self._auth_header("alice")
        bob = self._auth_header("bob")
        post = self._create_post(alice, content="original")

        update = self.client.put(
            f"/api/v2/posts/{post['id']}", json={"content": "hacked"}, headers=bob
        )
        self.assertEqual(update.status_code, 403)

        delete = self.client.delete(f"/api/v2/posts/{post['id']}", headers=bob)
        self.assertEqual(delete.status_code, 403)

        posts = self.client.get("/api/v2/posts", headers=alice).get_json()
        self.assertEqual(posts[0]["content"], "original")

    def test_author_updates_post_but_not_authorship(self):
        alice = self._auth_header("alice")
        bob_id = self._signup("bob")["user"]["id"]
        post = self._create_post(alice, content="original")

        response = self.client.put(
            f"/api/v2/posts/{post['id']}",
            json={"content": "edited", "title": "New", "author": bob_id, "pinned": True},
            headers=alice,
        )
        self.assertEqual(response.status_code, 200)
        updated = response.get_json()
        self.assertEqual(updated["content"], "edited")
        self.assertEqual(updated["title"], "New")
        self.assertEqual(updated["author"]["username"], "alice")
        self.assertFalse(updated["pinned"])

        invalid = self.client.put(
            f"/api/v2/posts/{post['id']}", json={"content": ""}, headers=alice
        )
        self.assertEqual(invalid.status_code, 400)

    def test_admin_can_update_and_delete_any_post(self):
        alice = self._auth_header("alice")
        admin = self._auth_header("moderator", role="admin")
        post = self._create_post(alice, content="original")

        update = self.client.put(
            f"/api/v2/posts/{post['id']}", json={"content": "moderated"}, headers=admin
        )
        self.assertEqual(update.status_code, 200)
        self.assertEqual(update.get_json()["content"], "moderated")
        self.assertEqual(update.get_json()["author"]["username"], "alice")

        delete = self.client.delete(f"/api/v2/posts/{post['id']}", headers=admin)
        self.assertEqual(delete.status_code, 200)
        self.assertEqual(delete.get_json()["message"], "Post deleted successfully.")

        self.assertEqual(self.client.get("/api/v2/posts", headers=alice).get_json(), [])

    def test_author_deletes_post_with_children(self):
        alice = self._auth_header("alice")
        bob = self._auth_header("bob")
        post = self._create_post(alice)
        self.client.post(f"/api/v2/posts/{post['id']}/react", json={"reaction": "like"}, headers=bob)
        self.client.post(f"/api/v2/posts/{post['id']}/comments", json={"comment": "hey"}, headers=bob)

        response = self.client.delete(f"/api/v2/posts/{post['id']}", headers=alice)
        self.assertEqual(response.status_code, 200)

        with self.app.app_context():
            from app.models.comment_model import Comment
            from app.models.reaction_model import Reaction

            self.assertEqual(Comment.query.count(), 0)
            self.assertEqual(Reaction.query.count(), 0)

    def test_unknown_post_returns_404(self):
        headers = self._auth_header("alice")

        update = self.client.put("/api/v2/posts/999", json={"content": "x"}, headers=headers)
        self.assertEqual(update.status_code, 404)
        self.assertEqual(update.get_json()["error"], "Post not found")

        delete = self.client.delete("/api/v2/posts/999", headers=headers)
        self.assertEqual(delete.status_code, 404)

    def test_list_filters_by_author_and_user_feed(self):
        alice = self._auth_header("alice")
        bob = self._auth_header("bob")
        self._create_post(alice, content="alice post")
        bob_post = self._create_post(bob, content="bob post")

        filtered = self.client.get(
            f"/api/v2/posts?userId={bob_post['author']['id']}", headers=alice
        )
        self.assertEqual(filtered.status_code, 200)
        self.assertEqual([p["content"] for p in filtered.get_json()], ["bob post"])

        mine = self.client.get("/api/v2/posts/user", headers=alice)
        self.assertEqual(mine.status_code, 200)
        self.assertEqual([p["content"] for p in mine.get_json()], ["alice post"])

        invalid = self.client.get("/api/v2/posts?userId=abc", headers=alice)
        self.assertEqual(invalid.status_code, 400)

    def test_list_filters_by_date_range(self):
        headers = self._auth_header("alice")
        self._create_post(headers, content="today")

        today = datetime.utcnow().date()
        tomorrow = today + timedelta(days=1)
        yesterday = today - timedelta(days=1)

        future = self.client.get(
            f"/api/v2/posts?startDate={tomorrow.isoformat()}", headers=headers
        )
        self.assertEqual(future.get_json(), [])

        whole_day = self.client.get(
            f"/api/v2/posts?startDate={yesterday.isoformat()}&endDate={today.isoformat()}",
            headers=headers,
        )
        self.assertEqual([p["content"] for p in whole_day.get_json()], ["today"])

        before = self.client.get(
            f"/api/v2/posts?endDate={yesterday.isoformat()}", headers=headers
        )
        self.assertEqual(before.get_json(), [])

        invalid = self.client.get("/api/v2/posts?startDate=yesterday", headers=headers)
        self.assertEqual(invalid.status_code, 400)
        self.assertEqual(invalid.get_json()["error"], "startDate must be an ISO-8601 date")

    def test_pinned_posts_sort_first_and_pin_is_admin_only(self):
        alice = self._auth_header("alice")
        admin = self._auth_header("moderator", role="admin")
        first = self._create_post(alice, content="first")
        self._create_post(alice, content="second")

        forbidden = self.client.post(f"/api/v2/posts/{first['id']}/pin", headers=alice)
        self.assertEqual(forbidden.status_code, 403)

        pinned = self.client.post(f"/api/v2/posts/{first['id']}/pin", headers=admin)
        self.assertEqual(pinned.status_code, 200)
        self.assertEqual(pinned.get_json()["message"], "Post pinned successfully.")

        posts = self.client.get("/api/v2/posts", headers=alice).get_json()
        self.assertEqual([p["content"] for p in posts], ["first", "second"])
        self.assertTrue(posts[0]["pinned"])

        unpinned = self.client.post(f"/api/v2/posts/{first['id']}/unpin", headers=admin)
        self.assertEqual(unpinned.status_code, 200)
        posts = self.client.get("/api/v2/posts", headers=alice).get_json()
        self.assertEqual([p["content"] for p in posts], ["second", "first"])

        missing = self.client.post("/api/v2/posts/999/pin", headers=admin)
        self.assertEqual(missing.status_code, 404)

    def test_pinned_post_still_accepts_updates(self):
        alice = self._auth_header("alice")
        admin = self._auth_header("moderator", role="admin")
        post = self._create_post(alice, content="v1")
        self.client.post(f"/api/v2/posts/{post['id']}/pin", headers=admin)

        response = self.client.put(
            f"/api/v2/posts/{post['id']}", json={"content": "v2"}, headers=alice
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["pinned"])

    def test_concurrent_update_is_rejected_with_conflict(self):
        alice = self._auth_header("alice")
        post = self._create_post(alice, content="v1")

        from sqlalchemy import text

        from app.exceptions import ConflictError
        from app.models.post_model import Post
        from app.models.user_model import User
        from app.services import post_service

        with self.app.app_context():
            author = User.query.filter_by(username="alice").first()
            loaded = self.db.session.get(Post, post["id"])
            self.assertEqual(loaded.version, 1)

            # another writer commits first
            with self.db.engine.begin() as connection:
                connection.execute(
                    text("UPDATE posts SET content = :content, version = version + 1 WHERE id = :id"),
                    {"content": "other writer", "id": post["id"]},
                )

            with self.assertRaises(ConflictError) as ctx:
                post_service.update_post(post["id"], author, {"content": "late write"})
            self.assertEqual(ctx.exception.status_code, 409)

        posts = self.client.get("/api/v2/posts", headers=alice).get_json()
        self.assertEqual(posts[0]["content"], "other writer")

    def test_pinning_bumps_post_version(self):
        alice = self._auth_header("alice")
        admin = self._auth_header("moderator", role="admin")
        post = self._create_post(alice)

        from app.models.post_model import Post

        def stored_version():
            with self.app.app_context():
                return self.db.session.get(Post, post["id"]).version

        self.assertEqual(stored_version(), 1)
        self.client.post(f"/api/v2/posts/{post['id']}/pin", headers=admin)
        self.assertEqual(stored_version(), 2)
        self.client.post(f"/api/v2/posts/{post['id']}/unpin", headers=admin)
        self.assertEqual(stored_version(), 3)


if __name__ == "__main__":
    unittest.main()
