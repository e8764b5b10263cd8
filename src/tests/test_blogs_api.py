"""HTTP-level tests for the blog endpoints: role gates, envelopes, listing."""

from __future__ import annotations

import uuid
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from access_control.roles import Role
from blogs.models import Blog, Status
from tests.utils import RedisPatchMixin, auth_client, blog_payload, create_user, make_blog, set_created_at


class BlogAccessTests(RedisPatchMixin, TestCase):
    """Role gate and ownership checks on each blog operation."""

    @classmethod
    def setUpTestData(cls):
        cls.subscriber = create_user("reader")
        cls.author = create_user("scribe", role=Role.AUTHOR)
        cls.editor = create_user("editor", role=Role.EDITOR)
        cls.other_editor = create_user("rival", role=Role.EDITOR)
        cls.admin = create_user("admin", role=Role.ADMIN)

    def setUp(self):
        self.anonymous = APIClient()
        self.blog = make_blog(self.editor, "Lisbon Tram Rides")

    def test_list_and_retrieve_are_public(self):
        self.assertEqual(self.anonymous.get("/blogs/").status_code, 200)
        self.assertEqual(self.anonymous.get(f"/blogs/{self.blog.slug}/").status_code, 200)

    def test_create_without_credentials_401(self):
        response = self.anonymous.post("/blogs/", blog_payload("Anonymous Post"), format="json")
        body = response.json()

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])
        self.assertFalse(Blog.objects.filter(title="Anonymous Post").exists())

    def test_create_below_editor_403(self):
        for user in (self.subscriber, self.author):
            response = auth_client(user).post("/blogs/", blog_payload(f"Post by {user.username}"), format="json")
            self.assertEqual(response.status_code, 403)
        self.assertEqual(Blog.objects.count(), 1)

    def test_editor_creates_post(self):
        response = auth_client(self.editor).post("/blogs/", blog_payload("Porto Wine Cellars"), format="json")
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["errors"], [])
        self.assertEqual(body["message"], "Blog created successfully")
        self.assertEqual(body["data"]["slug"], "porto-wine-cellars")
        self.assertEqual(body["data"]["author"]["username"], "editor")
        self.assertEqual(body["data"]["stats"], {"views": 0, "likes": 0, "shares": 0, "comments": 0})

    def test_duplicate_slug_400(self):
        response = auth_client(self.editor).post("/blogs/", blog_payload("Lisbon: Tram Rides"), format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["errors"], ["A blog with similar title already exists."])

    def test_missing_required_fields_400(self):
        response = auth_client(self.editor).post("/blogs/", {"title": "Only a title"}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(body["data"])
        self.assertIn("content", body["errors"][0])

    def test_invalid_category_400(self):
        payload = blog_payload("Somewhere Strange", category="Space")
        response = auth_client(self.editor).post("/blogs/", payload, format="json")
        self.assertEqual(response.status_code, 400)

    def test_owner_updates_post(self):
        response = auth_client(self.editor).patch(
            f"/blogs/{self.blog.pk}/", {"status": Status.PUBLISHED}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["message"], "Blog updated successfully")
        self.assertEqual(body["data"]["status"], Status.PUBLISHED)
        self.assertIsNotNone(body["data"]["published_at"])

    def test_put_is_partial(self):
        response = auth_client(self.editor).put(f"/blogs/{self.blog.pk}/", {"excerpt": "Short"}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["excerpt"], "Short")
        self.assertEqual(body["data"]["title"], "Lisbon Tram Rides")

    def test_other_editor_cannot_update_403(self):
        response = auth_client(self.other_editor).patch(
            f"/blogs/{self.blog.pk}/", {"title": "Taken Over"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 403)
        self.assertEqual(body["errors"], ["Not authorized to update this blog"])
        self.blog.refresh_from_db()
        self.assertEqual(self.blog.title, "Lisbon Tram Rides")

    def test_admin_updates_any_post(self):
        response = auth_client(self.admin).patch(f"/blogs/{self.blog.pk}/", {"featured": True}, format="json")
        self.assertEqual(response.status_code, 200)

    def test_author_cannot_update_403(self):
        response = auth_client(self.author).patch(f"/blogs/{self.blog.pk}/", {"featured": True}, format="json")
        self.assertEqual(response.status_code, 403)

    def test_update_missing_post_404(self):
        response = auth_client(self.editor).patch(f"/blogs/{uuid.uuid4()}/", {"featured": True}, format="json")
        self.assertEqual(response.status_code, 404)

    def test_delete_flow(self):
        self.assertEqual(auth_client(self.other_editor).delete(f"/blogs/{self.blog.pk}/").status_code, 403)

        response = auth_client(self.editor).delete(f"/blogs/{self.blog.pk}/")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(body["data"])
        self.assertEqual(body["message"], "Blog deleted successfully")
        self.assertFalse(Blog.objects.filter(pk=self.blog.pk).exists())

    def test_bulk_requires_admin(self):
        payload = {"action": "publish", "blog_ids": [str(self.blog.pk)]}

        self.assertEqual(self.anonymous.post("/blogs/bulk/", payload, format="json").status_code, 401)
        self.assertEqual(auth_client(self.author).post("/blogs/bulk/", payload, format="json").status_code, 403)
        self.assertEqual(auth_client(self.editor).post("/blogs/bulk/", payload, format="json").status_code, 403)
        self.blog.refresh_from_db()
        self.assertEqual(self.blog.status, Status.DRAFT)

    def test_admin_bulk_publish(self):
        second = make_blog(self.editor, "Sintra Palaces")
        payload = {"action": "publish", "blog_ids": [str(self.blog.pk), str(second.pk), str(uuid.uuid4())]}

        response = auth_client(self.admin).post("/blogs/bulk/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"], {"modified_count": 2})
        self.assertEqual(Blog.objects.filter(status=Status.PUBLISHED).count(), 2)

    def test_admin_bulk_unknown_action_400(self):
        payload = {"action": "explode", "blog_ids": [str(self.blog.pk)]}
        response = auth_client(self.admin).post("/blogs/bulk/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["errors"], ["Invalid bulk action."])

    def test_admin_bulk_empty_ids_400(self):
        payload = {"action": "publish", "blog_ids": []}
        response = auth_client(self.admin).post("/blogs/bulk/", payload, format="json")
        self.assertEqual(response.status_code, 400)

    def test_stats_overview_requires_editor(self):
        self.assertEqual(auth_client(self.author).get("/blogs/stats/overview/").status_code, 403)

        response = auth_client(self.editor).get("/blogs/stats/overview/")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["errors"], [])
        self.assertEqual(body["data"]["total_blogs"], 1)


class BlogReadApiTests(RedisPatchMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.editor = create_user("hiker", role=Role.EDITOR)
        cls.blog = make_blog(cls.editor, "Patagonia on Foot", status=Status.PUBLISHED)

    def test_retrieve_by_slug_counts_view(self):
        client = APIClient()
        first = client.get("/blogs/patagonia-on-foot/").json()
        second = client.get(f"/blogs/{self.blog.pk}/").json()

        self.assertEqual(first["data"]["stats"]["views"], 1)
        self.assertEqual(second["data"]["stats"]["views"], 2)
        self.assertEqual(first["data"]["author"]["username"], "hiker")

    def test_retrieve_uuid_shaped_slug(self):
        blog = make_blog(self.editor, "deadbeefdeadbeefdeadbeefdeadbeef")

        response = APIClient().get("/blogs/deadbeefdeadbeefdeadbeefdeadbeef/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["id"], str(blog.pk))

    def test_retrieve_unknown_404(self):
        response = APIClient().get("/blogs/nowhere-to-be-found/")
        body = response.json()

        self.assertEqual(response.status_code, 404)
        self.assertIsNone(body["data"])
        self.assertEqual(body["errors"], ["Blog not found"])


class BlogListTests(RedisPatchMixin, TestCase):
    """Filters, sorting, and pagination on GET /blogs/."""

    @classmethod
    def setUpTestData(cls):
        cls.editor = create_user("lister", role=Role.EDITOR)
        cls.other = create_user("second", role=Role.EDITOR)
        now = timezone.now()

        cls.kyoto = make_blog(cls.editor, "Kyoto Gardens", status=Status.PUBLISHED, featured=True)
        cls.lima = make_blog(
            cls.editor, "Lima Street Food", category="Food", tags=["ceviche", "Peru"], status=Status.PUBLISHED
        )
        cls.alps = make_blog(
            cls.other, "Alpine Huts", category="Mountain", tags=["hiking"], content="Snow and huts everywhere."
        )
        set_created_at(cls.kyoto, now - timedelta(days=3))
        set_created_at(cls.lima, now - timedelta(days=2))
        set_created_at(cls.alps, now - timedelta(days=1))
        Blog.objects.filter(pk=cls.kyoto.pk).update(views=30)
        Blog.objects.filter(pk=cls.lima.pk).update(views=10)
        Blog.objects.filter(pk=cls.alps.pk).update(views=20)

    def _list(self, **params):
        response = APIClient().get("/blogs/", params)
        self.assertEqual(response.status_code, 200)
        return response.json()["data"]

    @staticmethod
    def _titles(page):
        return [blog["title"] for blog in page["blogs"]]

    def test_default_is_newest_first_with_page_metadata(self):
        page = self._list()

        self.assertEqual(self._titles(page), ["Alpine Huts", "Lima Street Food", "Kyoto Gardens"])
        self.assertEqual(page["total"], 3)
        self.assertEqual(page["total_pages"], 1)
        self.assertEqual(page["current_page"], 1)

    def test_pagination_with_limit(self):
        page = self._list(limit=2, page=2)

        self.assertEqual(self._titles(page), ["Kyoto Gardens"])
        self.assertEqual(page["total"], 3)
        self.assertEqual(page["total_pages"], 2)
        self.assertEqual(page["current_page"], 2)

    def test_sort_by_views_ascending(self):
        page = self._list(sortBy="views", sortOrder="asc")
        self.assertEqual(self._titles(page), ["Lima Street Food", "Alpine Huts", "Kyoto Gardens"])

    def test_sort_by_title(self):
        page = self._list(sortBy="title", sortOrder="asc")
        self.assertEqual(self._titles(page), ["Alpine Huts", "Kyoto Gardens", "Lima Street Food"])

    def test_invalid_sort_field_400(self):
        response = APIClient().get("/blogs/", {"sortBy": "password"})
        self.assertEqual(response.status_code, 400)

    def test_filters_are_combined(self):
        self.assertEqual(self._titles(self._list(category="Food")), ["Lima Street Food"])
        self.assertEqual(self._titles(self._list(status=Status.DRAFT)), ["Alpine Huts"])
        self.assertEqual(self._titles(self._list(featured="true")), ["Kyoto Gardens"])
        self.assertEqual(
            self._titles(self._list(author=str(self.editor.pk))), ["Lima Street Food", "Kyoto Gardens"]
        )
        self.assertEqual(self._titles(self._list(author=str(self.editor.pk), category="Mountain")), [])

    def test_search_matches_title_content_and_tags(self):
        self.assertEqual(self._titles(self._list(search="gardens")), ["Kyoto Gardens"])
        self.assertEqual(self._titles(self._list(search="SNOW")), ["Alpine Huts"])
        self.assertEqual(self._titles(self._list(search="ceviche")), ["Lima Street Food"])

    def test_search_compares_each_tag_not_stored_json(self):
        make_blog(self.other, "Vienna Coffee Houses", tags=["Café", "coffee"], content="Strudel and strong brews.")

        self.assertEqual(self._titles(self._list(search="café")), ["Vienna Coffee Houses"])
        self.assertEqual(self._titles(self._list(search="CAF")), ["Vienna Coffee Houses"])
        self.assertEqual(self._list(search='", "')["total"], 0)
        self.assertEqual(self._list(search="[")["total"], 0)

    def test_listing_does_not_count_views(self):
        self._list()
        self.assertEqual(Blog.objects.get(pk=self.kyoto.pk).views, 30)
