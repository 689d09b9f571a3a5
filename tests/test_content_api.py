"""
HTTP tests for the content-kind endpoints and the unified content routes.
"""

from content import repository as content_repository
from fakes import bearer


def image(name: str = "photo.jpg", data: bytes = b"jpeg-bytes"):
    return (name, data, "image/jpeg")


class TestCreateArticle:
    def test_multipart_create(self, client, store, author):
        store.add_tag("t1", "Energy", "طاقة")

        response = client.post(
            "/articles",
            data={
                "title": "Solar plant",
                "title_ar": "محطة شمسية",
                "content": "Body",
                "status": "published",
                "tag_ids": "t1",
                "tags": '{"name":"Water"},{"name":"Grid","name_ar":"شبكة"}',
            },
            files=[("featured_media", image("cover.jpg")), ("images[]", image("a.jpg")), ("images[]", image("b.jpg"))],
            headers={**bearer(author), "Accept-Language": "ar"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "محطة شمسية"
        assert [t["name"] for t in body["tags"]] == ["Energy", "Water", "Grid"]
        assert body["featured_media"]["filename"] == "cover.jpg"
        assert [f["filename"] for f in body["images"]] == ["a.jpg", "b.jpg"]
        assert body["author_email"] == author["email"]

    def test_camel_case_field_names(self, client, store, author):
        store.add_tag("t1", "Energy")

        response = client.post(
            "/articles",
            data={"title": "Solar plant", "content": "Body", "tagIds": "t1"},
            files=[("featuredMedia", image("cover.jpg")), ("videos[]", ("clip.mp4", b"mp4", "video/mp4"))],
            headers=bearer(author),
        )

        assert response.status_code == 201
        body = response.json()
        assert [t["id"] for t in body["tags"]] == ["t1"]
        assert body["featured_media"]["filename"] == "cover.jpg"
        assert [v["filename"] for v in body["videos"]] == ["clip.mp4"]

    def test_status_defaults_to_draft(self, client, store, author):
        response = client.post("/articles", data={"title": "x", "content": "y"}, headers=bearer(author))

        assert response.status_code == 201
        assert response.json()["status"] == "draft"
        assert next(iter(store.items["articles"].values()))["status"] == "draft"

    def test_oversized_upload_is_413(self, client, store, author, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "4")

        response = client.post(
            "/articles",
            data={"title": "x", "content": "y"},
            files=[("images[]", image("a.jpg", b"0123456789"))],
            headers=bearer(author),
        )

        assert response.status_code == 413
        assert response.json()["detail"] == "File 'a.jpg' is too large. Max is 4 bytes."
        assert store.items["articles"] == {}

    def test_requires_authentication(self, client, store):
        response = client.post("/articles", data={"title": "x", "content": "y"})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_viewer_forbidden(self, client, store, viewer):
        response = client.post("/articles", data={"title": "x", "content": "y"}, headers=bearer(viewer))

        assert response.status_code == 403

    def test_missing_title(self, client, store, author):
        response = client.post("/articles", data={"content": "y"}, headers=bearer(author))

        assert response.status_code == 400
        assert "title" in response.json()["detail"]

    def test_string_in_upload_field(self, client, store, author):
        response = client.post(
            "/articles",
            data={"title": "x", "content": "y", "images": "not-a-file"},
            headers=bearer(author),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "images must be file uploads, not strings"
        assert store.items["articles"] == {}

    def test_malformed_tags(self, client, store, author):
        response = client.post(
            "/articles",
            data={"title": "x", "content": "y", "tags": "[{oops"},
            headers=bearer(author),
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid JSON format for tags", "code": "MALFORMED_INPUT"}

    def test_unknown_category(self, client, store, author):
        response = client.post(
            "/articles",
            data={"title": "x", "content": "y", "category_id": "nope"},
            headers=bearer(author),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Category with ID nope not found"

    def test_unknown_tag_rolls_back(self, client, store, author):
        response = client.post(
            "/articles",
            data={"title": "x", "content": "y", "tag_ids": "ghost"},
            headers=bearer(author),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CREATION_FAILED"
        assert store.items["articles"] == {}


class TestReadArticles:
    def test_published_listing(self, client, store):
        store.add_item("articles", title="One", title_ar="واحد", content="c")
        store.add_item("articles", title="Hidden", content="c", status="draft")

        response = client.get("/articles", headers={"Accept-Language": "ar"})

        body = response.json()
        assert response.status_code == 200
        assert [a["title"] for a in body["articles"]] == ["واحد"]
        assert body["total_count"] == 1

    def test_draft_is_not_readable(self, client, store):
        row = store.add_item("articles", title="Hidden", content="c", status="draft")

        response = client.get(f"/articles/{row['id']}")

        assert response.status_code == 400


class TestTenders:
    def test_create_with_files(self, client, store, author):
        response = client.post(
            "/tenders",
            data={"title": "Road works", "description": "Resurfacing", "reference_number": "RFP-7"},
            files=[("files", ("terms.pdf", b"%PDF", "application/pdf"))],
            headers=bearer(author),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "draft"
        assert body["files"][0]["mimetype"] == "application/pdf"

    def test_delete_by_owner(self, client, store, author):
        row = store.add_item("tenders", title="T", author_id=author["id"], files=[])

        response = client.delete(f"/tenders/{row['id']}", headers=bearer(author))

        assert response.status_code == 200
        assert store.items["tenders"] == {}


class TestAnnouncements:
    def test_listing_shape(self, client, store):
        store.add_item("announcements", title="Notice", description="d")

        body = client.get("/announcements").json()

        assert set(body) == {"announcements", "total_count", "page", "limit", "total_pages"}
        assert body["announcements"][0]["title"] == "Notice"

    def test_listing_failure_is_500(self, client, store, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("db down")

        monkeypatch.setattr(content_repository, "list_page", broken)

        response = client.get("/announcements")

        assert response.status_code == 500
        assert response.json()["detail"] == "db down"

    def test_unpublished_lookup_is_400(self, client, store):
        row = store.add_item("announcements", title="Draft", description="d", status="draft")

        response = client.get(f"/announcements/{row['id']}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Announcement not found or not published"

    def test_lookup_failure_is_400(self, client, store, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("db down")

        monkeypatch.setattr(content_repository, "find_by_id", broken)

        response = client.get("/announcements/any")

        assert response.status_code == 400
        assert response.json()["detail"] == "db down"


class TestUnifiedContent:
    def test_include_list(self, client, store):
        store.add_tag("t1", "Energy", "طاقة")
        store.add_item("articles", title="One", title_ar="واحد", content="c")

        response = client.get("/content?include=articles,tags&include=foo", headers={"Accept-Language": "ar"})

        body = response.json()
        assert response.status_code == 200
        assert set(body) == {"metadata", "articles", "tags"}
        assert body["articles"][0]["title"] == "واحد"
        assert body["tags"][0] == {"id": "t1", "name": "Energy", "name_ar": "طاقة"}

    def test_exchange_rates(self, client, store):
        store.exchange_rates["EUR"] = {"currency": "EUR", "rate": 0.9, "base_currency": "USD", "updated_at": "2024-01-01T00:00:00Z"}

        body = client.get("/content?include=exchange_rates").json()

        assert body["exchange_rates"][0]["currency"] == "EUR"
        assert body["metadata"]["exchange_rates"]["total"] == 1

    def test_by_tag(self, client, store):
        store.add_tag("T1", "Energy")
        store.add_item("tenders", title="Tagged", tag_ids=("T1",))
        store.add_item("tenders", title="Plain")

        body = client.get("/content/by-tag/T1?type=tenders").json()

        assert body["count"] == 1
        assert body["items"][0]["title"] == "Tagged"

    def test_by_tag_invalid_type(self, client, store):
        response = client.get("/content/by-tag/T1?type=users")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid content type"
