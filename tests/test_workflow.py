"""
Tests for the content creation workflow and its compensating delete.
"""

import io

import pytest
from starlette.datastructures import UploadFile

from articles.service import ARTICLE
from content import workflow
from content.schemas import ContentStatus
from core import storage
from core.errors import CreationFailed, DuplicateTag, Forbidden, ReferenceNotFound, Unauthorized, ValidationError
from tags import repository as tags_repository
from tenders.service import TENDER


def upload(data: bytes, filename: str = "photo.jpg") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename)


def article_fields(**overrides):
    return {"title": "Solar plant", "content": "Body", "status": "published", **overrides}


@pytest.mark.asyncio
class TestCreateContent:
    async def test_creates_item_with_tags_and_files(self, store, author):
        store.add_tag("t1", "Energy")

        article = await workflow.create_content(
            ARTICLE,
            user=author,
            fields=article_fields(),
            tags='[{"name": "Water"}]',
            tag_ids="t1",
            uploads={"featured_media": [upload(b"cover")], "images": [upload(b"a"), upload(b"b")]},
        )

        assert [t["name"] for t in article["tags"]] == ["Energy", "Water"]
        assert article["featured_media"]["size"] == 5
        assert len(article["images"]) == 2
        assert article["videos"] == []
        assert article["author_id"] == author["id"]
        assert article["author_email"] == author["email"]

    async def test_status_defaults_to_draft(self, store, author):
        tender = await workflow.create_content(TENDER, user=author, fields={"title": "T", "description": "D"})
        assert tender["status"] == "draft"

    async def test_status_enum_is_stored_as_value(self, store, author):
        article = await workflow.create_content(
            ARTICLE,
            user=author,
            fields=article_fields(status=ContentStatus.ARCHIVED),
        )

        assert article["status"] == "archived"

    async def test_oversized_upload_keeps_413(self, store, author, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "4")

        with pytest.raises(ValidationError) as exc_info:
            await workflow.create_content(
                ARTICLE,
                user=author,
                fields=article_fields(),
                uploads={"images": [upload(b"ok"), upload(b"far too large")]},
            )

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.status_code == 413
        assert store.items["articles"] == {}
        assert store.files == {}
        assert len(store.deleted_files) == 1

    async def test_empty_uploads_are_skipped(self, store, author):
        article = await workflow.create_content(
            ARTICLE,
            user=author,
            fields=article_fields(),
            uploads={"featured_media": [upload(b"", "empty.jpg"), upload(b"real")], "images": [upload(b"")]},
        )

        assert article["featured_media"]["size"] == 4
        assert article["images"] == []
        assert "attach_files:articles" not in store.calls

    async def test_unknown_tag_id_rolls_back(self, store, author):
        with pytest.raises(CreationFailed) as exc_info:
            await workflow.create_content(ARTICLE, user=author, fields=article_fields(), tag_ids="missing")

        assert isinstance(exc_info.value.cause, ReferenceNotFound)
        assert exc_info.value.message == "Failed to create article: Tag with ID missing not found"
        assert store.items["articles"] == {}

    async def test_upload_failure_removes_item_and_stored_files(self, store, author, monkeypatch):
        stored = []

        async def flaky_upload(data, filename, mimetype):
            if stored:
                raise storage.StorageError("disk full")
            stored.append(filename)
            return await store.upload_file(data, filename, mimetype)

        monkeypatch.setattr(storage, "upload_file", flaky_upload)

        with pytest.raises(CreationFailed, match="disk full"):
            await workflow.create_content(
                ARTICLE,
                user=author,
                fields=article_fields(),
                uploads={"images": [upload(b"a", "a.jpg"), upload(b"b", "b.jpg")]},
            )

        assert store.items["articles"] == {}
        assert store.files == {}
        assert len(store.deleted_files) == 1

    async def test_duplicate_tag_is_reported_as_is(self, store, author, monkeypatch):
        store.add_tag("t1", "Energy")

        async def duplicate(kind, item_id, tag_ids):
            raise DuplicateTag()

        monkeypatch.setattr(tags_repository, "link_tags", duplicate)

        with pytest.raises(DuplicateTag):
            await workflow.create_content(ARTICLE, user=author, fields=article_fields(), tag_ids=["t1"])

        assert store.items["articles"] == {}

    async def test_rollback_runs_newest_first(self, store, author, monkeypatch):
        async def failing_find(item_id):
            raise RuntimeError("read failed")

        monkeypatch.setattr(ARTICLE.repository, "find_by_id", failing_find)

        with pytest.raises(CreationFailed):
            await workflow.create_content(
                ARTICLE,
                user=author,
                fields=article_fields(),
                uploads={"featured_media": [upload(b"cover")]},
            )

        assert store.deleted_files
        assert store.calls[-1] == "delete:articles"

    async def test_malformed_tags_write_nothing(self, store, author):
        with pytest.raises(ValidationError):
            await workflow.create_content(ARTICLE, user=author, fields=article_fields(), tags="{broken")

        assert "insert:articles" not in store.calls

    async def test_string_upload_rejected(self, store, author):
        with pytest.raises(ValidationError, match="images must be file uploads, not strings"):
            await workflow.create_content(ARTICLE, user=author, fields=article_fields(), uploads={"images": ["x"]})

        assert store.items["articles"] == {}

    async def test_anonymous_caller(self, store):
        with pytest.raises(Unauthorized):
            await workflow.create_content(ARTICLE, user=None, fields=article_fields())

    async def test_viewer_forbidden(self, store, viewer):
        with pytest.raises(Forbidden):
            await workflow.create_content(ARTICLE, user=viewer, fields=article_fields())


@pytest.mark.asyncio
class TestCompensationLog:
    async def test_failed_step_does_not_stop_unwind(self):
        ran = []

        async def first():
            ran.append("first")

        async def broken():
            raise RuntimeError("boom")

        log = workflow.CompensationLog()
        log.record("first", first)
        log.record("broken", broken)

        await log.unwind()

        assert ran == ["first"]
        assert len(log) == 0


@pytest.mark.asyncio
class TestDeleteContent:
    async def test_owner_may_delete(self, store, author):
        row = store.add_item("tenders", title="T", author_id=author["id"], files=[{"path": "/uploads/x"}])

        await workflow.delete_content(TENDER, row["id"], user=author)

        assert row["id"] not in store.items["tenders"]
        assert store.deleted_files == ["/uploads/x"]

    async def test_other_author_forbidden(self, store, author):
        row = store.add_item("tenders", title="T", author_id="someone-else", files=[])

        with pytest.raises(Forbidden):
            await workflow.delete_content(TENDER, row["id"], user=author)

    async def test_editor_may_delete_any(self, store, editor):
        row = store.add_item("tenders", title="T", author_id="someone-else", files=[])

        await workflow.delete_content(TENDER, row["id"], user=editor)

        assert store.items["tenders"] == {}

    async def test_missing_item(self, store, editor):
        with pytest.raises(ReferenceNotFound, match="Tender with ID nope not found"):
            await workflow.delete_content(TENDER, "nope", user=editor)
