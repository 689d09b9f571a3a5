"""
Tests for the unified content aggregator.
"""

import pytest

from content import aggregator
from core.errors import ValidationError
from tags import repository as tags_repository


@pytest.fixture
def seeded(store):
    store.add_tag("T1", "Energy", "طاقة")
    store.add_tag("T2", "Water")
    for i in range(3):
        store.add_item("articles", title=f"Article {i}", content="c", tag_ids=("T1",) if i == 0 else ())
    store.add_item("articles", title="Draft", content="c", status="draft")
    store.add_item("tenders", title="Tagged tender", tag_ids=("T1",))
    store.add_item("tenders", title="Plain tender")
    store.add_item("tenders", title="Draft tender", status="draft", tag_ids=("T1",))
    store.add_item("announcements", title="Notice", tag_ids=("T2",))
    store.add_category("c1", "News", "أخبار")
    return store


@pytest.mark.asyncio
class TestUnifiedContent:
    async def test_only_requested_keys(self, seeded):
        result = await aggregator.unified_content(["articles", "tags"])

        assert set(result) == {"metadata", "articles", "tags"}
        assert set(result["metadata"]) == {"articles", "tags"}

    async def test_unknown_kind_ignored(self, seeded):
        result = await aggregator.unified_content(["foo", "categories"])

        assert set(result) == {"metadata", "categories"}

    async def test_repeated_kind_fetched_once(self, seeded):
        result = await aggregator.unified_content(["tags", "tags"])

        assert len(result["tags"]) == 2

    async def test_articles_are_paged_and_published_only(self, seeded):
        result = await aggregator.unified_content(["articles"], page=2, limit=2)

        assert [a["title"] for a in result["articles"]] == ["Article 0"]
        assert result["metadata"]["articles"] == {"total": 3, "page": 2, "limit": 2, "total_pages": 2}

    async def test_articles_sort_order(self, seeded):
        result = await aggregator.unified_content(["articles"], sort_order="asc")

        assert [a["title"] for a in result["articles"]] == ["Article 0", "Article 1", "Article 2"]

    async def test_other_kinds_are_one_page(self, seeded):
        result = await aggregator.unified_content(["tenders", "categories"], page=3, limit=1)

        assert len(result["tenders"]) == 2
        assert result["metadata"]["tenders"] == {"total": 2, "page": 1, "limit": 2, "total_pages": 1}
        assert result["metadata"]["categories"]["limit"] == 1

    async def test_per_kind_tag_listings(self, seeded):
        result = await aggregator.unified_content(["article_tags", "announcement_tags", "tender_tags"])

        assert [t["id"] for t in result["article_tags"]] == ["T1"]
        assert [t["id"] for t in result["announcement_tags"]] == ["T2"]
        assert [t["id"] for t in result["tender_tags"]] == ["T1"]

    async def test_one_failing_fetch_fails_everything(self, seeded, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("db down")

        monkeypatch.setattr(tags_repository, "list_all", broken)

        with pytest.raises(RuntimeError, match="db down"):
            await aggregator.unified_content(["articles", "tags"])

    async def test_nothing_requested(self, seeded):
        assert await aggregator.unified_content([]) == {"metadata": {}}


@pytest.mark.asyncio
class TestContentByTag:
    async def test_tenders_with_tag(self, seeded):
        items = await aggregator.content_by_tag("T1", "tenders")

        assert [t["title"] for t in items] == ["Tagged tender"]

    async def test_articles_with_tag(self, seeded):
        items = await aggregator.content_by_tag("T1", "articles")

        assert [a["title"] for a in items] == ["Article 0"]

    async def test_articles_with_tag_include_drafts(self, seeded):
        seeded.add_item("articles", title="Tagged draft", content="c", status="draft", tag_ids=("T1",))

        items = await aggregator.content_by_tag("T1", "articles")

        assert sorted(a["title"] for a in items) == ["Article 0", "Tagged draft"]

    async def test_announcements_with_tag(self, seeded):
        assert await aggregator.content_by_tag("T1", "announcements") == []

    async def test_invalid_kind(self, seeded):
        with pytest.raises(ValidationError, match="Invalid content type"):
            await aggregator.content_by_tag("T1", "categories")
