"""
Unit tests for the content store.

Covers type-specific validation on create and update, partial merges,
and the not-found paths.
"""

import pytest
from sqlalchemy.exc import OperationalError

from signage.errors import NotFoundError, StorageUnavailableError, ValidationError
from signage.schemas.content import ContentItemCreate, ContentItemUpdate


def _image(**overrides):
    data = {"type": "image", "url": "https://cdn.example.com/a.png", "duration": 8, "title": "Promo"}
    data.update(overrides)
    return ContentItemCreate(**data)


def _pdf(**overrides):
    data = {
        "type": "pdf",
        "url": "/storage/uploads/menu.pdf",
        "duration": 5,
        "page_image_urls": ["/storage/uploads/menu-page-1.png", "/storage/uploads/menu-page-2.png"],
    }
    data.update(overrides)
    return ContentItemCreate(**data)


class TestCreateContent:
    """Tests for ContentStore.create."""

    def test_create_assigns_id_and_persists(self, content_store):
        item = content_store.create(_image())
        assert item.id
        assert content_store.get(item.id).url == "https://cdn.example.com/a.png"

    def test_ids_are_unique(self, content_store):
        first = content_store.create(_image())
        second = content_store.create(_image())
        assert first.id != second.id

    @pytest.mark.parametrize("content_type", ["image", "video", "web"])
    def test_url_required_for_non_pdf(self, content_store, content_type):
        with pytest.raises(ValidationError):
            content_store.create(_image(type=content_type, url=""))

    def test_blank_url_counts_as_missing(self, content_store):
        with pytest.raises(ValidationError):
            content_store.create(_image(url="   "))

    def test_pdf_requires_page_images(self, content_store):
        with pytest.raises(ValidationError):
            content_store.create(_pdf(page_image_urls=[]))
        with pytest.raises(ValidationError):
            content_store.create(_pdf(page_image_urls=None))

    def test_pdf_requires_url(self, content_store):
        with pytest.raises(ValidationError):
            content_store.create(_pdf(url=""))

    def test_pdf_keeps_page_order(self, content_store):
        item = content_store.create(_pdf())
        assert item.page_image_urls == [
            "/storage/uploads/menu-page-1.png",
            "/storage/uploads/menu-page-2.png",
        ]

    def test_page_images_rejected_for_non_pdf(self, content_store):
        with pytest.raises(ValidationError):
            content_store.create(_image(page_image_urls=["/storage/uploads/x.png"]))

    def test_empty_page_list_on_image_is_dropped(self, content_store):
        item = content_store.create(_image(page_image_urls=[]))
        assert item.page_image_urls is None

    def test_duration_must_be_positive(self, content_store):
        with pytest.raises(ValidationError):
            content_store.create(_image(duration=0))

    def test_ai_hint_limited_to_two_words(self, content_store):
        assert content_store.create(_image(data_ai_hint="promotion sale")).data_ai_hint == "promotion sale"
        with pytest.raises(ValidationError):
            content_store.create(_image(data_ai_hint="big summer sale"))


class TestUpdateContent:
    """Tests for ContentStore.update."""

    def test_partial_update_keeps_other_fields(self, content_store):
        item = content_store.create(_image())
        updated = content_store.update(item.id, ContentItemUpdate(title="Renamed"))
        assert updated.title == "Renamed"
        assert updated.url == "https://cdn.example.com/a.png"
        assert updated.duration == 8

    def test_update_revalidates_merged_record(self, content_store):
        item = content_store.create(_image())
        with pytest.raises(ValidationError):
            content_store.update(item.id, ContentItemUpdate(url=""))
        assert content_store.get(item.id).url == "https://cdn.example.com/a.png"

    def test_switching_to_pdf_without_pages_fails(self, content_store):
        item = content_store.create(_image())
        with pytest.raises(ValidationError):
            content_store.update(item.id, ContentItemUpdate(type="pdf"))

    def test_switching_to_pdf_with_pages(self, content_store):
        item = content_store.create(_image())
        updated = content_store.update(
            item.id, ContentItemUpdate(type="pdf", page_image_urls=["/storage/uploads/p1.png"])
        )
        assert updated.type == "pdf"
        assert updated.page_image_urls == ["/storage/uploads/p1.png"]

    def test_switching_away_from_pdf_clears_pages(self, content_store):
        item = content_store.create(_pdf())
        updated = content_store.update(item.id, ContentItemUpdate(type="image"))
        assert updated.page_image_urls is None

    def test_pdf_update_cannot_empty_pages(self, content_store):
        item = content_store.create(_pdf())
        with pytest.raises(ValidationError):
            content_store.update(item.id, ContentItemUpdate(page_image_urls=[]))

    def test_update_unknown_id(self, content_store):
        with pytest.raises(NotFoundError):
            content_store.update("missing", ContentItemUpdate(title="x"))


class TestReadContent:
    """Tests for ContentStore.get / list."""

    def test_get_unknown_id(self, content_store):
        with pytest.raises(NotFoundError):
            content_store.get("missing")

    def test_list_returns_all(self, content_store):
        content_store.create(_image())
        content_store.create(_pdf())
        assert len(content_store.list()) == 2

    def test_list_degrades_to_empty_when_storage_fails(self, content_store, db, monkeypatch):
        content_store.create(_image())

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("unable to open database file"))

        monkeypatch.setattr(db, "query", broken_query)
        assert content_store.list() == []

    def test_write_surfaces_storage_failure(self, content_store, db, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db, "commit", broken_commit)
        with pytest.raises(StorageUnavailableError):
            content_store.create(_image())
