"""
Unit tests for the playlist store.

Covers write-time validation, timestamps, and the read-time projection
of item_ids onto content items.
"""

import pytest
from sqlalchemy.exc import OperationalError

from signage.errors import NotFoundError, ValidationError
from signage.models.content import ContentItem
from signage.schemas.content import ContentItemCreate


@pytest.fixture
def three_items(content_store):
    return [
        content_store.create(
            ContentItemCreate(type="image", url=f"https://cdn.example.com/{name}.png", duration=5, title=name)
        )
        for name in ("a", "b", "c")
    ]


class TestCreatePlaylist:
    """Tests for PlaylistStore.create."""

    def test_requires_at_least_one_item(self, playlist_store):
        with pytest.raises(ValidationError):
            playlist_store.create("Morning Loop", None, [])

    def test_requires_name_of_three_chars(self, playlist_store, three_items):
        with pytest.raises(ValidationError):
            playlist_store.create("AM", None, [three_items[0].id])

    def test_sets_both_timestamps(self, playlist_store, three_items, clock):
        playlist = playlist_store.create("Morning Loop", "news", [three_items[0].id])
        assert playlist.created_at == clock.now
        assert playlist.updated_at == clock.now

    def test_dangling_ids_are_stored(self, playlist_store, three_items):
        playlist = playlist_store.create("Morning Loop", None, [three_items[0].id, "ghost"])
        assert playlist.item_ids == [three_items[0].id, "ghost"]
        assert [item.id for item in playlist.items] == [three_items[0].id]


class TestProjection:
    """Tests for the items projection on read."""

    def test_items_follow_item_id_order(self, playlist_store, three_items):
        a, b, c = three_items
        created = playlist_store.create("Morning Loop", None, [a.id, b.id, c.id])
        fetched = playlist_store.get(created.id)
        assert [item.id for item in fetched.items] == [a.id, b.id, c.id]

    def test_custom_order_is_preserved(self, playlist_store, three_items):
        a, b, c = three_items
        created = playlist_store.create("Morning Loop", None, [c.id, a.id, b.id])
        assert [item.id for item in playlist_store.get(created.id).items] == [c.id, a.id, b.id]

    def test_deleted_item_drops_out(self, playlist_store, content_store, three_items):
        a, b, c = three_items
        created = playlist_store.create("Morning Loop", None, [a.id, b.id, c.id])
        content_store.delete(b.id)
        assert [item.id for item in playlist_store.get(created.id).items] == [a.id, c.id]

    def test_fully_emptied_playlist_resolves_to_no_items(self, playlist_store, content_store, three_items):
        a = three_items[0]
        created = playlist_store.create("Solo", None, [a.id])
        content_store.delete(a.id)
        fetched = playlist_store.get(created.id)
        assert fetched.items == []
        assert fetched.item_ids == []

    def test_list_projects_every_playlist(self, playlist_store, three_items):
        a, b, c = three_items
        playlist_store.create("First", None, [a.id, b.id])
        playlist_store.create("Second", None, [c.id])
        listed = playlist_store.list()
        assert [p.name for p in listed] == ["First", "Second"]
        assert [len(p.items) for p in listed] == [2, 1]

    def test_list_degrades_when_playlists_cannot_be_read(self, playlist_store, three_items, db, monkeypatch):
        playlist_store.create("First", None, [three_items[0].id])

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("unable to open database file"))

        monkeypatch.setattr(db, "query", broken_query)
        assert playlist_store.list() == []

    def test_list_degrades_when_items_cannot_be_resolved(self, playlist_store, three_items, db, monkeypatch):
        playlist_store.create("First", None, [three_items[0].id])
        real_query = db.query

        def query_without_content(model, *args, **kwargs):
            if model is ContentItem:
                raise OperationalError("SELECT", {}, Exception("no such table: content_item"))
            return real_query(model, *args, **kwargs)

        monkeypatch.setattr(db, "query", query_without_content)
        assert playlist_store.list() == []


class TestUpdateAndDelete:
    """Tests for PlaylistStore.update / delete."""

    def test_update_refreshes_updated_at_only(self, playlist_store, three_items, clock):
        a, b, _ = three_items
        created = playlist_store.create("Morning Loop", None, [a.id])
        clock.advance(minutes=5)
        updated = playlist_store.update(created.id, "Morning Loop", "now with b", [a.id, b.id])
        assert updated.created_at == created.created_at
        assert updated.updated_at == clock.now
        assert updated.description == "now with b"
        assert updated.item_ids == [a.id, b.id]

    def test_update_validates(self, playlist_store, three_items):
        created = playlist_store.create("Morning Loop", None, [three_items[0].id])
        with pytest.raises(ValidationError):
            playlist_store.update(created.id, "Morning Loop", None, [])

    def test_update_unknown(self, playlist_store):
        with pytest.raises(NotFoundError):
            playlist_store.update("missing", "Morning Loop", None, ["x"])

    def test_delete_removes_record(self, playlist_store, three_items):
        created = playlist_store.create("Morning Loop", None, [three_items[0].id])
        playlist_store.delete(created.id)
        with pytest.raises(NotFoundError):
            playlist_store.get(created.id)

    def test_delete_unknown(self, playlist_store):
        with pytest.raises(NotFoundError):
            playlist_store.delete("missing")
