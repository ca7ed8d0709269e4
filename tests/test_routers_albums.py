"""
test_routers_albums.py — Tests for album CRUD and album places

Called by: pytest
Depends on: motion_api/routers/albums.py, tests/conftest.py
"""

import pytest


@pytest.fixture()
def album(fake_db):
    fake_db.seed("albums", {
        "id": "al1", "user_id": "owner", "name": "Coffee", "is_public": False,
        "created_at": "2026-01-01", "album_places": [{"id": "p1"}, {"id": "p2"}],
    })
    return fake_db


class TestAlbums:
    def test_list_requires_user(self, client):
        assert client.get("/api/albums").status_code == 400

    def test_list_with_place_count(self, client, album):
        resp = client.get("/api/albums", params={"userId": "owner"})
        assert resp.status_code == 200
        albums = resp.json()
        assert albums[0]["place_count"] == 2

    def test_get_private_album_denied_to_others(self, client, album):
        resp = client.get("/api/albums/al1", params={"userId": "stranger"})
        assert resp.status_code == 403
        assert resp.json()["error"] == "Access denied"

    def test_get_own_album(self, client, album):
        assert client.get("/api/albums/al1", params={"userId": "owner"}).status_code == 200

    def test_get_public_album(self, client, fake_db):
        fake_db.seed("albums", {"id": "pub", "user_id": "owner", "is_public": True})
        assert client.get("/api/albums/pub").status_code == 200

    def test_get_missing(self, client):
        assert client.get("/api/albums/none").status_code == 404

    def test_create(self, client, fake_db):
        resp = client.post("/api/albums", json={"userId": "u1", "name": "Parks", "isPublic": True})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Parks"
        assert fake_db.rows("albums")[0]["is_public"] is True

    def test_create_requires_name(self, client):
        resp = client.post("/api/albums", json={"userId": "u1"})
        assert resp.status_code == 400

    def test_create_with_no_row_returned(self, client, fake_db):
        fake_db.empty("albums", "insert")
        resp = client.post("/api/albums", json={"userId": "u1", "name": "Parks"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to create album"

    def test_update_by_owner(self, client, album):
        resp = client.put("/api/albums/al1", json={"userId": "owner", "name": "Espresso"})
        assert resp.status_code == 200
        assert album.rows("albums")[0]["name"] == "Espresso"

    def test_update_with_no_row_returned(self, client, album):
        album.empty("albums", "update")
        resp = client.put("/api/albums/al1", json={"userId": "owner", "name": "Espresso"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to update album"

    def test_update_by_other_user(self, client, album):
        resp = client.put("/api/albums/al1", json={"userId": "stranger", "name": "Mine now"})
        assert resp.status_code == 403
        assert album.rows("albums")[0]["name"] == "Coffee"

    def test_delete_by_owner(self, client, album):
        resp = client.delete("/api/albums/al1", params={"userId": "owner"})
        assert resp.json() == {"success": True}
        assert album.rows("albums") == []

    def test_delete_without_user(self, client, album):
        assert client.delete("/api/albums/al1").status_code == 403


class TestAlbumPlaces:
    def test_add_place(self, client, album):
        resp = client.post("/api/albums/al1/places", json={
            "userId": "owner", "savedPlaceId": "sp1", "notes": "Try the cortado",
        })
        assert resp.status_code == 200
        entry = album.rows("album_places")[0]
        assert entry["album_id"] == "al1"
        assert entry["saved_place_id"] == "sp1"
        assert entry["sort_order"] == 0

    def test_add_duplicate_place(self, client, album):
        album.fail("album_places", "insert", message="duplicate key", code="23505")
        resp = client.post("/api/albums/al1/places", json={"userId": "owner", "savedPlaceId": "sp1"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "Place already in album"

    def test_add_place_other_error(self, client, album):
        album.fail("album_places", "insert")
        resp = client.post("/api/albums/al1/places", json={"userId": "owner", "savedPlaceId": "sp1"})
        assert resp.status_code == 500

    def test_add_place_with_no_row_returned(self, client, album):
        album.empty("album_places", "insert")
        resp = client.post("/api/albums/al1/places", json={"userId": "owner", "savedPlaceId": "sp1"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to add place to album"

    def test_add_place_not_owner(self, client, album):
        resp = client.post("/api/albums/al1/places", json={"userId": "stranger", "savedPlaceId": "sp1"})
        assert resp.status_code == 403

    def test_remove_place(self, client, album):
        album.seed("album_places", {"album_id": "al1", "saved_place_id": "sp1"})
        resp = client.delete("/api/albums/al1/places/sp1", params={"userId": "owner"})
        assert resp.json() == {"success": True}
        assert album.rows("album_places") == []
