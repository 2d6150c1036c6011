"""Tests for the menu endpoints."""

from __future__ import annotations

from conftest import create_user, session_headers
from models import db
from models.menu_item import MenuItem

ITEM = {"name": "Greek Salad", "price": 9.49, "description": "Feta and olives"}


def _create_item(app, **overrides) -> int:
    with app.app_context():
        item = MenuItem(**{"name": "Caesar", "price": 8.99, **overrides})
        db.session.add(item)
        db.session.commit()
        return item.id


def test_menu_is_public(app, client):
    _create_item(app)

    response = client.get("/api/menu")

    assert response.status_code == 200
    data = response.get_json()
    assert data["success"] is True
    assert [item["name"] for item in data["menu"]] == ["Caesar"]
    assert data["menu"][0]["price"] == 8.99
    assert data["menu"][0]["category"] == "General"
    assert data["menu"][0]["available"] is True


def test_create_requires_token(client):
    response = client.post("/api/menu", json=ITEM)

    assert response.status_code == 401


def test_create_requires_admin(app, client):
    with app.app_context():
        user_id = create_user("ann@x.com", "Secret1")

    response = client.post("/api/menu", json=ITEM, headers=session_headers(app, user_id))

    assert response.status_code == 403


def test_admin_creates_item(app, client, admin_headers):
    response = client.post("/api/menu", json=ITEM, headers=admin_headers)

    assert response.status_code == 200
    item = response.get_json()["menuItem"]
    assert item["name"] == "Greek Salad"
    assert item["price"] == 9.49
    assert item["image"] == ""
    with app.app_context():
        assert MenuItem.query.count() == 1


def test_create_validates_fields(client, admin_headers):
    missing = client.post("/api/menu", json={"name": "No price"}, headers=admin_headers)
    assert missing.status_code == 400
    assert "price" in missing.get_json()["detail"]

    bad_price = client.post("/api/menu", json={"name": "X", "price": "cheap"}, headers=admin_headers)
    assert bad_price.status_code == 400

    negative = client.post("/api/menu", json={"name": "X", "price": -1}, headers=admin_headers)
    assert negative.status_code == 400


def test_admin_updates_item(app, client, admin_headers):
    item_id = _create_item(app)

    response = client.put(
        f"/api/menu/{item_id}",
        json={"price": 7.5, "available": False},
        headers=admin_headers,
    )

    assert response.status_code == 200
    item = response.get_json()["menuItem"]
    assert item["price"] == 7.5
    assert item["available"] is False
    assert item["name"] == "Caesar"


def test_update_missing_item(client, admin_headers):
    response = client.put("/api/menu/999", json={"price": 1}, headers=admin_headers)

    assert response.status_code == 404


def test_admin_deletes_item(app, client, admin_headers):
    item_id = _create_item(app)

    response = client.delete(f"/api/menu/{item_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["message"] == "Item deleted successfully"
    with app.app_context():
        assert db.session.get(MenuItem, item_id) is None


def test_delete_missing_item(client, admin_headers):
    response = client.delete("/api/menu/999", headers=admin_headers)

    assert response.status_code == 404
