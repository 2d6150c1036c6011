"""Tests for the seeding scripts."""

from conftest import create_user
from models.menu_item import MenuItem
from models.user import User
from scripts.seed_admin import seed_admin
from scripts.seed_menu import DEFAULT_MENU, seed_menu


def test_seed_admin_creates_verified_admin(app, client):
    with app.app_context():
        admin, action = seed_admin("root@oursaladish.test", "Admin@123", "Super Admin")
        assert action == "created"
        assert admin.role == "admin"
        assert admin.is_verified is True

    response = client.post(
        "/api/login", json={"email": "root@oursaladish.test", "password": "Admin@123"}
    )
    assert response.status_code == 200
    assert response.get_json()["user"]["role"] == "admin"


def test_seed_admin_promotes_existing_user(app):
    with app.app_context():
        create_user("ann@x.com", "Secret1", verified=False)

        admin, action = seed_admin("ann@x.com", "NewAdmin1", "Ann")

        assert action == "updated"
        assert User.query.count() == 1
        assert admin.is_admin is True
        assert admin.is_verified is True
        assert admin.check_password("NewAdmin1")


def test_seed_menu_replaces_items(app):
    with app.app_context():
        seed_menu([{"name": "Old", "price": 1}])
        assert MenuItem.query.count() == 1

        count = seed_menu()

        assert count == len(DEFAULT_MENU)
        names = sorted(item.name for item in MenuItem.query.all())
        assert names == sorted(item["name"] for item in DEFAULT_MENU)


def test_reseeding_admin_retires_earlier_reset_links(app, client, gateway):
    with app.app_context():
        create_user("ann@x.com", "Secret1")
    client.post("/api/forgot-password", json={"email": "ann@x.com"})
    token = gateway.last_token("ann@x.com")

    with app.app_context():
        seed_admin("ann@x.com", "NewAdmin1", "Ann")

    response = client.post(f"/api/reset-password/{token}", json={"password": "Hijack1"})
    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_or_expired_token"

    login = client.post("/api/login", json={"email": "ann@x.com", "password": "NewAdmin1"})
    assert login.status_code == 200
