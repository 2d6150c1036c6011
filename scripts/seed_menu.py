"""Replace the menu with the default salads."""

from decimal import Decimal

from app import create_app
from models import db
from models.menu_item import MenuItem

DEFAULT_MENU = [
    {
        "name": "Classic Caesar Salad",
        "price": Decimal("8.99"),
        "description": "Crisp romaine, parmesan, croutons, creamy dressing.",
    },
    {
        "name": "Greek Salad",
        "price": Decimal("9.49"),
        "description": "Feta cheese, kalamata olives, tomatoes, cucumbers, red onion.",
    },
    {
        "name": "Quinoa Power Bowl",
        "price": Decimal("10.99"),
        "description": "Quinoa, avocado, chickpeas, mixed greens, lemon-tahini dressing.",
    },
]


def seed_menu(items: list[dict] | None = None) -> int:
    """Delete every menu item and insert ``items``. Returns the number inserted."""

    items = DEFAULT_MENU if items is None else items
    MenuItem.query.delete()
    for data in items:
        db.session.add(MenuItem(**data))
    db.session.commit()
    return len(items)


def main() -> None:
    app = create_app()
    with app.app_context():
        count = seed_menu()
        print(f"Seeded {count} menu items")


if __name__ == "__main__":
    main()
