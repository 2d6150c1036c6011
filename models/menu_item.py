"""Menu item model."""

from decimal import Decimal

from utils.clock import utcnow

from . import db

DEFAULT_CATEGORY = "General"


class MenuItem(db.Model):
    """A dish offered on the public menu."""

    __tablename__ = "menu_items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    image = db.Column(db.String(500), nullable=False, default="")
    category = db.Column(db.String(120), nullable=False, default=DEFAULT_CATEGORY)
    available = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> dict:
        """Serialize the menu item to a dictionary."""

        price = float(self.price) if isinstance(self.price, Decimal) else self.price
        return {
            "id": self.id,
            "name": self.name,
            "price": price,
            "description": self.description,
            "image": self.image,
            "category": self.category,
            "available": self.available,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
