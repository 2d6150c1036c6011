"""Order model."""

from decimal import Decimal

from utils.clock import utcnow

from . import db

ADDRESS_FIELDS = ("name", "street", "city", "state", "zip", "phone")


class Order(db.Model):
    """A placed order with its cart lines and delivery address."""

    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=True)
    items = db.Column(db.JSON, nullable=False, default=list)
    address = db.Column(db.JSON, nullable=True)
    payment_method = db.Column(db.String(32), nullable=False, default="COD")
    total = db.Column(db.Numeric(10, 2), nullable=True)
    status = db.Column(db.String(32), nullable=False, default="pending")
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        total = float(self.total) if isinstance(self.total, Decimal) else self.total
        return {
            "id": self.id,
            "user_id": self.user_id,
            "items": self.items or [],
            "address": self.address,
            "payment_method": self.payment_method,
            "total": total,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
