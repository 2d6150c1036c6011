"""Menu blueprint: public listing and admin-only mutation."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.menu_item import DEFAULT_CATEGORY, MenuItem
from utils.access import is_admin, requires
from utils.request_validation import parse_json_request

menu_bp = Blueprint("menu", __name__)

TEXT_FIELDS = ("name", "description", "image", "category")


def _parse_bool(value):
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in {"1", "true", "yes", "y"}:
        return True
    if lowered in {"0", "false", "no", "n"}:
        return False
    return None


def _validate_menu_payload(data: dict):
    errors = []

    if "name" in data and not data.get("name"):
        errors.append("name must not be empty")

    for field in TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            errors.append(f"{field} must be a string")

    price = None
    if data.get("price") not in (None, ""):
        try:
            price = Decimal(str(data.get("price")))
        except (InvalidOperation, TypeError):
            errors.append("price must be numeric")
        else:
            if not price.is_finite() or price < 0:
                errors.append("price must be a non-negative number")
    elif "price" in data:
        errors.append("price must not be empty")

    available = None
    if "available" in data:
        available = _parse_bool(data.get("available"))
        if available is None:
            errors.append("available must be boolean")

    return errors, price, available


def _get_item_or_404(item_id: int) -> MenuItem:
    item = db.session.get(MenuItem, item_id)
    if item is None:
        raise NotFound("Item not found.")
    return item


@menu_bp.route("", methods=["GET"])
def list_menu():
    """Return every menu item."""

    items = MenuItem.query.order_by(MenuItem.id.asc()).all()
    return jsonify({"success": True, "menu": [item.to_dict() for item in items]})


@menu_bp.route("", methods=["POST"])
@requires(is_admin)
def create_menu_item():
    """Add a menu item. Admins only."""

    data = parse_json_request(request, required_keys=("name", "price"))
    errors, price, available = _validate_menu_payload(data)
    if errors:
        raise BadRequest("; ".join(errors))

    item = MenuItem(
        name=data["name"],
        price=price,
        description=data.get("description") or "",
        image=data.get("image") or "",
        category=data.get("category") or DEFAULT_CATEGORY,
        available=True if available is None else available,
    )
    db.session.add(item)
    db.session.commit()
    current_app.logger.info("Menu item %s created", item.id)

    return jsonify({"success": True, "menuItem": item.to_dict()})


@menu_bp.route("/<int:item_id>", methods=["PUT"])
@requires(is_admin)
def update_menu_item(item_id: int):
    item = _get_item_or_404(item_id)

    data = parse_json_request(request)
    errors, price, available = _validate_menu_payload(data)
    if errors:
        raise BadRequest("; ".join(errors))

    for field in TEXT_FIELDS:
        if field in data and data[field] is not None:
            setattr(item, field, data[field])
    if price is not None:
        item.price = price
    if available is not None:
        item.available = available

    db.session.commit()
    return jsonify({"success": True, "menuItem": item.to_dict()})


@menu_bp.route("/<int:item_id>", methods=["DELETE"])
@requires(is_admin)
def delete_menu_item(item_id: int):
    item = _get_item_or_404(item_id)
    db.session.delete(item)
    db.session.commit()
    current_app.logger.info("Menu item %s deleted", item_id)

    return jsonify({"success": True, "message": "Item deleted successfully"})
