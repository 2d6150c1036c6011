"""Orders blueprint: place and list orders."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from models import db
from models.order import ADDRESS_FIELDS, Order
from utils.request_validation import parse_json_request

orders_bp = Blueprint("orders", __name__)
address_bp = Blueprint("address", __name__)


def _parse_total(value) -> Decimal | None:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        raise BadRequest("total must be numeric")
    try:
        total = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise BadRequest("total must be numeric")
    if not total.is_finite():
        raise BadRequest("total must be numeric")
    return total


def _clean_address(raw) -> dict | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise BadRequest("address must be an object")
    return {field: raw.get(field) for field in ADDRESS_FIELDS if raw.get(field) is not None}


def _user_id(raw) -> str | None:
    return None if raw in (None, "") else str(raw)


@orders_bp.route("", methods=["POST"])
def place_order():
    """Store a new order from the checkout payload."""

    data = parse_json_request(request)

    items = data.get("items", [])
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise BadRequest("items must be a list of objects")

    order = Order(
        user_id=_user_id(data.get("userId")),
        items=items,
        address=_clean_address(data.get("address")),
        payment_method=data.get("paymentMethod") or "COD",
        total=_parse_total(data.get("total")),
    )
    db.session.add(order)
    db.session.commit()
    current_app.logger.info("Order %s placed", order.id)

    return jsonify({"success": True, "order": order.to_dict()}), HTTPStatus.CREATED


@orders_bp.route("", methods=["GET"])
def list_orders():
    orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return jsonify({"success": True, "orders": [order.to_dict() for order in orders]})


@address_bp.route("", methods=["POST"])
def save_address():
    """Store a delivery address as a pending order without items."""

    data = parse_json_request(request)
    order = Order(
        user_id=_user_id(data.get("userId")),
        items=[],
        address=_clean_address(data),
        total=Decimal("0"),
        status="pending",
    )
    db.session.add(order)
    db.session.commit()

    return jsonify({"success": True, "orderId": order.id}), HTTPStatus.CREATED
