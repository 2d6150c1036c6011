"""Admin diagnostics blueprint."""

from flask import Blueprint, jsonify

from utils.access import current_identity, is_admin, requires

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/test", methods=["GET"])
@requires(is_admin)
def admin_test():
    """Confirm the caller holds a valid admin session."""

    return jsonify(
        {
            "message": "Admin verified successfully",
            "user": current_identity().to_dict(),
        }
    )
