"""Seed an administrator user."""

from flask import current_app

from app import create_app
from models import db
from models.user import User


def seed_admin(email: str, password: str, name: str) -> tuple[User, str]:
    """Create or promote a verified admin; must run inside an app context."""

    admin = User.query.filter_by(email=email).first()
    if admin is None:
        admin = User(name=name, email=email, role="admin")
        action = "created"
    else:
        admin.role = "admin"
        # Retire reset links issued for the old password.
        admin.password_version = (admin.password_version or 0) + 1
        action = "updated"
    admin.mark_verified()
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    return admin, action


def main() -> None:
    app = create_app()
    with app.app_context():
        config = current_app.config
        admin, action = seed_admin(
            config["ADMIN_EMAIL"], config["ADMIN_PASSWORD"], config["ADMIN_NAME"]
        )
        print(f"Admin user {action}: {admin.email}")


if __name__ == "__main__":
    main()
