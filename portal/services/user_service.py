"""User registry: accounts, lookup, leaderboard and moderation."""

import logging
from typing import Any

from flask import current_app
from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models.user import ROLES, User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService:
    """Service for user accounts."""

    def get_by_username(self, username: str) -> User | None:
        return User.query.filter_by(username=username).first()

    def get_or_create(self, username: str) -> User:
        """Return the user with this name, creating it with 0 coins if absent."""
        user = self.get_by_username(username)
        if user:
            return user

        user = User(username=username, coins=0)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Created concurrently by another request
            db.session.rollback()
            user = self.get_by_username(username)
        return user

    def register(self, username: str, password: str) -> dict[str, Any]:
        """Create an account with a hashed password."""
        if self.get_by_username(username):
            return {"error": "username_taken"}

        user = User(username=username, coins=0)
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return {"error": "username_taken"}

        logger.info(f"Registered user {user.id} ({username})")
        return {"success": True, "user": user}

    def authenticate(self, username: str, password: str) -> dict[str, Any]:
        """Check credentials. Banned users cannot log in."""
        user = self.get_by_username(username)
        if not user or not user.check_password(password):
            return {"error": "invalid_credentials"}

        if user.is_banned:
            return {"error": "user_banned"}

        return {"success": True, "user": user}

    def get_leaderboard(self, limit: int | None = None) -> list[dict]:
        """Top users by coin balance."""
        if limit is None:
            limit = current_app.config.get("LEADERBOARD_SIZE", 10)

        users = (
            User.query.filter_by(is_banned=False)
            .order_by(User.coins.desc(), User.id)
            .limit(limit)
            .all()
        )
        return [
            {"rank": i + 1, "username": u.username, "coins": u.coins}
            for i, u in enumerate(users)
        ]

    def set_banned(self, username: str, banned: bool) -> dict[str, Any]:
        user = self.get_by_username(username)
        if not user:
            return {"error": "user_not_found"}

        user.is_banned = banned
        db.session.commit()

        logger.info(f"User {user.id} {'banned' if banned else 'unbanned'}")
        return {"success": True, "user": user.to_dict()}

    def set_role(self, username: str, role: str) -> dict[str, Any]:
        if role not in ROLES:
            return {"error": "invalid_role"}

        user = self.get_by_username(username)
        if not user:
            return {"error": "user_not_found"}

        user.role = role
        user.is_admin = role in ("admin", "owner")
        db.session.commit()

        logger.info(f"User {user.id} role set to {role}")
        return {"success": True, "user": user.to_dict()}
