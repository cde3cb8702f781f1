"""Authentication utilities."""

from functools import wraps

from flask_jwt_extended import get_jwt_identity, jwt_required

from portal import db
from portal.models.user import User
from portal.utils.response import error_response


def current_user_id() -> int:
    """Acting user id from the JWT identity."""
    return int(get_jwt_identity())


def admin_required(fn):
    """
    Decorator that requires the user to be an admin or the owner.

    Must be used instead of @jwt_required().
    """

    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        user = db.session.get(User, current_user_id())

        if not user:
            return error_response("UNAUTHORIZED", "User not found", status_code=401)

        if not user.is_staff or user.is_banned:
            return error_response("FORBIDDEN", "Admin access required", status_code=403)

        return fn(*args, **kwargs)

    return wrapper


def owner_required(fn):
    """Decorator that requires the portal owner role."""

    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        user = db.session.get(User, current_user_id())

        if not user:
            return error_response("UNAUTHORIZED", "User not found", status_code=401)

        if user.role != "owner":
            return error_response("FORBIDDEN", "Owner access required", status_code=403)

        return fn(*args, **kwargs)

    return wrapper
