"""Moderation endpoints (owner only)."""

from flask import request

from portal.api import api_bp
from portal.services.user_service import UserService
from portal.utils import cache, result_error, success_response
from portal.utils.auth import owner_required


def _set_banned(username: str, banned: bool):
    result = UserService().set_banned(username, banned)
    if "error" in result:
        return result_error(result)

    cache.invalidate(f"user:{username}", "leaderboard:top")
    return success_response({"user": result["user"]})


@api_bp.route("/admin/users/<username>/ban", methods=["POST"])
@owner_required
def ban_user(username: str):
    return _set_banned(username, True)


@api_bp.route("/admin/users/<username>/unban", methods=["POST"])
@owner_required
def unban_user(username: str):
    return _set_banned(username, False)


@api_bp.route("/admin/users/<username>/role", methods=["POST"])
@owner_required
def set_user_role(username: str):
    """
    Change a user's role.

    Request body:
    {
        "role": "admin"  # user, admin, owner
    }
    """
    data = request.get_json() or {}
    result = UserService().set_role(username, data.get("role"))
    if "error" in result:
        return result_error(result)

    cache.invalidate(f"user:{username}")
    return success_response({"user": result["user"]})
