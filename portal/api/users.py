"""User profile, leaderboard and coin balance endpoints."""

from flask import current_app, request
from flask_jwt_extended import jwt_required

from portal.api import api_bp
from portal.extensions import limiter
from portal.services.ledger_service import LedgerService
from portal.services.user_service import UserService
from portal.utils import (cache, not_found, result_error, success_response,
                          validation_error)
from portal.utils.auth import current_user_id


@api_bp.route("/users/<username>", methods=["GET"])
def get_user_profile(username: str):
    """Public profile with coin balance."""
    cache_key = f"user:{username}"
    cached = cache.get(cache_key)
    if cached is not None:
        return success_response({"user": cached})

    user = UserService().get_by_username(username)
    if not user:
        return not_found("User not found")

    profile = user.to_dict()
    cache.set(cache_key, profile)
    return success_response({"user": profile})


@api_bp.route("/leaderboard", methods=["GET"])
def get_leaderboard():
    """Top users by coins."""
    cached = cache.get("leaderboard:top")
    if cached is not None:
        return success_response({"leaderboard": cached})

    leaderboard = UserService().get_leaderboard()
    cache.set("leaderboard:top", leaderboard)
    return success_response({"leaderboard": leaderboard})


@api_bp.route("/coins/add", methods=["POST"])
@limiter.limit(lambda: current_app.config["COIN_ACCRUAL_RATE_LIMIT"])
@jwt_required()
def add_coins():
    """
    Credit coins earned while playing.

    Request body:
    {
        "amount": 5
    }
    """
    data = request.get_json() or {}
    amount = data.get("amount")

    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        return validation_error({"amount": "Amount must be a positive integer"})

    user_id = current_user_id()
    result = LedgerService().add_coins(user_id, amount)
    if "error" in result:
        return result_error(result)

    cache.invalidate(f"user:{result['user']['username']}", "leaderboard:top")

    return success_response({"coins": result["balance"], "user": result["user"]})
