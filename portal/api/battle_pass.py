"""Battle pass API endpoints."""

from flask import request
from flask_jwt_extended import jwt_required

from portal import db
from portal.api import api_bp
from portal.models import User
from portal.services.battle_pass_service import BattlePassService
from portal.services.user_service import UserService
from portal.utils import (cache, not_found, result_error, success_response,
                          validation_error)
from portal.utils.auth import admin_required, current_user_id


@api_bp.route("/battlepass/<username>", methods=["GET"])
def get_battle_pass(username: str):
    """Progress and the season's reward tiers for a user."""
    user = UserService().get_by_username(username)
    if not user:
        return not_found("User not found")

    result = BattlePassService().get_overview(user.id)
    if "error" in result:
        return result_error(result)

    return success_response({"progress": result["progress"], "tiers": result["tiers"]})


@api_bp.route("/battlepass/add-xp", methods=["POST"])
@jwt_required()
def add_battle_pass_xp():
    """
    Add battle pass experience for the current user.

    Request body:
    {
        "amount": 150
    }
    """
    data = request.get_json() or {}
    amount = data.get("amount")
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        return validation_error({"amount": "Amount must be a positive integer"})

    result = BattlePassService().add_experience(current_user_id(), amount)
    if "error" in result:
        return result_error(result)

    return success_response(
        {"progress": result["progress"], "tiers_gained": result["tiers_gained"]}
    )


@api_bp.route("/battlepass/purchase-premium", methods=["POST"])
@jwt_required()
def purchase_premium_pass():
    """Unlock the premium reward track for coins."""
    result = BattlePassService().purchase_premium_pass(current_user_id())
    if "error" in result:
        return result_error(result)

    user = db.session.get(User, current_user_id())
    cache.invalidate(f"user:{user.username}", "leaderboard:top")
    return success_response({"progress": result["progress"], "coins": result["balance"]})


@api_bp.route("/battlepass/seasons/<int:season>/tiers", methods=["GET"])
def get_season_tiers(season: int):
    """Reward table of a season."""
    tiers = BattlePassService().get_tiers(season)
    return success_response({"season": season, "tiers": [t.to_dict() for t in tiers]})


@api_bp.route("/battlepass/seasons/<int:season>/tiers/<int:tier>", methods=["PUT"])
@admin_required
def upsert_season_tier(season: int, tier: int):
    """
    Set the rewards of a tier (staff only).

    Request body (all optional, null clears a reward):
    {
        "free_cosmetic_id": 1,
        "premium_cosmetic_id": 2,
        "free_game_id": null,
        "premium_game_id": 5
    }
    """
    data = request.get_json() or {}
    fields = ("free_cosmetic_id", "premium_cosmetic_id", "free_game_id", "premium_game_id")

    errors = {}
    for field in fields:
        value = data.get(field)
        if value is not None and (
            not isinstance(value, int) or isinstance(value, bool) or value <= 0
        ):
            errors[field] = "Must be an id or null"
    if errors:
        return validation_error(errors)

    result = BattlePassService().upsert_tier(
        season, tier, **{field: data.get(field) for field in fields}
    )
    if "error" in result:
        return result_error(result)

    return success_response({"tier": result["tier"]})
