"""Cosmetics shop API endpoints."""

from flask import request
from flask_jwt_extended import jwt_required

from portal import db
from portal.api import api_bp
from portal.models import User
from portal.services.cosmetics_service import CosmeticsService
from portal.services.user_service import UserService
from portal.utils import (cache, not_found, result_error, success_response,
                          validation_error)
from portal.utils.auth import admin_required, current_user_id


def _is_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _invalidate_user(user_id: int):
    user = db.session.get(User, user_id)
    if user:
        cache.invalidate_pattern(f"user:{user.username}")
    cache.invalidate("leaderboard:top")


@api_bp.route("/cosmetics", methods=["GET"])
def list_cosmetics():
    """Get the cosmetics catalog."""
    cached = cache.get("cosmetics:all")
    if cached is not None:
        return success_response({"cosmetics": cached})

    cosmetics = CosmeticsService().list_cosmetics()
    cache.set("cosmetics:all", cosmetics)
    return success_response({"cosmetics": cosmetics})


@api_bp.route("/cosmetics", methods=["POST"])
@admin_required
def create_cosmetic():
    """
    Add a catalog entry (staff only).

    Request body:
    {
        "name": "Neon Frame",
        "type": "profile_frame",  # theme, badge, profile_frame, cursor
        "price": 120,
        "value": "ring-2 ring-cyan-400",
        "description": "optional",
        "thumbnail": "optional"
    }
    """
    data = request.get_json() or {}

    errors = {}
    if not (data.get("name") or "").strip():
        errors["name"] = "Name is required"
    if not data.get("value"):
        errors["value"] = "Value is required"
    if errors:
        return validation_error(errors)

    result = CosmeticsService().create_cosmetic(
        name=data["name"].strip(),
        cosmetic_type=data.get("type"),
        price=data.get("price"),
        value=data["value"],
        description=data.get("description"),
        thumbnail=data.get("thumbnail"),
    )
    if "error" in result:
        return result_error(result)

    cache.invalidate("cosmetics:all")
    return success_response({"cosmetic": result["cosmetic"]}, status_code=201)


@api_bp.route("/users/<username>/cosmetics", methods=["GET"])
def get_user_cosmetics(username: str):
    """Owned cosmetics and the equipped one."""
    cache_key = f"user:{username}:cosmetics"
    cached = cache.get(cache_key)
    if cached is not None:
        return success_response(cached)

    user = UserService().get_by_username(username)
    if not user:
        return not_found("User not found")

    result = CosmeticsService().get_user_cosmetics(user.id)
    cache.set(cache_key, result)
    return success_response(result)


@api_bp.route("/cosmetics/purchase", methods=["POST"])
@jwt_required()
def purchase_cosmetic():
    """
    Buy a cosmetic with coins.

    Request body:
    {
        "cosmetic_id": 3
    }
    """
    data = request.get_json() or {}
    cosmetic_id = data.get("cosmetic_id")
    if not _is_id(cosmetic_id):
        return validation_error({"cosmetic_id": "Cosmetic ID is required"})

    user_id = current_user_id()
    result = CosmeticsService().purchase(user_id, cosmetic_id)
    if "error" in result:
        return result_error(result)

    _invalidate_user(user_id)
    return success_response(
        {"ownership": result["ownership"], "coins": result["balance"]},
        status_code=201,
    )


@api_bp.route("/cosmetics/activate", methods=["POST"])
@jwt_required()
def activate_cosmetic():
    """
    Equip an owned cosmetic, or pass null to unequip.

    Request body:
    {
        "cosmetic_id": 3  # or null
    }
    """
    data = request.get_json() or {}
    cosmetic_id = data.get("cosmetic_id")
    if cosmetic_id is not None and not _is_id(cosmetic_id):
        return validation_error({"cosmetic_id": "Cosmetic ID must be an id or null"})

    user_id = current_user_id()
    result = CosmeticsService().set_active_cosmetic(user_id, cosmetic_id)
    if "error" in result:
        return result_error(result)

    _invalidate_user(user_id)
    return success_response({"active": result["active"]})


@api_bp.route("/cosmetics/active", methods=["GET"])
@jwt_required()
def get_active_cosmetic():
    """Get the current user's equipped cosmetic."""
    active = CosmeticsService().get_active_cosmetic(current_user_id())
    return success_response({"active": active.to_dict() if active else None})
