"""Game catalog, premium purchases and difficulty voting endpoints."""

from flask import request
from flask_jwt_extended import jwt_required

from portal import db
from portal.api import api_bp
from portal.models import User
from portal.services.difficulty_service import DifficultyVoteService
from portal.services.game_service import GameService
from portal.services.user_service import UserService
from portal.utils import (cache, not_found, result_error, success_response,
                          validation_error)
from portal.utils.auth import admin_required, current_user_id


@api_bp.route("/games", methods=["GET"])
def list_games():
    """
    List games.

    Query params:
    - premium: "true" for premium only, "false" for free only
    """
    premium = request.args.get("premium")
    flag = {"true": True, "false": False}.get(premium)

    return success_response({"games": GameService().list_games(premium=flag)})


@api_bp.route("/games", methods=["POST"])
@admin_required
def create_game():
    """
    Register game metadata (staff only).

    Request body:
    {
        "title": "Space Runner",
        "price": 200,  # null for a free game
        "game_type": "html"
    }
    """
    data = request.get_json() or {}
    title = (data.get("title") or "").strip()
    if not title:
        return validation_error({"title": "Title is required"})

    result = GameService().create_game(
        title=title,
        created_by=current_user_id(),
        price=data.get("price"),
        game_type=data.get("game_type", "html"),
        thumbnail=data.get("thumbnail"),
    )
    if "error" in result:
        return result_error(result)

    return success_response({"game": result["game"]}, status_code=201)


@api_bp.route("/games/<int:game_id>/purchase", methods=["POST"])
@jwt_required()
def purchase_game(game_id: int):
    """Buy a premium game with coins."""
    user_id = current_user_id()
    result = GameService().purchase_game(user_id, game_id)
    if "error" in result:
        return result_error(result)

    user = db.session.get(User, user_id)
    cache.invalidate(f"user:{user.username}", "leaderboard:top")

    return success_response(
        {"owned_game": result["owned_game"], "coins": result["balance"]},
        status_code=201,
    )


@api_bp.route("/users/<username>/owned-games", methods=["GET"])
def get_owned_games(username: str):
    """Premium games a user has bought."""
    user = UserService().get_by_username(username)
    if not user:
        return not_found("User not found")

    return success_response({"games": GameService().get_owned_games(user.id)})


@api_bp.route("/games/<int:game_id>/difficulty-vote", methods=["POST"])
@jwt_required()
def vote_difficulty(game_id: int):
    """
    Rate how hard a game is.

    Request body:
    {
        "difficulty": 4  # 1 (easy) to 5 (hard)
    }
    """
    data = request.get_json() or {}
    difficulty = data.get("difficulty")

    result = DifficultyVoteService().vote(game_id, current_user_id(), difficulty)
    if "error" in result:
        return result_error(result)

    cache.invalidate_pattern(f"game:{game_id}:")
    return success_response({"vote": result["vote"]}, status_code=201)


@api_bp.route("/games/<int:game_id>/difficulty", methods=["GET"])
def get_difficulty(game_id: int):
    """Average difficulty and number of votes."""
    cache_key = f"game:{game_id}:difficulty"
    cached = cache.get(cache_key)
    if cached is not None:
        return success_response(cached)

    summary = DifficultyVoteService().get_summary(game_id)
    cache.set(cache_key, summary)
    return success_response(summary)
