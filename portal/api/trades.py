"""Cosmetic trading API endpoints."""

from flask import request
from flask_jwt_extended import jwt_required

from portal.api import api_bp
from portal.models import TradeStatus
from portal.services.trading_service import CosmeticTradingService
from portal.utils import cache, result_error, success_response, validation_error
from portal.utils.auth import current_user_id


def _id_list(value) -> bool:
    return isinstance(value, list) and all(
        isinstance(i, int) and not isinstance(i, bool) and i > 0 for i in value
    )


@api_bp.route("/trades/propose", methods=["POST"])
@jwt_required()
def propose_trade():
    """
    Offer some of your cosmetics for some of another member's.

    Request body:
    {
        "receiver_id": 2,
        "group_id": 1,
        "sender_cosmetic_ids": [4],
        "receiver_cosmetic_ids": [7, 9]
    }
    """
    data = request.get_json() or {}

    errors = {}
    for field in ("receiver_id", "group_id"):
        value = data.get(field)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            errors[field] = f"{field} is required"
    for field in ("sender_cosmetic_ids", "receiver_cosmetic_ids"):
        if not _id_list(data.get(field)):
            errors[field] = "Must be a list of cosmetic IDs"
    if errors:
        return validation_error(errors)

    result = CosmeticTradingService().propose_trade(
        group_id=data["group_id"],
        sender_id=current_user_id(),
        receiver_id=data["receiver_id"],
        sender_cosmetic_ids=data["sender_cosmetic_ids"],
        receiver_cosmetic_ids=data["receiver_cosmetic_ids"],
    )
    if "error" in result:
        return result_error(result)

    return success_response({"trade": result["trade"]}, status_code=201)


@api_bp.route("/trades/<int:trade_id>/accept", methods=["POST"])
@jwt_required()
def accept_trade(trade_id: int):
    """Accept a trade addressed to you."""
    result = CosmeticTradingService().accept_trade(trade_id, current_user_id())
    if "error" in result:
        return result_error(result)

    trade = result["trade"]
    for username in (trade["sender_username"], trade["receiver_username"]):
        cache.invalidate(f"user:{username}:cosmetics")

    return success_response({"trade": trade, "message": "Trade completed"})


@api_bp.route("/trades/<int:trade_id>/reject", methods=["POST"])
@jwt_required()
def reject_trade(trade_id: int):
    """Reject a trade addressed to you."""
    result = CosmeticTradingService().reject_trade(trade_id, current_user_id())
    if "error" in result:
        return result_error(result)

    return success_response({"trade": result["trade"]})


@api_bp.route("/trades", methods=["GET"])
@jwt_required()
def get_incoming_trades():
    """
    Trades addressed to the current user.

    Query params:
    - status: pending (default), accepted, rejected or all
    """
    status = request.args.get("status", TradeStatus.PENDING.value)
    if status == "all":
        status = None
    elif status not in [s.value for s in TradeStatus]:
        return validation_error({"status": "Unknown trade status"})

    trades = CosmeticTradingService().get_incoming_trades(current_user_id(), status)
    return success_response(
        {"trades": [t.to_dict() for t in trades], "total": len(trades)}
    )


@api_bp.route("/trades/<int:trade_id>", methods=["GET"])
@jwt_required()
def get_trade(trade_id: int):
    """Get one of your trades."""
    result = CosmeticTradingService().get_trade(trade_id, current_user_id())
    if "error" in result:
        return result_error(result)

    return success_response({"trade": result["trade"]})
