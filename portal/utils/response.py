"""API response helpers."""

from typing import Any

from flask import jsonify


def success_response(
    data: Any = None, message: str | None = None, status_code: int = 200
):
    """Create a success response."""
    response = {"success": True}

    if data is not None:
        response["data"] = data

    if message is not None:
        response["message"] = message

    return jsonify(response), status_code


def error_response(
    code: str, message: str, details: dict | None = None, status_code: int = 400
):
    """Create an error response."""
    response = {"success": False, "error": {"code": code, "message": message}}

    if details is not None:
        response["error"]["details"] = details

    return jsonify(response), status_code


# Common error responses
def unauthorized(message: str = "Unauthorized"):
    """401 Unauthorized response."""
    return error_response("UNAUTHORIZED", message, status_code=401)


def forbidden(message: str = "Access denied"):
    """403 Forbidden response."""
    return error_response("FORBIDDEN", message, status_code=403)


def not_found(message: str = "Resource not found"):
    """404 Not Found response."""
    return error_response("NOT_FOUND", message, status_code=404)


def validation_error(details: dict):
    """400 Validation Error response."""
    return error_response(
        "VALIDATION_ERROR", "Invalid input data", details, status_code=400
    )


def conflict(message: str = "Resource conflict"):
    """409 Conflict response."""
    return error_response("CONFLICT", message, status_code=409)


def server_error(message: str = "Internal server error"):
    """500 Internal Server Error response."""
    return error_response("SERVER_ERROR", message, status_code=500)


# Service error codes grouped by failure class
NOT_FOUND_ERRORS = {
    "user_not_found": "User not found",
    "cosmetic_not_found": "Cosmetic not found",
    "trade_not_found": "Trade not found",
    "game_not_found": "Game not found",
    "group_not_found": "Group not found",
    "tier_not_found": "Battle pass tier not found",
}

CONFLICT_ERRORS = {
    "already_owned": "Already owned",
    "trade_not_pending": "Trade has already been resolved",
    "already_premium": "Premium pass already purchased",
    "already_member": "Already a member of this group",
    "username_taken": "Username already exists",
    "cosmetic_not_owned": "Cosmetic is not owned by the expected user",
}

FORBIDDEN_ERRORS = {
    "not_authorized": "Only the trade receiver can do this",
    "not_group_member": "Both users must be members of the group",
    "user_banned": "You have been banned from this website",
}

INPUT_ERRORS = {
    "invalid_amount": "Amount must be a positive integer",
    "empty_cosmetic_ids": "Both sides of a trade must list at least one cosmetic",
    "invalid_difficulty": "Difficulty must be an integer from 1 to 5",
    "invalid_price": "Price must be a non-negative integer",
    "invalid_cosmetic_type": "Unknown cosmetic type",
    "invalid_tier": "Tier must be between 1 and 50",
    "invalid_role": "Unknown role",
    "self_trade": "Cannot trade with yourself",
    "game_not_premium": "This game is free",
    "insufficient_funds": "Not enough coins",
}


def result_error(result: dict):
    """Turn a service ``{"error": code}`` result into the matching response."""
    code = result["error"]
    details = {k: v for k, v in result.items() if k != "error"} or None

    if code in NOT_FOUND_ERRORS:
        return error_response(
            "NOT_FOUND", NOT_FOUND_ERRORS[code], {"reason": code}, status_code=404
        )
    if code in CONFLICT_ERRORS:
        return error_response(
            "CONFLICT",
            CONFLICT_ERRORS[code],
            {"reason": code, **(details or {})},
            status_code=409,
        )
    if code in FORBIDDEN_ERRORS:
        return error_response(
            "FORBIDDEN", FORBIDDEN_ERRORS[code], {"reason": code}, status_code=403
        )
    if code == "invalid_credentials":
        return unauthorized("Invalid credentials")
    if code == "insufficient_funds":
        return error_response(
            "INSUFFICIENT_FUNDS",
            INPUT_ERRORS[code],
            {"reason": code, **(details or {})},
            status_code=400,
        )
    return validation_error({"error": INPUT_ERRORS.get(code, code), "reason": code})
