"""Authentication API endpoints."""

import logging

from flask import request
from flask_jwt_extended import create_access_token, jwt_required

from portal import db
from portal.api import api_bp
from portal.models import User
from portal.services.user_service import MIN_PASSWORD_LENGTH, UserService
from portal.utils import not_found, result_error, success_response, validation_error
from portal.utils.auth import current_user_id

logger = logging.getLogger(__name__)


def _credentials():
    data = request.get_json() or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    errors = {}
    if not username:
        errors["username"] = "Username is required"
    if not password:
        errors["password"] = "Password is required"
    return username, password, errors


@api_bp.route("/auth/register", methods=["POST"])
def register():
    """
    Create an account.

    Request body:
    {
        "username": "player1",
        "password": "secret123"
    }
    """
    username, password, errors = _credentials()
    if not errors and len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if errors:
        return validation_error(errors)

    result = UserService().register(username, password)
    if "error" in result:
        return result_error(result)

    user = result["user"]
    token = create_access_token(identity=str(user.id))
    return success_response({"user": user.to_dict(), "token": token}, status_code=201)


@api_bp.route("/auth/login", methods=["POST"])
def login():
    """Exchange username and password for an access token."""
    username, password, errors = _credentials()
    if errors:
        return validation_error(errors)

    result = UserService().authenticate(username, password)
    if "error" in result:
        logger.info(f"Login refused for {username!r}: {result['error']}")
        return result_error(result)

    user = result["user"]
    token = create_access_token(identity=str(user.id))
    return success_response({"user": user.to_dict(), "token": token})


@api_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def get_current_user():
    """Get the user behind the access token."""
    user = db.session.get(User, current_user_id())
    if not user:
        return not_found("User not found")

    return success_response({"user": user.to_dict()})
