"""Group membership endpoints."""

from flask import request
from flask_jwt_extended import jwt_required

from portal import db
from portal.api import api_bp
from portal.models import Group
from portal.services.group_service import GroupService
from portal.utils import not_found, result_error, success_response, validation_error
from portal.utils.auth import current_user_id


@api_bp.route("/groups", methods=["POST"])
@jwt_required()
def create_group():
    """
    Create a group.

    Request body:
    {
        "name": "Speedrunners",
        "description": "optional"
    }
    """
    data = request.get_json() or {}
    name = (data.get("name") or "").strip()
    if not name:
        return validation_error({"name": "Name is required"})

    result = GroupService().create_group(
        current_user_id(), name, data.get("description")
    )
    return success_response({"group": result["group"]}, status_code=201)


@api_bp.route("/groups/<int:group_id>", methods=["GET"])
def get_group(group_id: int):
    group = db.session.get(Group, group_id)
    if not group:
        return not_found("Group not found")

    return success_response(
        {"group": group.to_dict(), "members": GroupService().get_members(group_id)}
    )


@api_bp.route("/groups/<int:group_id>/join", methods=["POST"])
@jwt_required()
def join_group(group_id: int):
    """Join a group."""
    result = GroupService().join_group(group_id, current_user_id())
    if "error" in result:
        return result_error(result)

    return success_response({"member": result["member"]})
