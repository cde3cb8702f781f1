"""Minimal group membership, the context trades happen in."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models.group import Group, GroupMember

logger = logging.getLogger(__name__)


class GroupService:
    def create_group(
        self, user_id: int, name: str, description: str | None = None
    ) -> dict[str, Any]:
        """Create a group with its creator as admin member."""
        group = Group(name=name, description=description, created_by=user_id)
        db.session.add(group)
        db.session.flush()

        db.session.add(GroupMember(group_id=group.id, user_id=user_id, role="admin"))
        db.session.commit()

        logger.info(f"Group {group.id} created by user {user_id}")
        return {"success": True, "group": group.to_dict()}

    def join_group(self, group_id: int, user_id: int) -> dict[str, Any]:
        if not db.session.get(Group, group_id):
            return {"error": "group_not_found"}

        if GroupMember.query.filter_by(group_id=group_id, user_id=user_id).first():
            return {"error": "already_member"}

        member = GroupMember(group_id=group_id, user_id=user_id, role="member")
        db.session.add(member)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return {"error": "already_member"}

        return {"success": True, "member": member.to_dict()}

    def get_members(self, group_id: int) -> list[dict]:
        members = GroupMember.query.filter_by(group_id=group_id).all()
        return [m.to_dict() for m in members]
