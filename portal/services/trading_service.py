"""Cosmetic trading between members of a group.

A trade is proposed by the sender, then accepted or rejected once by the
receiver. Accepting moves every listed ownership row in one transaction.
"""

import logging
from datetime import datetime
from typing import Any

from portal import db
from portal.models.cosmetic import ActiveCosmetic, Cosmetic, UserCosmetic
from portal.models.group import Group, GroupMember
from portal.models.trade import CosmeticTrade, TradeStatus
from portal.models.user import User

logger = logging.getLogger(__name__)


def _ordered_ids(ids) -> list[int]:
    """Deduplicate while keeping the caller's order."""
    return list(dict.fromkeys(int(i) for i in ids or []))


class CosmeticTradingService:
    def _is_member(self, group_id: int, user_id: int) -> bool:
        return (
            GroupMember.query.filter_by(group_id=group_id, user_id=user_id).first()
            is not None
        )

    def _ownership_conflicts(
        self,
        owned: set[tuple[int, int]],
        sender_id: int,
        receiver_id: int,
        sender_ids: list[int],
        receiver_ids: list[int],
    ) -> dict[str, Any] | None:
        """Check both sides still hold what they offer and not what they get."""
        sender_missing = [c for c in sender_ids if (sender_id, c) not in owned]
        receiver_missing = [c for c in receiver_ids if (receiver_id, c) not in owned]
        if sender_missing or receiver_missing:
            return {
                "error": "cosmetic_not_owned",
                "sender_missing": sender_missing,
                "receiver_missing": receiver_missing,
            }

        duplicates = [c for c in sender_ids if (receiver_id, c) in owned] + [
            c for c in receiver_ids if (sender_id, c) in owned
        ]
        if duplicates:
            return {"error": "already_owned", "cosmetic_ids": duplicates}

        return None

    def propose_trade(
        self,
        group_id: int,
        sender_id: int,
        receiver_id: int,
        sender_cosmetic_ids: list[int],
        receiver_cosmetic_ids: list[int],
    ) -> dict[str, Any]:
        """Create a pending trade offer."""
        sender_ids = _ordered_ids(sender_cosmetic_ids)
        receiver_ids = _ordered_ids(receiver_cosmetic_ids)

        if not sender_ids or not receiver_ids:
            return {"error": "empty_cosmetic_ids"}

        if sender_id == receiver_id:
            return {"error": "self_trade"}

        if not db.session.get(User, receiver_id):
            return {"error": "user_not_found"}

        if not db.session.get(Group, group_id):
            return {"error": "group_not_found"}

        if not (
            self._is_member(group_id, sender_id)
            and self._is_member(group_id, receiver_id)
        ):
            return {"error": "not_group_member"}

        all_ids = set(sender_ids) | set(receiver_ids)
        known = Cosmetic.query.filter(Cosmetic.id.in_(all_ids)).count()
        if known != len(all_ids):
            return {"error": "cosmetic_not_found"}

        # Early feedback only; acceptance re-checks ownership under lock
        rows = UserCosmetic.query.filter(
            UserCosmetic.user_id.in_([sender_id, receiver_id]),
            UserCosmetic.cosmetic_id.in_(all_ids),
        ).all()
        owned = {(r.user_id, r.cosmetic_id) for r in rows}
        problem = self._ownership_conflicts(
            owned, sender_id, receiver_id, sender_ids, receiver_ids
        )
        if problem:
            return problem

        trade = CosmeticTrade(
            group_id=group_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            sender_cosmetic_ids=sender_ids,
            receiver_cosmetic_ids=receiver_ids,
            status=TradeStatus.PENDING.value,
        )
        db.session.add(trade)
        db.session.commit()

        logger.info(
            f"Trade {trade.id} proposed in group {group_id}: "
            f"{sender_id} offers {sender_ids} to {receiver_id} for {receiver_ids}"
        )
        return {"success": True, "trade": trade.to_dict()}

    def _lock_pending_for_receiver(
        self, trade_id: int, user_id: int
    ) -> tuple[CosmeticTrade | None, dict | None]:
        trade = CosmeticTrade.query.filter_by(id=trade_id).with_for_update().first()
        if not trade:
            db.session.rollback()
            return None, {"error": "trade_not_found"}

        if trade.receiver_id != user_id:
            db.session.rollback()
            return None, {"error": "not_authorized"}

        if not trade.is_pending:
            status = trade.status
            db.session.rollback()
            return None, {"error": "trade_not_pending", "status": status}

        return trade, None

    def accept_trade(self, trade_id: int, user_id: int) -> dict[str, Any]:
        """Accept a pending trade as its receiver, swapping ownership."""
        trade, error = self._lock_pending_for_receiver(trade_id, user_id)
        if error:
            return error

        sender_id, receiver_id = trade.sender_id, trade.receiver_id
        sender_ids = list(trade.sender_cosmetic_ids or [])
        receiver_ids = list(trade.receiver_cosmetic_ids or [])

        rows = (
            UserCosmetic.query.filter(
                UserCosmetic.user_id.in_([sender_id, receiver_id]),
                UserCosmetic.cosmetic_id.in_(set(sender_ids) | set(receiver_ids)),
            )
            .with_for_update()
            .all()
        )
        by_owner = {(r.user_id, r.cosmetic_id): r for r in rows}

        problem = self._ownership_conflicts(
            set(by_owner), sender_id, receiver_id, sender_ids, receiver_ids
        )
        if problem:
            db.session.rollback()
            logger.info(f"Trade {trade_id} cannot be accepted: {problem['error']}")
            return problem

        for cosmetic_id in sender_ids:
            by_owner[(sender_id, cosmetic_id)].user_id = receiver_id
        for cosmetic_id in receiver_ids:
            by_owner[(receiver_id, cosmetic_id)].user_id = sender_id

        # Items that changed hands can no longer be equipped by their old owner
        for owner_id, given_away in (
            (sender_id, sender_ids),
            (receiver_id, receiver_ids),
        ):
            ActiveCosmetic.query.filter(
                ActiveCosmetic.user_id == owner_id,
                ActiveCosmetic.active_cosmetic_id.in_(given_away),
            ).update({"active_cosmetic_id": None}, synchronize_session="fetch")

        trade.status = TradeStatus.ACCEPTED.value
        trade.resolved_at = datetime.utcnow()
        db.session.commit()

        logger.info(
            f"Trade {trade_id} accepted: {sender_ids} -> user {receiver_id}, "
            f"{receiver_ids} -> user {sender_id}"
        )
        return {"success": True, "trade": trade.to_dict()}

    def reject_trade(self, trade_id: int, user_id: int) -> dict[str, Any]:
        """Reject a pending trade as its receiver."""
        trade, error = self._lock_pending_for_receiver(trade_id, user_id)
        if error:
            return error

        trade.status = TradeStatus.REJECTED.value
        trade.resolved_at = datetime.utcnow()
        db.session.commit()

        logger.info(f"Trade {trade_id} rejected by user {user_id}")
        return {"success": True, "trade": trade.to_dict()}

    def get_trade(self, trade_id: int, user_id: int) -> dict[str, Any]:
        """Get a trade visible to either of its parties."""
        trade = db.session.get(CosmeticTrade, trade_id)
        if not trade:
            return {"error": "trade_not_found"}
        if user_id not in (trade.sender_id, trade.receiver_id):
            return {"error": "not_authorized"}
        return {"success": True, "trade": trade.to_dict()}

    def get_incoming_trades(
        self, user_id: int, status: str | None = TradeStatus.PENDING.value
    ) -> list[CosmeticTrade]:
        """Trades addressed to the user, pending ones by default."""
        query = CosmeticTrade.query.filter_by(receiver_id=user_id)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(CosmeticTrade.created_at.desc()).all()
