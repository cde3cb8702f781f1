"""Cosmetics service: catalog, purchases and the equipped item.

Catalog entries live in the ``cosmetics`` table and are authored by staff.
Users buy them with coins and equip one item at a time.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models.cosmetic import (COSMETIC_TYPES, ActiveCosmetic, Cosmetic,
                                    UserCosmetic)
from portal.models.user import User
from portal.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class CosmeticsService:
    """Service for managing cosmetic items."""

    def __init__(self, ledger: LedgerService | None = None):
        self.ledger = ledger or LedgerService()

    def list_cosmetics(self) -> list[dict]:
        """Get the whole catalog."""
        cosmetics = Cosmetic.query.order_by(Cosmetic.price, Cosmetic.id).all()
        return [c.to_dict() for c in cosmetics]

    def create_cosmetic(
        self,
        name: str,
        cosmetic_type: str,
        price: int,
        value: str,
        description: str | None = None,
        thumbnail: str | None = None,
    ) -> dict[str, Any]:
        """Add a catalog entry."""
        if cosmetic_type not in COSMETIC_TYPES:
            return {"error": "invalid_cosmetic_type"}

        if not isinstance(price, int) or isinstance(price, bool) or price < 0:
            return {"error": "invalid_price"}

        cosmetic = Cosmetic(
            name=name,
            type=cosmetic_type,
            price=price,
            value=value,
            description=description,
            thumbnail=thumbnail,
        )
        db.session.add(cosmetic)
        db.session.commit()

        logger.info(f"Cosmetic {cosmetic.id} '{name}' added at {price} coins")
        return {"success": True, "cosmetic": cosmetic.to_dict()}

    def get_owned(self, user_id: int) -> list[UserCosmetic]:
        return (
            UserCosmetic.query.filter_by(user_id=user_id)
            .order_by(UserCosmetic.purchased_at, UserCosmetic.id)
            .all()
        )

    def owns(self, user_id: int, cosmetic_id: int) -> bool:
        return (
            UserCosmetic.query.filter_by(user_id=user_id, cosmetic_id=cosmetic_id)
            .first()
            is not None
        )

    def get_user_cosmetics(self, user_id: int) -> dict:
        """Get user's owned cosmetics and equipped item."""
        active = self.get_active_cosmetic(user_id)
        return {
            "owned": [uc.to_dict() for uc in self.get_owned(user_id)],
            "active": active.to_dict() if active else None,
        }

    def purchase(self, user_id: int, cosmetic_id: int) -> dict[str, Any]:
        """Buy a cosmetic: debit the price and record ownership together."""
        cosmetic = db.session.get(Cosmetic, cosmetic_id)
        if not cosmetic:
            return {"error": "cosmetic_not_found"}

        user = self.ledger.lock_user(user_id)
        if not user:
            db.session.rollback()
            return {"error": "user_not_found"}

        if self.owns(user_id, cosmetic_id):
            db.session.rollback()
            return {"error": "already_owned"}

        price = cosmetic.price
        available = user.coins
        if not self.ledger.debit(user, price):
            db.session.rollback()
            return {
                "error": "insufficient_funds",
                "required": price,
                "available": available,
            }

        ownership = UserCosmetic(user_id=user_id, cosmetic_id=cosmetic_id)
        db.session.add(ownership)
        try:
            db.session.commit()
        except IntegrityError:
            # Unique (user_id, cosmetic_id) lost a race with a parallel purchase
            db.session.rollback()
            return {"error": "already_owned"}

        logger.info(
            f"User {user_id} bought cosmetic {cosmetic_id} for {price} coins, "
            f"balance {user.coins}"
        )
        return {
            "success": True,
            "ownership": ownership.to_dict(),
            "balance": user.coins,
        }

    def get_active_cosmetic(self, user_id: int) -> ActiveCosmetic | None:
        return ActiveCosmetic.query.filter_by(user_id=user_id).first()

    def _lock_active(self, user_id: int) -> ActiveCosmetic | None:
        return ActiveCosmetic.query.filter_by(user_id=user_id).with_for_update().first()

    def set_active_cosmetic(
        self, user_id: int, cosmetic_id: int | None
    ) -> dict[str, Any]:
        """Equip an owned cosmetic, or unequip with ``None``."""
        if not db.session.get(User, user_id):
            return {"error": "user_not_found"}

        if cosmetic_id is not None:
            if not db.session.get(Cosmetic, cosmetic_id):
                return {"error": "cosmetic_not_found"}
            if not self.owns(user_id, cosmetic_id):
                return {"error": "cosmetic_not_owned"}

        active = self._lock_active(user_id)
        if active:
            active.active_cosmetic_id = cosmetic_id
        else:
            active = ActiveCosmetic(user_id=user_id, active_cosmetic_id=cosmetic_id)
            db.session.add(active)

        try:
            db.session.commit()
        except IntegrityError:
            # First equip raced with another request; update the row it created
            db.session.rollback()
            active = ActiveCosmetic.query.filter_by(user_id=user_id).first()
            active.active_cosmetic_id = cosmetic_id
            db.session.commit()

        return {"success": True, "active": active.to_dict()}
