"""Coin ledger: balance mutation for a single user."""

import logging
from typing import Any

from portal import db
from portal.models.user import User

logger = logging.getLogger(__name__)


class LedgerService:
    """Reads and mutates user coin balances.

    Callers that spend coins load the user through ``lock_user`` so the
    affordability check and the debit happen on a row held FOR UPDATE until
    their transaction commits.
    """

    def lock_user(self, user_id: int) -> User | None:
        """Load a user row for update within the current transaction."""
        return db.session.get(User, user_id, with_for_update=True)

    def get_balance(self, user_id: int) -> int | None:
        user = db.session.get(User, user_id)
        return user.coins if user else None

    def debit(self, user: User, amount: int) -> bool:
        """Take ``amount`` coins from a locked user. False if unaffordable."""
        if amount < 0 or user.coins < amount:
            return False
        user.coins -= amount
        return True

    def add_coins(self, user_id: int, amount: int) -> dict[str, Any]:
        """Apply a coin delta and commit.

        Positive amounts are rewards. A negative delta is only applied when
        the balance covers it, so the balance never drops below zero.
        """
        user = self.lock_user(user_id)
        if not user:
            return {"error": "user_not_found"}

        if user.coins + amount < 0:
            db.session.rollback()
            return {
                "error": "insufficient_funds",
                "required": -amount,
                "available": user.coins,
            }

        user.coins += amount
        db.session.commit()

        logger.info(f"Coins {amount:+d} for user {user_id}, balance {user.coins}")
        return {"success": True, "user": user.to_dict(), "balance": user.coins}
