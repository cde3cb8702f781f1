"""Battle pass progression service."""

import logging
from datetime import datetime
from typing import Any

from flask import current_app
from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models.battle_pass import BattlePassTier, UserBattlePassProgress
from portal.models.cosmetic import Cosmetic
from portal.models.game import Game
from portal.models.user import User
from portal.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

XP_PER_TIER = 500
MAX_TIER = 50


def apply_experience(
    tier: int,
    experience: int,
    amount: int,
    xp_per_tier: int = XP_PER_TIER,
    max_tier: int = MAX_TIER,
) -> tuple[int, int]:
    """Advance (tier, experience) by ``amount`` XP.

    Whole tiers are taken out of the new total and the tier is clamped to
    ``max_tier``; the remainder is kept as experience. XP beyond the cap is
    not banked as extra tiers.

    >>> apply_experience(49, 400, 150)
    (50, 50)
    >>> apply_experience(50, 0, 1000)
    (50, 0)
    """
    total = experience + amount
    tiers_gained = total // xp_per_tier
    return min(max_tier, tier + tiers_gained), total % xp_per_tier


class BattlePassService:
    """Experience, tiers and the premium track."""

    def __init__(self, ledger: LedgerService | None = None):
        self.ledger = ledger or LedgerService()

    @property
    def xp_per_tier(self) -> int:
        return current_app.config.get("BATTLE_PASS_XP_PER_TIER", XP_PER_TIER)

    @property
    def max_tier(self) -> int:
        return current_app.config.get("BATTLE_PASS_MAX_TIER", MAX_TIER)

    def get_progress(self, user_id: int) -> UserBattlePassProgress | None:
        """Get the user's progress, creating it at tier 0 on first access."""
        progress = UserBattlePassProgress.query.filter_by(user_id=user_id).first()
        if progress:
            return progress

        if not db.session.get(User, user_id):
            return None

        progress = UserBattlePassProgress(
            user_id=user_id,
            current_season=current_app.config.get("BATTLE_PASS_CURRENT_SEASON", 1),
            current_tier=0,
            experience=0,
            has_premium_pass=False,
        )
        db.session.add(progress)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            progress = UserBattlePassProgress.query.filter_by(user_id=user_id).first()
        return progress

    def _lock_progress(self, user_id: int) -> UserBattlePassProgress | None:
        if not self.get_progress(user_id):
            return None
        return (
            UserBattlePassProgress.query.filter_by(user_id=user_id)
            .with_for_update()
            .first()
        )

    def add_experience(self, user_id: int, amount: int) -> dict[str, Any]:
        """Add XP and convert every full 500 into a tier, up to tier 50."""
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            return {"error": "invalid_amount"}

        progress = self._lock_progress(user_id)
        if not progress:
            return {"error": "user_not_found"}

        old_tier = progress.current_tier
        progress.current_tier, progress.experience = apply_experience(
            progress.current_tier,
            progress.experience,
            amount,
            self.xp_per_tier,
            self.max_tier,
        )
        db.session.commit()

        tiers_gained = progress.current_tier - old_tier
        if tiers_gained:
            logger.info(
                f"User {user_id} reached battle pass tier {progress.current_tier} "
                f"(+{tiers_gained})"
            )

        return {
            "success": True,
            "progress": progress.to_dict(),
            "tiers_gained": tiers_gained,
        }

    def purchase_premium_pass(self, user_id: int) -> dict[str, Any]:
        """Pay for the premium track and flag it in one transaction."""
        price = current_app.config.get("BATTLE_PASS_PREMIUM_PRICE", 500)

        if not self.get_progress(user_id):
            return {"error": "user_not_found"}

        user = self.ledger.lock_user(user_id)
        progress = (
            UserBattlePassProgress.query.filter_by(user_id=user_id)
            .with_for_update()
            .first()
        )

        if progress.has_premium_pass:
            db.session.rollback()
            return {"error": "already_premium"}

        available = user.coins
        if not self.ledger.debit(user, price):
            db.session.rollback()
            return {"error": "insufficient_funds", "required": price, "available": available}

        progress.has_premium_pass = True
        progress.premium_purchased_at = datetime.utcnow()
        db.session.commit()

        logger.info(f"User {user_id} bought the premium pass for {price} coins")
        return {"success": True, "progress": progress.to_dict(), "balance": user.coins}

    def get_tiers(self, season: int) -> list[BattlePassTier]:
        return (
            BattlePassTier.query.filter_by(season=season)
            .order_by(BattlePassTier.tier)
            .all()
        )

    def get_overview(self, user_id: int) -> dict[str, Any]:
        """Progress plus the season's reward table with unlock flags."""
        progress = self.get_progress(user_id)
        if not progress:
            return {"error": "user_not_found"}

        tiers = []
        for tier in self.get_tiers(progress.current_season):
            item = tier.to_dict()
            item["unlocked"] = tier.tier <= progress.current_tier
            item["premium_unlocked"] = item["unlocked"] and progress.has_premium_pass
            tiers.append(item)

        return {"success": True, "progress": progress.to_dict(), "tiers": tiers}

    def upsert_tier(
        self,
        season: int,
        tier: int,
        free_cosmetic_id: int | None = None,
        premium_cosmetic_id: int | None = None,
        free_game_id: int | None = None,
        premium_game_id: int | None = None,
    ) -> dict[str, Any]:
        """Create or replace the rewards of one season tier."""
        if season < 1 or not 1 <= tier <= self.max_tier:
            return {"error": "invalid_tier"}

        for cosmetic_id in (free_cosmetic_id, premium_cosmetic_id):
            if cosmetic_id is not None and not db.session.get(Cosmetic, cosmetic_id):
                return {"error": "cosmetic_not_found"}
        for game_id in (free_game_id, premium_game_id):
            if game_id is not None and not db.session.get(Game, game_id):
                return {"error": "game_not_found"}

        row = BattlePassTier.query.filter_by(season=season, tier=tier).first()
        if not row:
            row = BattlePassTier(season=season, tier=tier)
            db.session.add(row)

        row.free_cosmetic_id = free_cosmetic_id
        row.premium_cosmetic_id = premium_cosmetic_id
        row.free_game_id = free_game_id
        row.premium_game_id = premium_game_id
        db.session.commit()

        return {"success": True, "tier": row.to_dict()}
