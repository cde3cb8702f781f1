"""Battle pass reward table and per-user progression."""

from datetime import datetime

from portal import db


class BattlePassTier(db.Model):
    """Rewards unlocked at a tier of a season, on the free and premium tracks."""

    __tablename__ = "battle_pass_tiers"
    __table_args__ = (
        db.UniqueConstraint("season", "tier", name="unique_season_tier"),
    )

    id = db.Column(db.Integer, primary_key=True)
    season = db.Column(db.Integer, nullable=False, index=True)
    tier = db.Column(db.Integer, nullable=False)  # 1..50

    free_cosmetic_id = db.Column(
        db.Integer, db.ForeignKey("cosmetics.id"), nullable=True
    )
    premium_cosmetic_id = db.Column(
        db.Integer, db.ForeignKey("cosmetics.id"), nullable=True
    )
    free_game_id = db.Column(db.Integer, db.ForeignKey("games.id"), nullable=True)
    premium_game_id = db.Column(db.Integer, db.ForeignKey("games.id"), nullable=True)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "season": self.season,
            "tier": self.tier,
            "free_cosmetic_id": self.free_cosmetic_id,
            "premium_cosmetic_id": self.premium_cosmetic_id,
            "free_game_id": self.free_game_id,
            "premium_game_id": self.premium_game_id,
        }

    def __repr__(self) -> str:
        return f"<BattlePassTier season={self.season} tier={self.tier}>"


class UserBattlePassProgress(db.Model):
    """A user's position on the battle pass.

    ``experience`` is the remainder towards the next tier, not a running total.
    """

    __tablename__ = "user_battle_pass_progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    current_season = db.Column(db.Integer, default=1, nullable=False)
    current_tier = db.Column(db.Integer, default=0, nullable=False)
    experience = db.Column(db.Integer, default=0, nullable=False)
    has_premium_pass = db.Column(db.Boolean, default=False, nullable=False)
    premium_purchased_at = db.Column(db.DateTime, nullable=True)

    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "current_season": self.current_season,
            "current_tier": self.current_tier,
            "experience": self.experience,
            "has_premium_pass": self.has_premium_pass,
        }
