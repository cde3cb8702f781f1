"""Cosmetic catalog, ownership and equip state models."""

from datetime import datetime

from portal import db

COSMETIC_TYPES = ("theme", "badge", "profile_frame", "cursor")


class Cosmetic(db.Model):
    """Purchasable catalog entry."""

    __tablename__ = "cosmetics"
    __table_args__ = (db.CheckConstraint("price >= 0", name="ck_cosmetics_price_non_negative"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=True)
    type = db.Column(db.String(20), nullable=False)  # theme, badge, profile_frame, cursor
    price = db.Column(db.Integer, nullable=False)  # in coins
    thumbnail = db.Column(db.String(512), nullable=True)
    value = db.Column(db.Text, nullable=False)  # CSS or asset applied by the client

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "price": self.price,
            "thumbnail": self.thumbnail,
            "value": self.value,
        }

    def __repr__(self) -> str:
        return f"<Cosmetic {self.name} ({self.type})>"


class UserCosmetic(db.Model):
    """Ownership of a cosmetic by a user.

    Created by a purchase or moved to another user by an accepted trade.
    """

    __tablename__ = "user_cosmetics"
    __table_args__ = (
        db.UniqueConstraint("user_id", "cosmetic_id", name="unique_user_cosmetic"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    cosmetic_id = db.Column(
        db.Integer,
        db.ForeignKey("cosmetics.id"),
        nullable=False,
        index=True,
    )
    purchased_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    cosmetic = db.relationship("Cosmetic")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "cosmetic_id": self.cosmetic_id,
            "cosmetic": self.cosmetic.to_dict() if self.cosmetic else None,
            "purchased_at": (
                self.purchased_at.isoformat() if self.purchased_at else None
            ),
        }


class ActiveCosmetic(db.Model):
    """Currently equipped cosmetic, at most one row per user."""

    __tablename__ = "active_cosmetics"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    active_cosmetic_id = db.Column(
        db.Integer, db.ForeignKey("cosmetics.id"), nullable=True
    )

    cosmetic = db.relationship("Cosmetic")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "active_cosmetic_id": self.active_cosmetic_id,
            "cosmetic": self.cosmetic.to_dict() if self.cosmetic else None,
        }
