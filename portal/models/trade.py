"""Cosmetic trade model."""

from datetime import datetime
from enum import Enum

from portal import db


class TradeStatus(str, Enum):
    """Trade lifecycle: pending, then exactly one terminal state."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CosmeticTrade(db.Model):
    """Two-sided swap of cosmetics between members of a group."""

    __tablename__ = "cosmetic_trades"

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(
        db.Integer,
        db.ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    sender_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    receiver_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Ordered lists of Cosmetic ids offered by each side
    sender_cosmetic_ids = db.Column(db.JSON, nullable=False)
    receiver_cosmetic_ids = db.Column(db.JSON, nullable=False)

    status = db.Column(
        db.String(20), default=TradeStatus.PENDING.value, nullable=False, index=True
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    resolved_at = db.Column(db.DateTime, nullable=True)

    sender = db.relationship("User", foreign_keys=[sender_id])
    receiver = db.relationship("User", foreign_keys=[receiver_id])

    @property
    def is_pending(self) -> bool:
        return self.status == TradeStatus.PENDING.value

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "sender_id": self.sender_id,
            "sender_username": self.sender.username if self.sender else None,
            "receiver_id": self.receiver_id,
            "receiver_username": self.receiver.username if self.receiver else None,
            "sender_cosmetic_ids": list(self.sender_cosmetic_ids or []),
            "receiver_cosmetic_ids": list(self.receiver_cosmetic_ids or []),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
        }
