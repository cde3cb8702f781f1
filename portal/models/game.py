"""Game metadata, premium ownership and difficulty votes."""

from datetime import datetime

from portal import db


class Game(db.Model):
    """Playable game. A null price means free, otherwise premium."""

    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    thumbnail = db.Column(db.String(512), nullable=True)
    game_type = db.Column(db.String(10), default="html", nullable=False)  # html, swf
    price = db.Column(db.Integer, nullable=True)
    created_by = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_premium(self) -> bool:
        return self.price is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "thumbnail": self.thumbnail,
            "game_type": self.game_type,
            "price": self.price,
            "is_premium": self.is_premium,
            "created_by": self.created_by,
        }


class UserOwnedGame(db.Model):
    """Premium game bought by a user."""

    __tablename__ = "user_owned_games"
    __table_args__ = (
        db.UniqueConstraint("user_id", "game_id", name="unique_user_game"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    game_id = db.Column(
        db.Integer,
        db.ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
    )
    purchased_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    game = db.relationship("Game")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "game_id": self.game_id,
            "game": self.game.to_dict() if self.game else None,
            "purchased_at": (
                self.purchased_at.isoformat() if self.purchased_at else None
            ),
        }


class GameDifficultyVote(db.Model):
    """One difficulty rating (1-5). Repeat votes add rows."""

    __tablename__ = "game_difficulty_votes"
    __table_args__ = (
        db.CheckConstraint(
            "difficulty BETWEEN 1 AND 5", name="ck_votes_difficulty_range"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(
        db.Integer,
        db.ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    difficulty = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "game_id": self.game_id,
            "user_id": self.user_id,
            "difficulty": self.difficulty,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
