"""User model."""

from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from portal import db

ROLES = ("user", "admin", "owner")


class User(db.Model):
    """Portal user with a coin balance."""

    __tablename__ = "users"
    __table_args__ = (db.CheckConstraint("coins >= 0", name="ck_users_coins_non_negative"),)

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=True)

    # In-app currency
    coins = db.Column(db.Integer, default=0, nullable=False)

    # Moderation
    role = db.Column(db.String(20), default="user", nullable=False)  # user, admin, owner
    is_admin = db.Column(db.Boolean, default=False, nullable=False)  # legacy flag
    is_banned = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def set_password(self, password: str) -> None:
        """Set password hash."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check password against hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_staff(self) -> bool:
        return self.is_admin or self.role in ("admin", "owner")

    def to_dict(self) -> dict:
        """Convert user to dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "coins": self.coins,
            "role": self.role,
            "is_admin": self.is_staff,
            "is_banned": self.is_banned,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User {self.username}>"
