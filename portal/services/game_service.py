"""Game catalog and premium game purchases."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models.game import Game, UserOwnedGame
from portal.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

GAME_TYPES = ("html", "swf")


class GameService:
    def __init__(self, ledger: LedgerService | None = None):
        self.ledger = ledger or LedgerService()

    def list_games(self, premium: bool | None = None) -> list[dict]:
        query = Game.query
        if premium is True:
            query = query.filter(Game.price.isnot(None))
        elif premium is False:
            query = query.filter(Game.price.is_(None))
        return [g.to_dict() for g in query.order_by(Game.created_at.desc()).all()]

    def create_game(
        self,
        title: str,
        created_by: int,
        price: int | None = None,
        game_type: str = "html",
        thumbnail: str | None = None,
    ) -> dict[str, Any]:
        """Register game metadata. The uploaded file is handled elsewhere."""
        if price is not None and (
            not isinstance(price, int) or isinstance(price, bool) or price < 0
        ):
            return {"error": "invalid_price"}

        game = Game(
            title=title,
            created_by=created_by,
            price=price,
            game_type=game_type if game_type in GAME_TYPES else "html",
            thumbnail=thumbnail,
        )
        db.session.add(game)
        db.session.commit()

        logger.info(f"Game {game.id} '{title}' registered, price {price}")
        return {"success": True, "game": game.to_dict()}

    def owns_game(self, user_id: int, game_id: int) -> bool:
        return (
            UserOwnedGame.query.filter_by(user_id=user_id, game_id=game_id).first()
            is not None
        )

    def get_owned_games(self, user_id: int) -> list[dict]:
        owned = (
            UserOwnedGame.query.filter_by(user_id=user_id)
            .order_by(UserOwnedGame.purchased_at)
            .all()
        )
        return [o.to_dict() for o in owned]

    def purchase_game(self, user_id: int, game_id: int) -> dict[str, Any]:
        """Buy a premium game: debit and ownership row commit together."""
        game = db.session.get(Game, game_id)
        if not game:
            return {"error": "game_not_found"}

        if not game.is_premium:
            return {"error": "game_not_premium"}

        user = self.ledger.lock_user(user_id)
        if not user:
            db.session.rollback()
            return {"error": "user_not_found"}

        if self.owns_game(user_id, game_id):
            db.session.rollback()
            return {"error": "already_owned"}

        available = user.coins
        if not self.ledger.debit(user, game.price):
            db.session.rollback()
            return {
                "error": "insufficient_funds",
                "required": game.price,
                "available": available,
            }

        owned = UserOwnedGame(user_id=user_id, game_id=game_id)
        db.session.add(owned)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return {"error": "already_owned"}

        logger.info(f"User {user_id} bought game {game_id} for {game.price} coins")
        return {"success": True, "owned_game": owned.to_dict(), "balance": user.coins}
