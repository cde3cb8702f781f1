"""Community difficulty ratings for games."""

import logging
import math
from typing import Any

from sqlalchemy import func

from portal import db
from portal.models.game import Game, GameDifficultyVote
from portal.models.user import User

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like a rating display does (2.25 -> 2.3), not banker's rounding."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


class DifficultyVoteService:
    """Collects 1-5 votes and averages them per game.

    Every vote is stored as its own row, so a user voting twice counts twice.
    """

    def vote(self, game_id: int, user_id: int, difficulty: int) -> dict[str, Any]:
        if (
            not isinstance(difficulty, int)
            or isinstance(difficulty, bool)
            or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
        ):
            return {"error": "invalid_difficulty"}

        if not db.session.get(Game, game_id):
            return {"error": "game_not_found"}

        if not db.session.get(User, user_id):
            return {"error": "user_not_found"}

        vote = GameDifficultyVote(game_id=game_id, user_id=user_id, difficulty=difficulty)
        db.session.add(vote)
        db.session.commit()

        logger.info(f"User {user_id} rated game {game_id} difficulty {difficulty}")
        return {"success": True, "vote": vote.to_dict()}

    def get_votes(self, game_id: int) -> list[GameDifficultyVote]:
        return (
            GameDifficultyVote.query.filter_by(game_id=game_id)
            .order_by(GameDifficultyVote.created_at, GameDifficultyVote.id)
            .all()
        )

    def get_summary(self, game_id: int) -> dict[str, Any]:
        """Average difficulty to one decimal and the vote count. 0 when unrated."""
        avg, total = (
            db.session.query(
                func.avg(GameDifficultyVote.difficulty),
                func.count(GameDifficultyVote.id),
            )
            .filter(GameDifficultyVote.game_id == game_id)
            .one()
        )

        if not total:
            return {"average": 0, "total_votes": 0}

        return {"average": round_half_up(float(avg)), "total_votes": total}

    def average(self, game_id: int) -> float:
        return self.get_summary(game_id)["average"]
