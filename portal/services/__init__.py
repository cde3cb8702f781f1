"""Business logic services."""

from portal.services.battle_pass_service import BattlePassService
from portal.services.cosmetics_service import CosmeticsService
from portal.services.difficulty_service import DifficultyVoteService
from portal.services.game_service import GameService
from portal.services.group_service import GroupService
from portal.services.ledger_service import LedgerService
from portal.services.trading_service import CosmeticTradingService
from portal.services.user_service import UserService

__all__ = [
    "LedgerService",
    "UserService",
    "CosmeticsService",
    "CosmeticTradingService",
    "BattlePassService",
    "DifficultyVoteService",
    "GameService",
    "GroupService",
]
