"""Database models."""

from portal.models.battle_pass import BattlePassTier, UserBattlePassProgress
from portal.models.cosmetic import (
    COSMETIC_TYPES,
    ActiveCosmetic,
    Cosmetic,
    UserCosmetic,
)
from portal.models.game import Game, GameDifficultyVote, UserOwnedGame
from portal.models.group import Group, GroupMember
from portal.models.trade import CosmeticTrade, TradeStatus
from portal.models.user import ROLES, User

__all__ = [
    "User",
    "ROLES",
    # Cosmetics
    "Cosmetic",
    "UserCosmetic",
    "ActiveCosmetic",
    "COSMETIC_TYPES",
    # Trading
    "CosmeticTrade",
    "TradeStatus",
    "Group",
    "GroupMember",
    # Battle pass
    "BattlePassTier",
    "UserBattlePassProgress",
    # Games
    "Game",
    "UserOwnedGame",
    "GameDifficultyVote",
]
