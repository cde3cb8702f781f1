"""Initial schema: users, cosmetics, trades, battle pass, games.

Revision ID: 20261001_000001
Revises:
Create Date: 2026-10-01

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261001_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("coins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_banned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("coins >= 0", name="ck_users_coins_non_negative"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "cosmetics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("thumbnail", sa.String(512), nullable=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_cosmetics_price_non_negative"),
    )

    op.create_table(
        "games",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("thumbnail", sa.String(512), nullable=True),
        sa.Column("game_type", sa.String(10), nullable=False, server_default="html"),
        sa.Column("price", sa.Integer(), nullable=True),
        sa.Column(
            "created_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "created_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
    )

    op.create_table(
        "group_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "group_id",
            sa.Integer(),
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column(
            "joined_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("group_id", "user_id", name="unique_group_member"),
    )

    op.create_table(
        "user_cosmetics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "cosmetic_id",
            sa.Integer(),
            sa.ForeignKey("cosmetics.id"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "purchased_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("user_id", "cosmetic_id", name="unique_user_cosmetic"),
    )

    op.create_table(
        "active_cosmetics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "active_cosmetic_id",
            sa.Integer(),
            sa.ForeignKey("cosmetics.id"),
            nullable=True,
        ),
    )

    op.create_table(
        "cosmetic_trades",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "group_id",
            sa.Integer(),
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "sender_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "receiver_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("sender_cosmetic_ids", sa.JSON(), nullable=False),
        sa.Column("receiver_cosmetic_ids", sa.JSON(), nullable=False),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="pending", index=True
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "battle_pass_tiers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("season", sa.Integer(), nullable=False, index=True),
        sa.Column("tier", sa.Integer(), nullable=False),
        sa.Column(
            "free_cosmetic_id",
            sa.Integer(),
            sa.ForeignKey("cosmetics.id"),
            nullable=True,
        ),
        sa.Column(
            "premium_cosmetic_id",
            sa.Integer(),
            sa.ForeignKey("cosmetics.id"),
            nullable=True,
        ),
        sa.Column(
            "free_game_id", sa.Integer(), sa.ForeignKey("games.id"), nullable=True
        ),
        sa.Column(
            "premium_game_id", sa.Integer(), sa.ForeignKey("games.id"), nullable=True
        ),
        sa.UniqueConstraint("season", "tier", name="unique_season_tier"),
    )

    op.create_table(
        "user_battle_pass_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("current_season", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("current_tier", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("experience", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "has_premium_pass", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("premium_purchased_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "user_owned_games",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "game_id",
            sa.Integer(),
            sa.ForeignKey("games.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "purchased_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("user_id", "game_id", name="unique_user_game"),
    )

    op.create_table(
        "game_difficulty_votes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "game_id",
            sa.Integer(),
            sa.ForeignKey("games.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("difficulty", sa.Integer(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint(
            "difficulty BETWEEN 1 AND 5", name="ck_votes_difficulty_range"
        ),
    )


def downgrade():
    op.drop_table("game_difficulty_votes")
    op.drop_table("user_owned_games")
    op.drop_table("user_battle_pass_progress")
    op.drop_table("battle_pass_tiers")
    op.drop_table("cosmetic_trades")
    op.drop_table("active_cosmetics")
    op.drop_table("user_cosmetics")
    op.drop_table("group_members")
    op.drop_table("groups")
    op.drop_table("games")
    op.drop_table("cosmetics")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
