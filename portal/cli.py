"""CLI commands for Flask application."""

import click
from flask import current_app
from flask.cli import with_appcontext

DEFAULT_CATALOG = [
    {
        "name": "Midnight Theme",
        "type": "theme",
        "price": 150,
        "description": "Deep blue palette for late-night sessions",
        "value": "--background: 222 47% 8%; --primary: 217 91% 60%;",
    },
    {
        "name": "Sunset Theme",
        "type": "theme",
        "price": 150,
        "description": "Warm orange and pink gradients",
        "value": "--background: 20 30% 10%; --primary: 24 95% 55%;",
    },
    {
        "name": "Early Adopter",
        "type": "badge",
        "price": 50,
        "description": "Shown next to your name",
        "value": "🌱",
    },
    {
        "name": "High Roller",
        "type": "badge",
        "price": 1000,
        "description": "For the richest players",
        "value": "💎",
    },
    {
        "name": "Golden Frame",
        "type": "profile_frame",
        "price": 300,
        "description": "Shining golden avatar frame",
        "value": "ring-2 ring-yellow-400 shadow-[0_0_12px_rgba(250,204,21,0.4)]",
    },
    {
        "name": "Neon Frame",
        "type": "profile_frame",
        "price": 450,
        "description": "Bright neon avatar frame",
        "value": "ring-2 ring-cyan-400 shadow-[0_0_16px_rgba(34,211,238,0.5)]",
    },
    {
        "name": "Pixel Sword",
        "type": "cursor",
        "price": 200,
        "description": "Retro sword cursor",
        "value": "url('/cursors/pixel-sword.png'), auto",
    },
]


@click.group()
def catalog():
    """Cosmetics catalog commands."""
    pass


@catalog.command("seed")
@with_appcontext
def seed_catalog():
    """Load the default cosmetics catalog. Existing names are skipped."""
    from portal import db
    from portal.models import Cosmetic

    created = 0
    for item in DEFAULT_CATALOG:
        if Cosmetic.query.filter_by(name=item["name"]).first():
            click.echo(f"  {item['name']}: exists, skipping")
            continue
        db.session.add(Cosmetic(**item))
        created += 1

    db.session.commit()
    click.echo(f"Done! {created} cosmetics created")


@click.group()
def battlepass():
    """Battle pass commands."""
    pass


@battlepass.command("seed-tiers")
@click.option("--season", default=None, type=int, help="Season number (default: current)")
@with_appcontext
def seed_tiers(season):
    """Create empty reward rows for every tier of a season."""
    from portal import db
    from portal.models import BattlePassTier

    if season is None:
        season = current_app.config["BATTLE_PASS_CURRENT_SEASON"]
    max_tier = current_app.config["BATTLE_PASS_MAX_TIER"]

    existing = {
        t.tier for t in BattlePassTier.query.filter_by(season=season).all()
    }
    missing = [t for t in range(1, max_tier + 1) if t not in existing]
    for tier in missing:
        db.session.add(BattlePassTier(season=season, tier=tier))

    db.session.commit()
    click.echo(f"Season {season}: {len(missing)} tiers created, {len(existing)} kept")


@click.group()
def users():
    """User account commands."""
    pass


@users.command("grant-coins")
@click.argument("username")
@click.argument("amount", type=click.IntRange(min=1))
@with_appcontext
def grant_coins(username, amount):
    """Credit coins to a user, creating the account on first reference."""
    from portal.services.ledger_service import LedgerService
    from portal.services.user_service import UserService
    from portal.utils import cache

    user = UserService().get_or_create(username)
    result = LedgerService().add_coins(user.id, amount)
    if "error" in result:
        raise click.ClickException(result["error"])

    cache.invalidate(f"user:{username}", "leaderboard:top")
    click.echo(f"{username}: +{amount} coins, balance {result['balance']}")
