"""Tests for the coin ledger and the coin accrual endpoint."""

import pytest
from sqlalchemy.exc import IntegrityError

from portal import db
from portal.models import Game, User, UserOwnedGame
from portal.services.game_service import GameService
from portal.services.ledger_service import LedgerService
from portal.utils import cache


class TestLedgerService:
    def test_add_coins_credits_balance(self, app, make_user):
        user_id = make_user("earner", coins=10)

        result = LedgerService().add_coins(user_id, 5)

        assert result["success"] is True
        assert result["balance"] == 15
        assert db.session.get(User, user_id).coins == 15

    def test_negative_delta_within_balance(self, app, make_user):
        user_id = make_user("spender", coins=10)

        result = LedgerService().add_coins(user_id, -4)

        assert result["balance"] == 6

    def test_negative_delta_cannot_go_below_zero(self, app, make_user):
        """The balance is left untouched when a debit would overdraw it."""
        user_id = make_user("broke", coins=3)

        result = LedgerService().add_coins(user_id, -5)

        assert result["error"] == "insufficient_funds"
        assert result["available"] == 3
        assert db.session.get(User, user_id).coins == 3

    def test_add_coins_unknown_user(self, app):
        result = LedgerService().add_coins(9999, 5)

        assert result["error"] == "user_not_found"

    def test_debit(self, app, make_user):
        ledger = LedgerService()
        user = ledger.lock_user(make_user("payer", coins=50))

        assert ledger.debit(user, 60) is False
        assert user.coins == 50
        assert ledger.debit(user, 50) is True
        assert user.coins == 0

    def test_get_balance(self, app, make_user):
        user_id = make_user("holder", coins=42)

        assert LedgerService().get_balance(user_id) == 42
        assert LedgerService().get_balance(9999) is None


class TestCoinsEndpoint:
    def test_add_coins(self, auth_client, test_user):
        response = auth_client.post("/api/v1/coins/add", json={"amount": 25})

        assert response.status_code == 200
        assert response.json["data"]["coins"] == 25
        assert response.json["data"]["user"]["username"] == "test_user"

    def test_add_coins_accumulates(self, auth_client):
        auth_client.post("/api/v1/coins/add", json={"amount": 10})
        response = auth_client.post("/api/v1/coins/add", json={"amount": 15})

        assert response.json["data"]["coins"] == 25

    def test_rejects_non_positive_amount(self, auth_client):
        for amount in (0, -5, "10", 2.5, True, None):
            response = auth_client.post("/api/v1/coins/add", json={"amount": amount})
            assert response.status_code == 400

    def test_requires_auth(self, client):
        response = client.post("/api/v1/coins/add", json={"amount": 5})

        assert response.status_code == 401

    def test_profile_reflects_new_balance(self, auth_client, client):
        """The cached profile is dropped when coins change."""
        first = client.get("/api/v1/users/test_user")
        assert first.json["data"]["user"]["coins"] == 0

        auth_client.post("/api/v1/coins/add", json={"amount": 7})

        second = client.get("/api/v1/users/test_user")
        assert second.json["data"]["user"]["coins"] == 7


class TestLeaderboard:
    def test_ordered_by_coins(self, client, make_user):
        make_user("low", coins=5)
        make_user("high", coins=500)
        make_user("mid", coins=50)

        response = client.get("/api/v1/leaderboard")

        assert response.status_code == 200
        board = response.json["data"]["leaderboard"]
        assert [row["username"] for row in board] == ["high", "mid", "low"]
        assert board[0]["rank"] == 1

    def test_excludes_banned_users(self, client, make_user):
        user_id = make_user("cheater", coins=10_000)
        make_user("honest", coins=1)
        db.session.get(User, user_id).is_banned = True
        db.session.commit()

        board = client.get("/api/v1/leaderboard").json["data"]["leaderboard"]

        assert [row["username"] for row in board] == ["honest"]

    def test_unknown_profile(self, client):
        response = client.get("/api/v1/users/nobody")

        assert response.status_code == 404


class TestBalanceConstraint:
    def test_database_rejects_negative_balance(self, app, make_user):
        user_id = make_user("direct_write", coins=5)
        user = db.session.get(User, user_id)
        user.coins = -1

        with pytest.raises(IntegrityError):
            db.session.commit()

        db.session.rollback()
        assert db.session.get(User, user_id).coins == 5

    def test_game_purchase_losing_ownership_race(self, app, monkeypatch, make_user):
        user_id = make_user("game_racer", coins=300)
        game = Game(title="Contested", price=200)
        db.session.add(game)
        db.session.flush()
        db.session.add(UserOwnedGame(user_id=user_id, game_id=game.id))
        db.session.commit()
        monkeypatch.setattr(GameService, "owns_game", lambda self, u, g: False)

        result = GameService().purchase_game(user_id, game.id)

        assert result == {"error": "already_owned"}
        assert db.session.get(User, user_id).coins == 300
        assert UserOwnedGame.query.filter_by(user_id=user_id).count() == 1


class TestProfileCache:
    def test_profile_served_from_cache_until_invalidated(self, client, make_user):
        user_id = make_user("cached_player", coins=3)
        client.get("/api/v1/users/cached_player")
        db.session.get(User, user_id).coins = 99
        db.session.commit()

        stale = client.get("/api/v1/users/cached_player").json["data"]["user"]
        LedgerService().add_coins(user_id, 1)
        cache.invalidate("user:cached_player")
        fresh = client.get("/api/v1/users/cached_player").json["data"]["user"]

        assert stale["coins"] == 3
        assert fresh["coins"] == 100
