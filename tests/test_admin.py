"""Tests for moderation endpoints and CLI commands."""

import pytest

from portal import db
from portal.cli import DEFAULT_CATALOG
from portal.models import BattlePassTier, Cosmetic, User


@pytest.fixture
def owner_client(make_user, login):
    make_user("site_owner", role="owner")
    return login("site_owner")


class TestModeration:
    def test_ban_blocks_login(self, owner_client, client, test_user):
        response = owner_client.post("/api/v1/admin/users/test_user/ban")

        assert response.status_code == 200
        assert response.json["data"]["user"]["is_banned"] is True
        login = client.post(
            "/api/v1/auth/login",
            json={"username": "test_user", "password": "password123"},
        )
        assert login.status_code == 403

    def test_unban(self, owner_client, login, test_user):
        owner_client.post("/api/v1/admin/users/test_user/ban")

        response = owner_client.post("/api/v1/admin/users/test_user/unban")

        assert response.status_code == 200
        assert login("test_user") is not None

    def test_set_role(self, owner_client, test_user):
        response = owner_client.post(
            "/api/v1/admin/users/test_user/role", json={"role": "admin"}
        )

        assert response.status_code == 200
        assert response.json["data"]["user"]["is_admin"] is True

    def test_set_unknown_role(self, owner_client, test_user):
        response = owner_client.post(
            "/api/v1/admin/users/test_user/role", json={"role": "king"}
        )

        assert response.status_code == 400

    def test_unknown_user(self, owner_client):
        response = owner_client.post("/api/v1/admin/users/ghost/ban")

        assert response.status_code == 404

    def test_admin_is_not_owner(self, admin_client, test_user):
        response = admin_client.post("/api/v1/admin/users/test_user/ban")

        assert response.status_code == 403


class TestCLI:
    def test_seed_catalog_is_idempotent(self, app):
        runner = app.test_cli_runner()

        first = runner.invoke(args=["catalog", "seed"])
        second = runner.invoke(args=["catalog", "seed"])

        assert first.exit_code == 0
        assert second.exit_code == 0
        assert Cosmetic.query.count() == len(DEFAULT_CATALOG)
        assert "0 cosmetics created" in second.output

    def test_seed_tiers(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["battlepass", "seed-tiers", "--season", "2"])

        assert result.exit_code == 0
        tiers = BattlePassTier.query.filter_by(season=2).all()
        assert sorted(t.tier for t in tiers) == list(range(1, 51))

    def test_grant_coins_creates_missing_user(self, app, client):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["users", "grant-coins", "newcomer", "75"])

        assert result.exit_code == 0
        assert "balance 75" in result.output
        profile = client.get("/api/v1/users/newcomer").json["data"]["user"]
        assert profile["coins"] == 75

    def test_grant_coins_to_existing_user(self, app, make_user):
        user_id = make_user("regular", coins=10)
        runner = app.test_cli_runner()

        runner.invoke(args=["users", "grant-coins", "regular", "5"])

        assert db.session.get(User, user_id).coins == 15
        assert User.query.filter_by(username="regular").count() == 1

    def test_grant_coins_rejects_non_positive(self, app):
        result = app.test_cli_runner().invoke(args=["users", "grant-coins", "x", "0"])

        assert result.exit_code != 0
        assert User.query.filter_by(username="x").count() == 0
