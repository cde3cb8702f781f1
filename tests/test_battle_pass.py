"""Tests for battle pass progression and the premium track."""

import pytest

from portal import db
from portal.models import User, UserBattlePassProgress
from portal.services.battle_pass_service import BattlePassService, apply_experience


class TestApplyExperience:
    @pytest.mark.parametrize(
        "tier, experience, amount, expected",
        [
            (0, 0, 150, (0, 150)),
            (0, 400, 100, (1, 0)),
            (3, 200, 1300, (6, 0)),
            (49, 400, 150, (50, 50)),
            (50, 0, 1000, (50, 0)),
            (50, 499, 1, (50, 0)),
        ],
    )
    def test_tiers_and_remainder(self, tier, experience, amount, expected):
        assert apply_experience(tier, experience, amount) == expected

    def test_split_grants_equal_single_grant(self):
        split = apply_experience(*apply_experience(2, 100, 300), 300)

        assert split == apply_experience(2, 100, 600)


class TestProgress:
    def test_progress_created_on_first_access(self, client, test_user):
        assert UserBattlePassProgress.query.count() == 0

        response = client.get("/api/v1/battlepass/test_user")

        assert response.status_code == 200
        progress = response.json["data"]["progress"]
        assert progress["current_tier"] == 0
        assert progress["experience"] == 0
        assert progress["has_premium_pass"] is False
        assert UserBattlePassProgress.query.count() == 1

    def test_unknown_user(self, client):
        response = client.get("/api/v1/battlepass/nobody")

        assert response.status_code == 404

    def test_add_xp(self, auth_client):
        response = auth_client.post("/api/v1/battlepass/add-xp", json={"amount": 1150})

        assert response.status_code == 200
        data = response.json["data"]
        assert data["tiers_gained"] == 2
        assert data["progress"]["current_tier"] == 2
        assert data["progress"]["experience"] == 150

    def test_add_xp_rejects_non_positive(self, auth_client):
        response = auth_client.post("/api/v1/battlepass/add-xp", json={"amount": 0})

        assert response.status_code == 400

    def test_service_rejects_invalid_amount(self, app, test_user):
        result = BattlePassService().add_experience(test_user["id"], -10)

        assert result["error"] == "invalid_amount"

    def test_overview_marks_unlocked_tiers(self, admin_client, auth_client, client, make_cosmetic):
        free = make_cosmetic("Tier Badge", 0)
        for tier in (1, 2):
            admin_client.put(
                f"/api/v1/battlepass/seasons/1/tiers/{tier}",
                json={"free_cosmetic_id": free},
            )
        auth_client.post("/api/v1/battlepass/add-xp", json={"amount": 500})

        tiers = client.get("/api/v1/battlepass/test_user").json["data"]["tiers"]

        assert [(t["tier"], t["unlocked"]) for t in tiers] == [(1, True), (2, False)]
        assert tiers[0]["premium_unlocked"] is False


class TestPremiumPass:
    def test_purchase_premium(self, make_user, login):
        user_id = make_user("whale", coins=600)

        response = login("whale").post("/api/v1/battlepass/purchase-premium")

        assert response.status_code == 200
        assert response.json["data"]["coins"] == 100
        assert response.json["data"]["progress"]["has_premium_pass"] is True
        assert db.session.get(User, user_id).coins == 100

    def test_insufficient_funds(self, make_user, login):
        user_id = make_user("saver", coins=499)

        response = login("saver").post("/api/v1/battlepass/purchase-premium")

        assert response.status_code == 400
        assert response.json["error"]["code"] == "INSUFFICIENT_FUNDS"
        assert db.session.get(User, user_id).coins == 499
        progress = UserBattlePassProgress.query.filter_by(user_id=user_id).first()
        assert progress.has_premium_pass is False

    def test_cannot_buy_twice(self, make_user, login):
        user_id = make_user("repeat", coins=1000)
        client = login("repeat")
        client.post("/api/v1/battlepass/purchase-premium")

        response = client.post("/api/v1/battlepass/purchase-premium")

        assert response.status_code == 409
        assert db.session.get(User, user_id).coins == 500


class TestTiers:
    def test_upsert_tier_as_admin(self, admin_client, client, make_cosmetic):
        premium = make_cosmetic("Gold Frame", 0, cosmetic_type="profile_frame")

        response = admin_client.put(
            "/api/v1/battlepass/seasons/1/tiers/10",
            json={"premium_cosmetic_id": premium},
        )

        assert response.status_code == 200
        assert response.json["data"]["tier"]["premium_cosmetic_id"] == premium
        listed = client.get("/api/v1/battlepass/seasons/1/tiers").json["data"]["tiers"]
        assert [t["tier"] for t in listed] == [10]

    def test_upsert_replaces_rewards(self, admin_client, make_cosmetic):
        first = make_cosmetic("First", 0)
        admin_client.put("/api/v1/battlepass/seasons/1/tiers/3", json={"free_cosmetic_id": first})

        response = admin_client.put("/api/v1/battlepass/seasons/1/tiers/3", json={})

        assert response.json["data"]["tier"]["free_cosmetic_id"] is None

    def test_tier_out_of_range(self, admin_client):
        response = admin_client.put("/api/v1/battlepass/seasons/1/tiers/51", json={})

        assert response.status_code == 400

    def test_unknown_reward(self, admin_client):
        response = admin_client.put(
            "/api/v1/battlepass/seasons/1/tiers/1", json={"free_game_id": 42}
        )

        assert response.status_code == 404

    def test_requires_admin(self, auth_client):
        response = auth_client.put("/api/v1/battlepass/seasons/1/tiers/1", json={})

        assert response.status_code == 403
