"""Tests for premium games and difficulty voting."""

import pytest

from portal import db
from portal.models import Game, GameDifficultyVote, User
from portal.services.difficulty_service import DifficultyVoteService, round_half_up


@pytest.fixture
def make_game(app):
    def _make(title: str = "Space Runner", price: int | None = None) -> int:
        game = Game(title=title, price=price)
        db.session.add(game)
        db.session.commit()
        return game.id

    return _make


class TestPremiumGames:
    def test_create_game_as_admin(self, admin_client):
        response = admin_client.post(
            "/api/v1/games", json={"title": "Maze", "price": 150}
        )

        assert response.status_code == 201
        assert response.json["data"]["game"]["is_premium"] is True

    def test_list_games_by_premium_flag(self, client, make_game):
        make_game("Free One")
        make_game("Paid One", price=100)

        premium = client.get("/api/v1/games?premium=true").json["data"]["games"]
        free = client.get("/api/v1/games?premium=false").json["data"]["games"]

        assert [g["title"] for g in premium] == ["Paid One"]
        assert [g["title"] for g in free] == ["Free One"]

    def test_purchase_premium_game(self, make_user, login, client, make_game):
        user_id = make_user("gamer", coins=300)
        game_id = make_game(price=200)

        response = login("gamer").post(f"/api/v1/games/{game_id}/purchase")

        assert response.status_code == 201
        assert response.json["data"]["coins"] == 100
        assert db.session.get(User, user_id).coins == 100
        owned = client.get("/api/v1/users/gamer/owned-games").json["data"]["games"]
        assert [g["game_id"] for g in owned] == [game_id]

    def test_purchase_twice(self, make_user, login, make_game):
        user_id = make_user("gamer", coins=300)
        game_id = make_game(price=200)
        gamer = login("gamer")
        gamer.post(f"/api/v1/games/{game_id}/purchase")

        response = gamer.post(f"/api/v1/games/{game_id}/purchase")

        assert response.status_code == 409
        assert db.session.get(User, user_id).coins == 100

    def test_free_game_cannot_be_bought(self, auth_client, make_game):
        game_id = make_game()

        response = auth_client.post(f"/api/v1/games/{game_id}/purchase")

        assert response.status_code == 400
        assert response.json["error"]["details"]["reason"] == "game_not_premium"

    def test_insufficient_funds(self, make_user, login, make_game):
        user_id = make_user("poor", coins=50)
        game_id = make_game(price=200)

        response = login("poor").post(f"/api/v1/games/{game_id}/purchase")

        assert response.status_code == 400
        assert db.session.get(User, user_id).coins == 50


class TestDifficultyVotes:
    def test_average_of_votes(self, make_user, login, client, make_game):
        game_id = make_game()
        for i, difficulty in enumerate((1, 3, 5)):
            make_user(f"voter{i}")
            response = login(f"voter{i}").post(
                f"/api/v1/games/{game_id}/difficulty-vote",
                json={"difficulty": difficulty},
            )
            assert response.status_code == 201

        response = client.get(f"/api/v1/games/{game_id}/difficulty")

        assert response.status_code == 200
        assert response.json["data"] == {"average": 3.0, "total_votes": 3}

    def test_no_votes_averages_zero(self, client, make_game):
        game_id = make_game()

        response = client.get(f"/api/v1/games/{game_id}/difficulty")

        assert response.json["data"] == {"average": 0, "total_votes": 0}

    def test_out_of_range_rejected(self, auth_client, make_game):
        game_id = make_game()

        for difficulty in (0, 6, "3", None):
            response = auth_client.post(
                f"/api/v1/games/{game_id}/difficulty-vote",
                json={"difficulty": difficulty},
            )
            assert response.status_code == 400

        assert GameDifficultyVote.query.count() == 0

    def test_unknown_game(self, auth_client):
        response = auth_client.post(
            "/api/v1/games/999/difficulty-vote", json={"difficulty": 3}
        )

        assert response.status_code == 404

    def test_repeat_votes_accumulate(self, app, test_user, make_game):
        game_id = make_game()
        service = DifficultyVoteService()

        service.vote(game_id, test_user["id"], 2)
        service.vote(game_id, test_user["id"], 5)

        assert service.get_summary(game_id) == {"average": 3.5, "total_votes": 2}
        assert [v.difficulty for v in service.get_votes(game_id)] == [2, 5]

    def test_vote_refreshes_cached_average(self, auth_client, client, make_game):
        game_id = make_game()
        client.get(f"/api/v1/games/{game_id}/difficulty")

        auth_client.post(
            f"/api/v1/games/{game_id}/difficulty-vote", json={"difficulty": 4}
        )

        data = client.get(f"/api/v1/games/{game_id}/difficulty").json["data"]
        assert data == {"average": 4.0, "total_votes": 1}

    def test_average_rounds_half_up(self, app, make_user, make_game):
        game_id = make_game()
        service = DifficultyVoteService()
        user_id = make_user("rounder")
        for difficulty in (2, 2, 2, 3):
            service.vote(game_id, user_id, difficulty)

        assert service.average(game_id) == 2.3

    @pytest.mark.parametrize(
        "value, expected", [(2.25, 2.3), (2.24, 2.2), (3.0, 3.0), (4.5, 4.5)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
