"""Tests for the read cache helpers and rate limit keys."""

from portal.utils import cache


class TestCache:
    def test_set_and_get(self, app):
        cache.set("user:alice", {"coins": 5})

        assert cache.get("user:alice") == {"coins": 5}
        assert cache.get("user:bob") is None

    def test_invalidate_keys(self, app):
        cache.set("user:alice", 1)
        cache.set("leaderboard:top", 2)

        cache.invalidate("user:alice", "leaderboard:top")

        assert cache.get("user:alice") is None
        assert cache.get("leaderboard:top") is None

    def test_invalidate_pattern(self, app):
        cache.set("game:1:difficulty", {"average": 3.0})
        cache.set("game:12:difficulty", {"average": 1.0})
        cache.set("cosmetics:all", [])

        removed = cache.invalidate_pattern("game:1:")

        assert removed == 1
        assert cache.get("game:1:difficulty") is None
        assert cache.get("game:12:difficulty") == {"average": 1.0}
        assert cache.get("cosmetics:all") == []

    def test_pattern_without_matches(self, app):
        assert cache.invalidate_pattern("nothing:") == 0

    def test_pattern_only_reaches_indexed_keys(self, app):
        from portal.extensions import cache as backend

        cache.set("game:3:difficulty", {"average": 2.0})
        backend.set(cache.KEY_INDEX, [], timeout=0)

        assert cache.invalidate_pattern("game:3:") == 0
        assert cache.get("game:3:difficulty") == {"average": 2.0}
        cache.invalidate("game:3:difficulty")
        assert cache.get("game:3:difficulty") is None

    def test_empty_cached_values_are_hits(self, app):
        cache.set("cosmetics:all", [])

        assert cache.get("cosmetics:all") == []
        assert cache.get("cosmetics:all") is not None


class TestRateLimitKey:
    def test_signed_in_players_keyed_by_account(self, app, test_user):
        from flask_jwt_extended import create_access_token

        from portal.extensions import rate_limit_key

        token = create_access_token(identity=str(test_user["id"]))
        with app.test_request_context(headers={"Authorization": f"Bearer {token}"}):
            assert rate_limit_key() == f"user:{test_user['id']}"

    def test_anonymous_and_bad_tokens_keyed_by_address(self, app):
        from portal.extensions import rate_limit_key

        with app.test_request_context(environ_base={"REMOTE_ADDR": "10.0.0.7"}):
            assert rate_limit_key() == "10.0.0.7"

        with app.test_request_context(
            headers={"Authorization": "Bearer not-a-token"},
            environ_base={"REMOTE_ADDR": "10.0.0.7"},
        ):
            assert rate_limit_key() == "10.0.0.7"
