"""Pytest configuration and fixtures."""

import pytest

from portal import create_app, db
from portal.models import Cosmetic, Group, GroupMember, User, UserCosmetic

PASSWORD = "password123"


@pytest.fixture
def app():
    """Create and configure a test application instance."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


class AuthenticatedClient:
    """Test client wrapper that sends a bearer token with every request."""

    def __init__(self, client, headers):
        self._client = client
        self._headers = headers

    def get(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.get(*args, **kwargs)

    def post(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.post(*args, **kwargs)

    def put(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.put(*args, **kwargs)

    def delete(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.delete(*args, **kwargs)


@pytest.fixture
def make_user(app):
    """Factory creating a user with a password and a starting balance."""

    def _make(username: str, coins: int = 0, role: str = "user") -> int:
        user = User(
            username=username,
            coins=coins,
            role=role,
            is_admin=role in ("admin", "owner"),
        )
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id

    return _make


@pytest.fixture
def login(client):
    """Factory returning an authenticated client for an existing user."""

    def _login(username: str) -> AuthenticatedClient:
        response = client.post(
            "/api/v1/auth/login", json={"username": username, "password": PASSWORD}
        )
        assert response.status_code == 200
        token = response.json["data"]["token"]
        return AuthenticatedClient(client, {"Authorization": f"Bearer {token}"})

    return _login


@pytest.fixture
def test_user(make_user):
    """A regular user with no coins."""
    return {"id": make_user("test_user"), "username": "test_user"}


@pytest.fixture
def auth_client(login, test_user):
    """Authenticated client for ``test_user``."""
    return login(test_user["username"])


@pytest.fixture
def admin_client(make_user, login):
    make_user("admin_user", role="admin")
    return login("admin_user")


@pytest.fixture
def make_cosmetic(app):
    """Factory adding a catalog entry. Returns its id."""

    def _make(name: str, price: int, cosmetic_type: str = "badge") -> int:
        cosmetic = Cosmetic(name=name, type=cosmetic_type, price=price, value=name)
        db.session.add(cosmetic)
        db.session.commit()
        return cosmetic.id

    return _make


@pytest.fixture
def give_cosmetic(app):
    """Record ownership directly, bypassing the shop."""

    def _give(user_id: int, cosmetic_id: int) -> None:
        db.session.add(UserCosmetic(user_id=user_id, cosmetic_id=cosmetic_id))
        db.session.commit()

    return _give


@pytest.fixture
def make_group(app):
    """Factory creating a group with the given members. Returns its id."""

    def _make(*user_ids: int) -> int:
        group = Group(name="Traders", created_by=user_ids[0] if user_ids else None)
        db.session.add(group)
        db.session.flush()
        for user_id in user_ids:
            db.session.add(GroupMember(group_id=group.id, user_id=user_id))
        db.session.commit()
        return group.id

    return _make
