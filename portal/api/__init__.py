"""API blueprints."""

from flask import Blueprint

api_bp = Blueprint("api", __name__)

from portal.api import (admin, auth, battle_pass, cosmetics,  # noqa: E402, F401
                        games, groups, trades, users)
