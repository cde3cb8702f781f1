"""Flask application factory."""

import os

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from portal.config import config

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from portal.extensions import cache, init_sentry, limiter

    cache.init_app(app)
    limiter.init_app(app)
    init_sentry(app)

    from portal.logging_config import setup_logging

    setup_logging(app)

    # CORS
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)

    # Register blueprints
    from portal.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")

    # CLI commands
    from portal.cli import battlepass, catalog, users

    app.cli.add_command(catalog)
    app.cli.add_command(battlepass)
    app.cli.add_command(users)

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}

    # Shell context
    @app.shell_context_processor
    def make_shell_context():
        from portal.models import (Cosmetic, CosmeticTrade, Game, User,
                                   UserBattlePassProgress, UserCosmetic)

        return {
            "db": db,
            "User": User,
            "Cosmetic": Cosmetic,
            "UserCosmetic": UserCosmetic,
            "CosmeticTrade": CosmeticTrade,
            "UserBattlePassProgress": UserBattlePassProgress,
            "Game": Game,
        }

    return app
