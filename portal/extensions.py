"""Flask extensions initialization."""

import os

import redis
from flask import current_app, has_app_context
from flask_caching import Cache
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from jwt.exceptions import PyJWTError

# Redis client shared by error tracking
redis_client = None


def get_redis_client():
    """Get or create the Redis client for the configured REDIS_URL."""
    global redis_client
    if redis_client is None:
        if has_app_context():
            redis_url = current_app.config["REDIS_URL"]
        else:
            redis_url = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
        redis_client = redis.from_url(redis_url, decode_responses=True)
    return redis_client


def rate_limit_key() -> str:
    """Limit signed-in players per account and anonymous clients per address."""
    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        identity = None
    if identity:
        return f"user:{identity}"
    return get_remote_address()


# Read cache (SimpleCache in tests, Redis otherwise)
cache = Cache()

# Rate limiter, storage from RATELIMIT_STORAGE_URI
limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=["2000 per day", "300 per hour"],
)


def init_sentry(app):
    """Initialize Sentry error tracking when SENTRY_DSN is set."""
    sentry_dsn = os.environ.get("SENTRY_DSN")
    if not sentry_dsn:
        if not app.testing:
            app.logger.warning("SENTRY_DSN not set, error tracking disabled")
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.redis import RedisIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            FlaskIntegration(),
            SqlalchemyIntegration(),
            RedisIntegration(),
        ],
        traces_sample_rate=0.1,
        environment=os.environ.get("FLASK_ENV", "production"),
        send_default_pii=False,
    )
    app.logger.info("Sentry initialized for the economy service")
