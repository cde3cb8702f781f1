"""Structured logging configuration."""

import logging
import sys
import time
import uuid

import structlog
from flask import g, request
from pythonjsonlogger import jsonlogger

# Redis keys for error tracking
ERROR_COUNT_KEY = "portal:errors:5xx:count"
ERROR_ALERT_SENT_KEY = "portal:errors:5xx:alert_sent"

REQUEST_ID_HEADER = "X-Request-ID"


def track_5xx_error(app, path: str, status_code: int):
    """Track 5xx errors in Redis and warn once per cooldown past the threshold."""
    from portal.extensions import get_redis_client

    try:
        redis = get_redis_client()
        window = app.config.get("ERROR_ALERT_WINDOW", 300)
        threshold = app.config.get("ERROR_ALERT_THRESHOLD", 10)
        cooldown = app.config.get("ERROR_ALERT_COOLDOWN", 600)

        error_key = f"{ERROR_COUNT_KEY}:{int(time.time() // window)}"

        pipe = redis.pipeline()
        pipe.rpush(error_key, f"{status_code} {path}")
        pipe.expire(error_key, window * 2)
        pipe.llen(error_key)
        error_count = pipe.execute()[2]

        if error_count >= threshold and not redis.get(ERROR_ALERT_SENT_KEY):
            structlog.get_logger().warning(
                "high_5xx_rate",
                error_count=error_count,
                window_seconds=window,
                samples=redis.lrange(error_key, 0, 4),
            )
            redis.setex(ERROR_ALERT_SENT_KEY, cooldown, "1")

    except Exception as e:
        app.logger.debug(f"5xx tracking unavailable: {e}")


def _configure_structlog(debug: bool, level: int):
    renderer = (
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _json_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
    )
    handler.setLevel(level)
    return handler


def setup_logging(app):
    """Structured logs for services and one event per API request."""
    level = logging.DEBUG if app.debug else logging.INFO
    _configure_structlog(app.debug, level)

    if not app.debug and not app.testing:
        handler = _json_handler(level)

        # app.logger is "portal", the parent of every service module logger
        for name, logger_level in (
            (app.logger.name, level),
            ("werkzeug", logging.WARNING),
            ("sqlalchemy.engine", logging.WARNING),
        ):
            logger = logging.getLogger(name)
            logger.handlers = [handler]
            logger.setLevel(logger_level)

    @app.before_request
    def bind_request_context():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        g.request_start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            endpoint=request.endpoint,
        )

    @app.after_request
    def log_api_request(response):
        request_id = g.get("request_id")
        if request_id is None:
            return response

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.path.startswith("/api/"):
            structlog.get_logger().info(
                "request_completed",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - g.request_start_time) * 1000, 2),
            )

        if response.status_code >= 500 and not app.testing:
            track_5xx_error(app, request.path, response.status_code)

        return response

    return app
