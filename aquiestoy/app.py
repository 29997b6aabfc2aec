# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys

from flask import Flask, Response
from flask_cors import CORS

from aquiestoy.container import Container
from aquiestoy.infrastructure.db import Database, connect_database
from aquiestoy.shared.config import AppConfig, load_config
from aquiestoy.shared.errors.base import ConfigurationError, DatabaseUnavailableError
from aquiestoy.shared.logging import logger, setup_logging
from aquiestoy.shared.middleware.error_handler import configure_error_handling
from aquiestoy.shared.middleware.request_logger import configure_request_logging

CONTAINER_EXTENSION = "aquiestoy.container"


def _log_configuration(config: AppConfig) -> None:
    logger.info(f"config: APP_ENV={config.app_env}")
    for key, value in config.database.describe().items():
        logger.info(f"config:   {key}: {value}")
    if config.auth.uses_default_secret():
        logger.warning(
            "config: JWT_SECRET is not set, signing tokens with the built-in default secret. "
            "Set JWT_SECRET before exposing this service."
        )


def _report_missing_configuration(exc: ConfigurationError) -> None:
    missing = (exc.context or {}).get("missing") or []
    for variable in missing:
        logger.critical(f"startup: {variable} is not configured")
    logger.critical("startup: set the variables above (or DATABASE_URL) and restart")


def _report_unreachable_database(config: AppConfig, exc: DatabaseUnavailableError) -> None:
    db = config.database
    logger.critical(f"startup: {exc.message}: {exc.__cause__}")
    logger.critical("startup: troubleshooting checklist:")
    logger.critical(f"   1. the database host must accept connections on port {db.port} from this machine")
    logger.critical("   2. a managed instance must be reachable from outside its network")
    logger.critical("   3. check DB_USER / DB_PASSWORD")
    logger.critical(f"   4. confirm the database {db.name!r} exists")
    if db.host:
        logger.critical(f"   basic connectivity test: nc -zv {db.host} {db.port}")


def create_app(config: AppConfig | None = None, database: Database | None = None) -> Flask:
    """Build the WSGI app.

    Without an explicit ``config`` the factory is being used standalone (for
    example ``flask --app aquiestoy.app:create_app``) and configures logging
    itself; callers passing a config own logging setup.
    """
    if config is None:
        config = load_config()
        setup_logging(config.log_level, debug_mode=config.debug_logging)

    database = database or connect_database(config.database)
    database.create_schema()

    container = Container(config=config, database=database)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {"origins": config.security.allowed_origins}
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.profile_controller.as_blueprint())
    app.extensions[CONTAINER_EXTENSION] = container

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return resp

    return app


def main() -> None:
    config = load_config()
    setup_logging(config.log_level, debug_mode=config.debug_logging)
    _log_configuration(config)

    try:
        database = connect_database(config.database)
    except ConfigurationError as exc:
        _report_missing_configuration(exc)
        sys.exit(1)
    except DatabaseUnavailableError as exc:
        _report_unreachable_database(config, exc)
        sys.exit(1)

    app = create_app(config, database)
    logger.info(f"startup: listening on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
