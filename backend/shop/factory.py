"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from shop.auth.keys import KeyStore
from shop.core.config import BaseConfig, get_config
from shop.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    key_store: KeyStore | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Parameters
    ----------
    config:
        Config class, object or import path; :func:`get_config` when omitted.
    key_store:
        Pre-built signing keys. When omitted keys are loaded from
        ``AUTH_KEYS_FOLDER``.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from shop.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from shop import auth

    auth.init_app(app, key_store=key_store)

    from shop.core import cors

    cors.init_app(app)

    from shop.api import init_app as init_api

    init_api(app)

    from shop.core import errors

    errors.init_app(app)

    from shop import cli as shop_cli

    shop_cli.init_app(app)

    return app
