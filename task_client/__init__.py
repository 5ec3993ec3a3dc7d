"""
Task client Flask application factory.

Provides the ``create_app`` factory that hosts the task page.  The app
serves one server-rendered page and turns each form submission into a page
event handled by :class:`task_client.controller.TaskPage`.  It never stores
tasks: every render fetches them from the remote task API, and the only
persisted client state is the token and username in the signed session
cookie.
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task client application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.

    Returns:
        A configured :class:`~flask.Flask` application instance.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task client app with config: %s", config_class.__name__)

    # Imported here so the blueprint can rely on this package being initialised.
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
