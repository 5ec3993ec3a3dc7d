"""
Configuration classes for the task client.

The client is a thin page host: it serves the task page and forwards every
authentication and task operation to the remote task API over HTTP.  The
only state it keeps is the signed session cookie holding the user's token.
"""

from __future__ import annotations

import os


def _optional_float(env_var: str) -> float | None:
    """Read an optional float from the environment, ``None`` when unset."""
    raw_value = os.environ.get(env_var, "").strip()
    if not raw_value:
        return None
    try:
        return float(raw_value)
    except ValueError as exc:
        raise RuntimeError(f"{env_var} must be a number, got '{raw_value}'.") from exc


class Config:
    """Base configuration for all client environments."""

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "task-client-dev-secret-change-in-production"
    )

    API_BASE_URL: str = os.environ.get("API_BASE_URL", "http://localhost:3000")
    # None leaves requests without a timeout (transport default).
    API_TIMEOUT: float | None = _optional_float("API_TIMEOUT")

    ERROR_HIDE_SECONDS: float = float(os.environ.get("ERROR_HIDE_SECONDS", "4"))

    # Keep the session cookie across browser restarts, like origin storage.
    SESSION_PERMANENT: bool = (
        os.environ.get("SESSION_PERMANENT", "true").strip().lower() == "true"
    )

    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "false").strip().lower() == "true"
    )


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    SECRET_KEY: str = "task-client-test-secret"
    API_BASE_URL: str = os.environ.get("TEST_API_BASE_URL", "http://task-api")
    API_TIMEOUT: float | None = 1.0


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "true").strip().lower() == "true"
    )


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
