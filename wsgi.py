"""WSGI entry point for the task client."""

import os

from task_client import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
