"""
ASGI entry point: ``gunicorn -c gunicorn.conf.py main:app``.
"""

import sentry_sdk

from app.container import get_wire_container
from app.create_app import create_app
from logging_config import setup_logging
from settings import settings

if settings.sentry.is_enabled:
    # Requests carry provider tokens, keep them out of events.
    sentry_sdk.init(dsn=settings.sentry.dsn, environment=settings.environment.value, send_default_pii=False)

setup_logging()
container = get_wire_container()
app = create_app()
