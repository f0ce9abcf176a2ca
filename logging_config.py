import logging
import logging.config
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from app.environment import EnvironmentName
from settings import settings

JSON_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(filename)s %(lineno)d "
    "%(process)d %(taskName)s %(message)s"
)
LOCAL_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(filename)s:%(lineno)d]: %(message)s"

# Third party loggers that only matter when something is wrong.
QUIET_LOGGERS = ("sqlalchemy.engine", "aiohttp.access", "aiohttp.client", "asyncio", "python_multipart")


class CustomJsonFormatter(JsonFormatter):
    """JSON records; indented in development when LOGGING_USE_PRETTY_JSON is on."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._pretty = settings.environment == EnvironmentName.DEVELOPMENT and settings.logging.use_pretty_json
        if self._pretty:
            self.json_indent = 2

    def format(self, record: logging.LogRecord) -> str:
        result = super().format(record)
        if self._pretty:
            result = result.replace("\\n", "\n\t\t")
        return result


def _build_config(formatter: dict[str, Any]) -> dict[str, Any]:
    handler = {"formatter": "default", "class": "logging.StreamHandler", "stream": "ext://sys.stdout"}
    loggers: dict[str, Any] = {
        "": {"handlers": ["default"], "level": settings.logging.level, "propagate": False},
        # uvicorn attaches its own handler otherwise, which prints every request twice
        "uvicorn.access": {"handlers": ["default"], "propagate": False},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"handlers": ["default"], "level": logging.WARNING, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {"default": handler},
        "loggers": loggers,
    }


def build_logging_config() -> dict[str, Any]:
    if settings.logging.use_config:
        return _build_config({"format": JSON_FORMAT, "class": "logging_config.CustomJsonFormatter"})
    return _build_config({"format": LOCAL_FORMAT})


def setup_logging() -> None:
    logging.config.dictConfig(build_logging_config())
    logging.captureWarnings(True)
    logging.disable(logging.NOTSET)
