"""
Logging configuration.

All application code logs through loguru; records emitted by the standard
``logging`` module (uvicorn, fastapi, sqlalchemy) are forwarded to it.
"""

import json
import logging
import sys
from typing import Any, Dict, cast

from loguru import logger

from household_inventory.core.config import settings

INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy.engine.Engine")


class InterceptHandler(logging.Handler):
    """
    Forward standard logging records to loguru, keeping their level.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def serialize_record(record: Dict[str, Any]) -> str:
    """
    Render a loguru record as a single JSON line.
    """
    try:
        subset = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "service": settings.PROJECT_NAME,
            "environment": settings.ENVIRONMENT,
        }

        if "name" in record:
            subset["module"] = record["name"]
        if "function" in record:
            subset["function"] = record["function"]
        if "line" in record:
            subset["line"] = record["line"]

        # account_id / item_id are bound by the services
        extra = record.get("extra")
        if isinstance(extra, dict):
            for key, value in extra.items():
                if not key.startswith("_"):
                    subset[key] = value

        if record.get("exception"):
            subset["exception"] = str(record["exception"])

        return json.dumps(subset)
    except Exception as e:
        time_value = record.get("time", "")
        return json.dumps(
            {
                "timestamp": time_value.isoformat() if hasattr(time_value, "isoformat") else str(time_value),
                "level": "ERROR",
                "message": f"Error serializing log: {str(e)}",
                "original_message": str(record.get("message", "")),
                "service": settings.PROJECT_NAME,
                "environment": settings.ENVIRONMENT,
            }
        )


def configure_logging() -> None:
    """
    Configure loguru logger.
    """
    logger.remove()

    if settings.JSON_LOGS:
        logger.add(
            lambda msg: print(serialize_record(cast(Dict[str, Any], msg.record)), file=sys.stderr),
            level=settings.LOG_LEVEL,
            backtrace=True,
            diagnose=settings.DEBUG,
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format="{time} | {level} | {name}:{function}:{line} | {message} | {extra}",
            backtrace=True,
            diagnose=settings.DEBUG,
        )

    logging.getLogger().handlers = [InterceptHandler()]

    for logger_name in INTERCEPTED_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.info("Logging configured successfully.")
