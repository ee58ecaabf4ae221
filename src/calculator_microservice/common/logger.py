"""Package logger writing JSON lines to log files and plain text to the console."""
import logging
import sys
from typing import Any, List

import structlog

from calculator_microservice.common.config import Settings

logger = logging.getLogger("calculator_microservice")

ERROR_LOG = "error.log"
COMBINED_LOG = "combined.log"

# Handlers installed by configure_logging, replaced on every call
_installed: List[logging.Handler] = []


def add_service(service: str):
    """Build a structlog processor tagging every event with the service name."""

    def processor(_logger: Any, _method_name: str, event_dict: dict) -> dict:
        event_dict["service"] = service
        return event_dict

    return processor


def json_formatter(service: str) -> structlog.stdlib.ProcessorFormatter:
    """
    Build the formatter rendering stdlib records as JSON objects.

    Each line holds ``level``, ``message``, ``service`` and ``timestamp``,
    plus ``exception`` when the record carries one.

    :param str service: Service name added to every line

    :return: Formatter for file handlers
    :rtype: structlog.stdlib.ProcessorFormatter
    """
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_service(service),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach file and console handlers to the package logger.

    - ``combined.log`` receives every record at or above ``settings.log_level``
    - ``error.log`` receives error records only
    - The console receives plain ``level: message`` lines outside production

    :param Settings settings: Service settings

    :return: The configured package logger
    :rtype: logging.Logger
    """
    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    formatter = json_formatter(settings.service_name)

    error_handler = logging.FileHandler(settings.log_dir / ERROR_LOG, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    _installed.append(error_handler)

    combined_handler = logging.FileHandler(settings.log_dir / COMBINED_LOG, encoding="utf-8")
    combined_handler.setFormatter(formatter)
    _installed.append(combined_handler)

    if not settings.is_production:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        _installed.append(console_handler)

    for handler in _installed:
        logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
    logger.propagate = False
    return logger
