"""
Shared logging configuration for the decoupling patterns.
"""

import sys
import structlog
import logging
import uuid
from typing import Any, Dict, Optional
from contextvars import ContextVar

from shared.config import PatternsConfig, get_config

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def configure_logging(component_name: str, log_level: str = "info", json_logs: bool = True) -> None:
    """Configure structured logging for a component."""
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_component_context,
            add_request_context,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    get_logger(component_name).debug("Logging configured", level=log_level, json=json_logs)


def configure_logging_from_config(component_name: str, config: Optional[PatternsConfig] = None) -> None:
    """Configure logging from ``PATTERNS_LOG_LEVEL`` and ``PATTERNS_LOG_JSON``."""
    config = config if config is not None else get_config()
    configure_logging(component_name, config.log_level, config.log_json)


def add_component_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the owning component (first logger name segment) to log events."""
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["component"] = logger_name.split(".")[0]

    return event_dict


def add_request_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the current request ID to log events."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set request ID in context."""
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def clear_context():
    """Clear the request ID."""
    request_id_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
