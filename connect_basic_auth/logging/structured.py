"""
Structured Logging
==================
Logging setup for services hosting the Basic authentication filter.

Usage:
    from connect_basic_auth.logging import setup_logging, log_audit

    # Setup at startup
    setup_logging(service_name="connect-rest")

    # Audit authentication outcomes
    log_audit("basic_auth.login", actor_id="alice", outcome="success")
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog


def _service_name_adder(service_name: str):
    def add_service_name(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict
    return add_service_name


# =============================================================================
# Setup Functions
# =============================================================================

def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
) -> logging.Logger:
    """
    Configure stdlib logging and structlog for a service.
    
    Args:
        service_name: Name of the service (e.g., "connect-rest")
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines (production) instead of console output
        
    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _service_name_adder(service_name),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).info("logging_configured", service=service_name, level=level.upper())
    return root_logger


def get_logger(name: str):
    """Get a structlog logger with the given name."""
    return structlog.get_logger(name)


# =============================================================================
# Logging Functions
# =============================================================================

def log_audit(
    action: str,
    actor_id: Optional[str] = None,
    actor_type: str = "user",
    outcome: str = "success",
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log an audit event.
    
    Args:
        action: Action performed (e.g., "basic_auth.login")
        actor_id: ID of the actor (user name, peer worker)
        actor_type: Type of actor (user, worker, system)
        outcome: Result (success, failure, skipped)
        metadata: Additional context
    """
    structlog.get_logger("audit").info(
        "audit",
        action=action,
        actor={"id": actor_id, "type": actor_type},
        outcome=outcome,
        metadata=metadata or {},
    )


def log_error(
    error: Exception,
    context: Optional[str] = None,
    **kwargs
) -> None:
    """
    Log an error with full context.
    
    Args:
        error: The exception
        context: Description of what was happening
        **kwargs: Additional context
    """
    structlog.get_logger("errors").error(
        "error",
        error_type=type(error).__name__,
        error_message=str(error),
        context=context,
        exc_info=error,
        **kwargs
    )
