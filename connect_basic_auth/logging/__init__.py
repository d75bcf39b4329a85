"""
Basic Auth Logging Module

Structured logging for services hosting the authentication filter.
"""

from .structured import (
    setup_logging,
    get_logger,
    log_audit,
    log_error,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_audit",
    "log_error",
]
