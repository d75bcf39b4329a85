"""
Basic Auth Models
=================
Data models and enums shared by the authentication filter.
"""

from typing import Optional
from dataclasses import dataclass, field
from enum import Enum


class RequestClass(str, Enum):
    """Whether a request has to present credentials."""
    REQUIRES_AUTH = "REQUIRES_AUTH"
    EXEMPT = "EXEMPT"


class AuthDecision(str, Enum):
    """Per-request authentication decision."""
    ALLOW = "ALLOW"
    CHALLENGE = "CHALLENGE"
    REJECT = "REJECT"


class FailureReason(str, Enum):
    """Operator-facing reasons for a rejected request. Never sent to clients."""
    MISSING_HEADER = "missing_header"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    MALFORMED_CREDENTIALS = "malformed_credentials"
    UNKNOWN_LOGIN_CONFIG = "unknown_login_config"
    LOGIN_MODULE_UNAVAILABLE = "login_module_unavailable"
    INVALID_MODULE_OPTIONS = "invalid_module_options"
    CREDENTIAL_STORE_UNAVAILABLE = "credential_store_unavailable"
    EMPTY_CREDENTIAL_STORE = "empty_credential_store"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class Credentials:
    """Username and password decoded from a Basic authorization header."""
    username: str
    password: str = field(repr=False)


@dataclass
class AuthResult:
    """Result of one authentication attempt."""
    decision: AuthDecision
    reason: Optional[str] = None
    reason_code: Optional[FailureReason] = None
    principal: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision == AuthDecision.ALLOW
