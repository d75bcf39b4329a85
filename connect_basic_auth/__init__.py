"""
Connect Basic Auth
==================
Basic authentication for connector cluster REST APIs, validated by a
pluggable JAAS-style login module chain.
"""

__version__ = "0.3.0"

# Models
from connect_basic_auth.models import (
    AuthDecision,
    AuthResult,
    Credentials,
    FailureReason,
    RequestClass,
)

# Errors
from connect_basic_auth.errors import (
    BasicAuthError,
    MalformedHeaderError,
    LoginError,
    FailedLoginError,
    LoginConfigurationError,
    JaasConfigError,
    UnsupportedCallbackError,
)

# Request handling
from connect_basic_auth.config import BasicAuthConfig, DEFAULT_LOGIN_CONFIG_NAME
from connect_basic_auth.credentials import parse_basic_authorization
from connect_basic_auth.classifier import classify_request, is_task_config_request
from connect_basic_auth.filter import JaasBasicAuthFilter, RequestContext
from connect_basic_auth.responses import unauthorized_response

# Hosting
from connect_basic_auth.middleware import BasicAuthMiddleware, StarletteRequestContext
from connect_basic_auth.extension import BasicAuthSecurityRestExtension

__all__ = [
    "__version__",
    # Models
    "AuthDecision",
    "AuthResult",
    "Credentials",
    "FailureReason",
    "RequestClass",
    # Errors
    "BasicAuthError",
    "MalformedHeaderError",
    "LoginError",
    "FailedLoginError",
    "LoginConfigurationError",
    "JaasConfigError",
    "UnsupportedCallbackError",
    # Request handling
    "BasicAuthConfig",
    "DEFAULT_LOGIN_CONFIG_NAME",
    "parse_basic_authorization",
    "classify_request",
    "is_task_config_request",
    "JaasBasicAuthFilter",
    "RequestContext",
    "unauthorized_response",
    # Hosting
    "BasicAuthMiddleware",
    "StarletteRequestContext",
    "BasicAuthSecurityRestExtension",
]
