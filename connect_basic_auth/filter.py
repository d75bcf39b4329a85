"""
JAAS Basic Authentication Filter
================================
Per-request entry point: classify the request, decode the Basic credentials
and run the configured login entry, then either let the request through or
abort it with a 401 challenge.

The filter holds only the login entry name and the login configuration,
both fixed at construction, so one instance can serve concurrent requests.
"""

from typing import Any, Optional, Protocol

import structlog

from .classifier import classify_request
from .config import DEFAULT_LOGIN_CONFIG_NAME
from .credentials import AUTHORIZATION, parse_basic_authorization
from .errors import MalformedHeaderError
from .jaas.configuration import Configuration
from .jaas.login_context import JaasLoginAdapter
from .logging import log_audit, log_error
from .models import AuthDecision, AuthResult, RequestClass
from .responses import unauthorized_response

logger = structlog.get_logger(__name__)


class RequestContext(Protocol):
    """What the filter needs from the hosting HTTP pipeline."""

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...

    def get_header(self, name: str) -> Optional[str]: ...

    def abort_with(self, response: Any) -> None: ...


class JaasBasicAuthFilter:
    """Enforces Basic authentication against a named login entry."""

    def __init__(
        self,
        login_config_name: str = DEFAULT_LOGIN_CONFIG_NAME,
        configuration: Optional[Configuration] = None,
        login_adapter: Optional[JaasLoginAdapter] = None,
    ):
        self.login_config_name = login_config_name
        self.login_adapter = login_adapter or JaasLoginAdapter(configuration or Configuration())

    def filter(self, request_context: RequestContext) -> AuthDecision:
        """
        Authenticate one request.
        
        Returns the decision for logging and tests; the only effect on the
        request is a single ``abort_with`` call when it is rejected.
        
        Raises:
            UnsupportedCallbackError: the login chain is incompatible with
                Basic credentials (deployment error, never a 401)
        """
        method = request_context.method
        path = request_context.path

        if classify_request(method, path) == RequestClass.EXEMPT:
            logger.debug("basic_auth_exempt", method=method, path=path)
            return AuthDecision.ALLOW

        try:
            credentials = parse_basic_authorization(request_context.get_header(AUTHORIZATION))
        except MalformedHeaderError as e:
            _reject(request_context, e.reason_code.value, method, path)
            return AuthDecision.CHALLENGE

        try:
            result = self.login_adapter.authenticate(self.login_config_name, credentials)
        except Exception as e:
            log_error(
                e,
                context="basic_auth_login_chain_misconfigured",
                login_config=self.login_config_name,
                method=method,
                path=path,
            )
            raise

        if result.allowed:
            log_audit(
                "basic_auth.login",
                actor_id=result.principal,
                outcome="success",
                metadata={"method": method, "path": path},
            )
            return AuthDecision.ALLOW

        log_audit(
            "basic_auth.login",
            actor_id=credentials.username,
            outcome="failure",
            metadata={"method": method, "path": path, "reason": _reason(result)},
        )
        _reject(request_context, _reason(result), method, path)
        return AuthDecision.REJECT


def _reject(request_context: RequestContext, reason: Optional[str], method: str, path: str) -> None:
    request_context.abort_with(unauthorized_response(reason, log_message=f"{method} {path}"))


def _reason(result: AuthResult) -> Optional[str]:
    return result.reason_code.value if result.reason_code else None
