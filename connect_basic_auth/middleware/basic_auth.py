"""
Basic Auth Middleware for Starlette / FastAPI

Runs the JAAS Basic authentication filter in front of every request.

Usage:
    from connect_basic_auth.jaas import Configuration
    from connect_basic_auth.middleware import BasicAuthMiddleware

    app.add_middleware(
        BasicAuthMiddleware,
        login_config_name="KafkaConnect",
        configuration=Configuration.from_file("/etc/connect/jaas.conf"),
    )
"""

import asyncio
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from ..config import DEFAULT_LOGIN_CONFIG_NAME
from ..filter import JaasBasicAuthFilter
from ..jaas.configuration import Configuration

logger = structlog.get_logger(__name__)


class StarletteRequestContext:
    """Adapts a Starlette request to the filter's RequestContext."""

    def __init__(self, request: Request):
        self.request = request
        self.response: Optional[Response] = None

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.url.path

    def get_header(self, name: str) -> Optional[str]:
        return self.request.headers.get(name)

    def abort_with(self, response: Response) -> None:
        if self.response is not None:
            raise RuntimeError("Request has already been aborted")
        self.response = response


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware that requires Basic credentials accepted by a login entry.
    
    The login chain may block on I/O, so the filter runs in the default
    executor. Misconfiguration errors raised by the filter propagate to the
    host and surface as a 500, not a 401.
    """

    def __init__(
        self,
        app,
        auth_filter: Optional[JaasBasicAuthFilter] = None,
        login_config_name: str = DEFAULT_LOGIN_CONFIG_NAME,
        configuration: Optional[Configuration] = None,
    ):
        super().__init__(app)
        self.auth_filter = auth_filter or JaasBasicAuthFilter(login_config_name, configuration)
        logger.info(
            "basic_auth_middleware_configured",
            login_config=self.auth_filter.login_config_name,
        )

    async def dispatch(self, request: Request, call_next):
        context = StarletteRequestContext(request)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.auth_filter.filter, context)

        if context.response is not None:
            return context.response
        return await call_next(request)
