"""
Basic Auth REST Extension
=========================
Installs the Basic authentication filter on a REST application.

Usage:
    from fastapi import FastAPI
    from connect_basic_auth.extension import BasicAuthSecurityRestExtension

    app = FastAPI()
    extension = BasicAuthSecurityRestExtension()
    extension.configure({"jaas.config.path": "/etc/connect/jaas.conf"})
    extension.register(app)
"""

from typing import Any, Mapping, Optional

from fastapi import FastAPI
import structlog

from . import __version__
from .config import BasicAuthConfig
from .filter import JaasBasicAuthFilter
from .jaas.configuration import Configuration
from .middleware import BasicAuthMiddleware

logger = structlog.get_logger(__name__)


class BasicAuthSecurityRestExtension:
    """
    REST extension that requires Basic authentication on every resource.
    
    The login configuration is read once in configure() and the same snapshot
    is used for the lifetime of the registered filter.
    """

    def __init__(self):
        self.config: Optional[BasicAuthConfig] = None
        self.configuration: Optional[Configuration] = None

    def configure(self, configs: Optional[Mapping[str, Any]] = None) -> None:
        """
        Load settings and the login configuration.
        
        Raises:
            JaasConfigError: the login configuration cannot be loaded
        """
        self.config = BasicAuthConfig.from_mapping(configs or {})
        self.configuration = self.config.load_configuration()

        if self.configuration.get_app_configuration_entry(self.config.login_config_name) is None:
            # Not fatal: every request is rejected until the entry exists
            logger.warning(
                "basic_auth_login_entry_missing",
                login_config=self.config.login_config_name,
                entries=sorted(self.configuration.entry_names),
            )

    def register(self, app: FastAPI) -> None:
        if self.config is None or self.configuration is None:
            raise RuntimeError("configure() must be called before register()")

        auth_filter = JaasBasicAuthFilter(self.config.login_config_name, self.configuration)
        app.add_middleware(BasicAuthMiddleware, auth_filter=auth_filter)
        logger.info(
            "basic_auth_extension_registered",
            login_config=self.config.login_config_name,
            version=self.version(),
        )

    def version(self) -> str:
        return __version__

    def close(self) -> None:
        self.configuration = None
