"""
Basic Auth Configuration
========================
Startup configuration for the authentication filter.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from .errors import JaasConfigError
from .jaas.configuration import Configuration

DEFAULT_LOGIN_CONFIG_NAME = "KafkaConnect"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


@dataclass
class BasicAuthConfig:
    """Configuration for the Basic authentication extension."""
    login_config_name: str = field(
        default_factory=lambda: os.getenv("CONNECT_BASIC_AUTH_LOGIN_CONFIG", DEFAULT_LOGIN_CONFIG_NAME)
    )
    jaas_config_path: str = field(default_factory=lambda: os.getenv("CONNECT_JAAS_CONFIG", ""))
    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "connect-rest"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    json_logs: bool = field(default_factory=lambda: _env_bool("LOG_JSON", "true"))

    # REST extension style keys accepted by from_mapping()
    CONFIG_KEYS = {
        "login.config.name": "login_config_name",
        "jaas.config.path": "jaas_config_path",
        "service.name": "service_name",
        "log.level": "log_level",
        "log.json": "json_logs",
    }

    @classmethod
    def from_mapping(cls, configs: Mapping[str, Any]) -> "BasicAuthConfig":
        """
        Build a config from extension properties, falling back to the environment.
        
        Keys may be given as dotted property names (``login.config.name``)
        or as field names (``login_config_name``).
        """
        field_names = {f.name for f in fields(cls)}
        values = {}
        for key, value in configs.items():
            name = cls.CONFIG_KEYS.get(key, key)
            if name not in field_names or value is None:
                continue
            if name == "json_logs" and isinstance(value, str):
                value = value.strip().lower() in _TRUE_VALUES
            values[name] = value
        return cls(**values)

    def load_configuration(self) -> Configuration:
        """
        Load the login configuration named by ``jaas_config_path``.
        
        Raises:
            JaasConfigError: no path configured, or the file is unreadable or malformed
        """
        if not self.jaas_config_path:
            raise JaasConfigError(
                "No login configuration file set (CONNECT_JAAS_CONFIG or jaas.config.path)"
            )
        return Configuration.from_file(self.jaas_config_path)
