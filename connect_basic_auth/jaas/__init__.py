"""
Login Module Framework
======================
JAAS-style login configuration, callbacks, login modules and login context.
"""

from .callbacks import (
    CallbackKind,
    Callback,
    NameCallback,
    PasswordCallback,
    TextInputCallback,
    ChoiceCallback,
    ConfirmationCallback,
    CallbackHandler,
    BasicAuthCallbackHandler,
)
from .configuration import AppConfigurationEntry, Configuration, ControlFlag
from .credential_store import CredentialStore, PropertiesCredentialStore, parse_properties
from .modules import LoginModule, PropertyFileLoginModule
from .subject import Subject, UserPrincipal
from .login_context import LoginContext, JaasLoginAdapter, load_login_module

__all__ = [
    # Callbacks
    "CallbackKind",
    "Callback",
    "NameCallback",
    "PasswordCallback",
    "TextInputCallback",
    "ChoiceCallback",
    "ConfirmationCallback",
    "CallbackHandler",
    "BasicAuthCallbackHandler",
    # Configuration
    "AppConfigurationEntry",
    "Configuration",
    "ControlFlag",
    # Credential stores
    "CredentialStore",
    "PropertiesCredentialStore",
    "parse_properties",
    # Modules
    "LoginModule",
    "PropertyFileLoginModule",
    "Subject",
    "UserPrincipal",
    # Login
    "LoginContext",
    "JaasLoginAdapter",
    "load_login_module",
]
