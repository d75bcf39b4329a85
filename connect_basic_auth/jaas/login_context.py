"""
Login Context
=============
Runs a named login module chain once and adapts its outcome to an AuthResult.
"""

import importlib
from typing import List, Optional, Tuple, Type

import structlog

from ..errors import FailedLoginError, LoginConfigurationError, LoginError
from ..models import AuthDecision, AuthResult, Credentials, FailureReason
from .callbacks import BasicAuthCallbackHandler, CallbackHandler
from .configuration import AppConfigurationEntry, Configuration, ControlFlag
from .modules import LoginModule
from .subject import Subject

logger = structlog.get_logger(__name__)

_MANDATORY = (ControlFlag.REQUIRED, ControlFlag.REQUISITE)


def load_login_module(class_path: str) -> Type[LoginModule]:
    """Import a login module class from its dotted path."""
    module_name, _, class_name = class_path.rpartition(".")
    if not module_name:
        raise LoginConfigurationError(
            f"Login module {class_path!r} is not a dotted class path",
            FailureReason.LOGIN_MODULE_UNAVAILABLE,
        )
    try:
        module = importlib.import_module(module_name)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise LoginConfigurationError(
            f"Cannot load login module {class_path!r}: {e}",
            FailureReason.LOGIN_MODULE_UNAVAILABLE,
        ) from e
    if not (isinstance(cls, type) and issubclass(cls, LoginModule)):
        raise LoginConfigurationError(
            f"{class_path!r} is not a LoginModule",
            FailureReason.LOGIN_MODULE_UNAVAILABLE,
        )
    return cls


class LoginContext:
    """
    One authentication attempt against a named login entry.
    
    Control flags follow the usual semantics: a REQUIRED failure is recorded
    and the chain continues, a REQUISITE failure stops the chain, a SUFFICIENT
    success stops the chain when no mandatory module has failed, and OPTIONAL
    failures are ignored. A module whose login() returns False is ignored; if
    every module is ignored the login fails.
    
    Only LoginError is treated as a login failure. Anything else raised by a
    module, UnsupportedCallbackError in particular, propagates unchanged.
    """

    def __init__(self, name: str, callback_handler: CallbackHandler, configuration: Configuration):
        self.name = name
        self.callback_handler = callback_handler
        self.configuration = configuration
        self.subject = Subject()
        self._modules: List[LoginModule] = []

    def _resolve(self) -> List[Tuple[AppConfigurationEntry, Type[LoginModule]]]:
        entries = self.configuration.get_app_configuration_entry(self.name)
        if not entries:
            raise LoginConfigurationError(
                f"No login modules configured for {self.name!r}",
                FailureReason.UNKNOWN_LOGIN_CONFIG,
            )
        return [(entry, load_login_module(entry.login_module_name)) for entry in entries]

    def login(self) -> Subject:
        """
        Run the login module chain.
        
        Returns:
            The authenticated subject
            
        Raises:
            LoginError: authentication denied
        """
        chain = self._resolve()
        shared_state = {}
        mandatory_error: Optional[LoginError] = None
        other_error: Optional[LoginError] = None
        succeeded = False

        for entry, module_cls in chain:
            module = module_cls()
            try:
                module.initialize(self.subject, self.callback_handler, shared_state, entry.options)
                self._modules.append(module)
                result = module.login()
            except LoginError as e:
                logger.debug(
                    "login_module_failed",
                    login_config=self.name,
                    module=entry.login_module_name,
                    flag=entry.control_flag.value,
                    reason=e.reason_code.value,
                )
                if entry.control_flag in _MANDATORY:
                    mandatory_error = mandatory_error or e
                    if entry.control_flag == ControlFlag.REQUISITE:
                        break
                else:
                    other_error = other_error or e
                continue
            except Exception:
                self._abort()
                raise

            if result:
                succeeded = True
                if entry.control_flag == ControlFlag.SUFFICIENT and mandatory_error is None:
                    break

        if mandatory_error is not None:
            self._abort()
            raise mandatory_error
        if not succeeded:
            self._abort()
            raise other_error or FailedLoginError(
                f"All login modules for {self.name!r} were ignored",
                FailureReason.INVALID_CREDENTIALS,
            )

        try:
            for module in self._modules:
                module.commit()
        except LoginError:
            self._abort()
            raise
        return self.subject

    def _abort(self) -> None:
        for module in self._modules:
            try:
                module.abort()
            except LoginError as e:
                logger.debug("login_module_abort_failed", login_config=self.name, error=str(e))
        self._modules = []

    def logout(self) -> None:
        for module in self._modules:
            module.logout()
        self._modules = []
        self.subject.principals.clear()


class JaasLoginAdapter:
    """
    Authenticates decoded credentials against a login configuration.
    
    Every login failure, whether bad credentials or an unusable login entry,
    collapses into a REJECT result. The reason code is logged for operators
    and never reaches the client.
    """

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    def authenticate(self, login_config_name: str, credentials: Credentials) -> AuthResult:
        handler = BasicAuthCallbackHandler.for_credentials(credentials)
        context = LoginContext(login_config_name, handler, self.configuration)
        try:
            subject = context.login()
        except LoginError as e:
            logger.warning(
                "basic_auth_login_failed",
                login_config=login_config_name,
                username=credentials.username,
                reason=e.reason_code.value,
                detail=e.message,
            )
            return AuthResult(
                decision=AuthDecision.REJECT,
                reason=e.message,
                reason_code=e.reason_code,
            )

        principal = subject.user_name or credentials.username
        context.logout()
        return AuthResult(decision=AuthDecision.ALLOW, principal=principal)
