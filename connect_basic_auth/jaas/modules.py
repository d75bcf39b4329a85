"""
Login Modules
=============
Login module interface and the properties-file backed implementation.

A login module is instantiated fresh for every login attempt, initialized
with the entry's options, and driven through ``login()`` followed by either
``commit()`` or ``abort()``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import structlog

from ..errors import FailedLoginError, LoginConfigurationError
from ..models import FailureReason
from .callbacks import CallbackHandler, NameCallback, PasswordCallback
from .credential_store import CredentialStore, PropertiesCredentialStore
from .subject import Subject, UserPrincipal

logger = structlog.get_logger(__name__)

FILE_OPTION = "file"


class LoginModule(ABC):
    """Pluggable authentication strategy run by a LoginContext."""

    def initialize(
        self,
        subject: Subject,
        callback_handler: CallbackHandler,
        shared_state: Dict[str, Any],
        options: Mapping[str, str],
    ) -> None:
        self.subject = subject
        self.callback_handler = callback_handler
        self.shared_state = shared_state
        self.options = options

    @abstractmethod
    def login(self) -> bool:
        """
        Authenticate the caller.
        
        Returns:
            True on success, False if this module should be ignored
            
        Raises:
            LoginError: authentication failed
        """

    @abstractmethod
    def commit(self) -> bool:
        ...

    @abstractmethod
    def abort(self) -> bool:
        ...

    def logout(self) -> bool:
        return True


class PropertyFileLoginModule(LoginModule):
    """
    Validates credentials against a ``username=password`` properties file.
    
    Options:
        file: path of the credentials file (required)
    """

    def __init__(self):
        self._store: Optional[CredentialStore] = None
        self._username: Optional[str] = None
        self._principal: Optional[UserPrincipal] = None

    def initialize(self, subject, callback_handler, shared_state, options) -> None:
        super().initialize(subject, callback_handler, shared_state, options)
        path = options.get(FILE_OPTION)
        if not path or not path.strip():
            raise LoginConfigurationError(
                f"Login module option '{FILE_OPTION}' is missing or empty",
                FailureReason.INVALID_MODULE_OPTIONS,
            )
        self._store = PropertiesCredentialStore.from_file(path)
        if self._store.is_empty:
            raise LoginConfigurationError(
                f"Credential store {path} contains no credentials",
                FailureReason.EMPTY_CREDENTIAL_STORE,
            )

    def login(self) -> bool:
        name_callback = NameCallback()
        password_callback = PasswordCallback()
        self.callback_handler.handle([name_callback, password_callback])

        username = name_callback.name
        valid = self._store.validate(username, password_callback.password)
        password_callback.clear_password()
        if not valid:
            raise FailedLoginError(
                f"Invalid credentials for user {username!r}",
                FailureReason.INVALID_CREDENTIALS,
            )
        self._username = username
        return True

    def commit(self) -> bool:
        if self._username is None:
            return False
        self._principal = UserPrincipal(self._username)
        self.subject.principals.add(self._principal)
        return True

    def abort(self) -> bool:
        self._username = None
        return self.logout()

    def logout(self) -> bool:
        if self._principal is not None:
            self.subject.principals.discard(self._principal)
            self._principal = None
        return True
