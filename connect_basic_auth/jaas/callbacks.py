"""
Login Callbacks
===============
Challenge/response callbacks issued by login modules, and the handler that
answers them from a Basic authorization header.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

import structlog

from ..credentials import split_scheme, decode_token, BASIC_SCHEME
from ..errors import MalformedHeaderError, UnsupportedCallbackError
from ..models import Credentials

logger = structlog.get_logger(__name__)


class CallbackKind(str, Enum):
    """Closed set of callback kinds a handler can be asked to answer."""
    NAME = "name"
    PASSWORD = "password"
    UNSUPPORTED = "unsupported"


class Callback:
    """Base callback. Subclasses that are not answerable keep the UNSUPPORTED kind."""
    kind = CallbackKind.UNSUPPORTED


class NameCallback(Callback):
    kind = CallbackKind.NAME

    def __init__(self, prompt: str = "Username: ", default_name: Optional[str] = None):
        self.prompt = prompt
        self.default_name = default_name
        self.name: Optional[str] = None


class PasswordCallback(Callback):
    kind = CallbackKind.PASSWORD

    def __init__(self, prompt: str = "Password: ", echo_on: bool = False):
        self.prompt = prompt
        self.echo_on = echo_on
        self.password: Optional[str] = None

    def clear_password(self) -> None:
        self.password = None


class TextInputCallback(Callback):
    def __init__(self, prompt: str, default_text: Optional[str] = None):
        self.prompt = prompt
        self.default_text = default_text
        self.text: Optional[str] = None


class ChoiceCallback(Callback):
    def __init__(self, prompt: str, choices: Sequence[str], default_choice: int = 0,
                 multiple_selections_allowed: bool = False):
        self.prompt = prompt
        self.choices = list(choices)
        self.default_choice = default_choice
        self.multiple_selections_allowed = multiple_selections_allowed
        self.selected_indexes: list = []


class ConfirmationCallback(Callback):
    def __init__(self, prompt: str, options: Sequence[str], default_option: int = 0):
        self.prompt = prompt
        self.options = list(options)
        self.default_option = default_option
        self.selected_index: Optional[int] = None


class CallbackHandler(ABC):
    """Answers the callbacks a login module issues during login()."""

    @abstractmethod
    def handle(self, callbacks: Sequence[Callback]) -> None:
        ...


class BasicAuthCallbackHandler(CallbackHandler):
    """
    Callback handler backed by a Basic authorization header value.
    
    Accepts the value with or without the ``Basic`` scheme prefix. A value that
    cannot be decoded leaves username and password unset, so any login module
    consulting them fails the login rather than the handler.
    """

    def __init__(self, credentials: Optional[str]):
        self.username: Optional[str] = None
        self.password: Optional[str] = None
        if credentials:
            self._decode(credentials)
        self._dispatch = {
            CallbackKind.NAME: self._handle_name,
            CallbackKind.PASSWORD: self._handle_password,
            CallbackKind.UNSUPPORTED: self._handle_unsupported,
        }

    @classmethod
    def for_credentials(cls, credentials: Credentials) -> "BasicAuthCallbackHandler":
        handler = cls(None)
        handler.username = credentials.username
        handler.password = credentials.password
        return handler

    def _decode(self, credentials: str) -> None:
        scheme, token = split_scheme(credentials)
        if scheme is not None and scheme.lower() != BASIC_SCHEME:
            logger.debug("basic_auth_callback_unsupported_scheme", scheme=scheme)
            return
        try:
            decoded = decode_token(token)
        except MalformedHeaderError as e:
            logger.debug("basic_auth_callback_undecodable", reason=e.reason_code.value)
            return
        self.username = decoded.username
        self.password = decoded.password

    def handle(self, callbacks: Sequence[Callback]) -> None:
        for callback in callbacks:
            kind = getattr(callback, "kind", CallbackKind.UNSUPPORTED)
            self._dispatch.get(kind, self._handle_unsupported)(callback)

    def _handle_name(self, callback: NameCallback) -> None:
        callback.name = self.username

    def _handle_password(self, callback: PasswordCallback) -> None:
        callback.password = self.password

    def _handle_unsupported(self, callback: Callback) -> None:
        raise UnsupportedCallbackError(callback)
