from typing import Optional

from .models import FailureReason


class BasicAuthError(Exception):
    """Base exception for the Basic authentication extension."""
    pass


class MalformedHeaderError(BasicAuthError):
    """Raised when the Authorization header is absent, uses another scheme or cannot be decoded."""
    def __init__(self, message: str, reason_code: FailureReason = FailureReason.MALFORMED_CREDENTIALS):
        self.message = message
        self.reason_code = reason_code
        super().__init__(f"{message} ({reason_code.value})")


class LoginError(BasicAuthError):
    """Raised when the login module chain denies authentication, for any reason."""
    default_reason = FailureReason.INVALID_CREDENTIALS

    def __init__(self, message: str, reason_code: Optional[FailureReason] = None):
        self.message = message
        self.reason_code = reason_code or self.default_reason
        super().__init__(f"{message} ({self.reason_code.value})")


class FailedLoginError(LoginError):
    """Raised when the credentials themselves were rejected."""
    pass


class LoginConfigurationError(LoginError):
    """Raised when the login entry, a module or its credential store is unusable."""
    default_reason = FailureReason.INVALID_MODULE_OPTIONS


class JaasConfigError(BasicAuthError):
    """Raised when a login configuration file cannot be read or parsed."""
    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class UnsupportedCallbackError(BasicAuthError):
    """
    Raised when a login module asks for a callback kind the filter cannot answer.

    This is a deployment error, not a credential failure, and is never
    converted into a 401 response.
    """
    def __init__(self, callback):
        self.callback = callback
        super().__init__(
            f"Unsupported callback type {type(callback).__name__}; "
            "only name and password callbacks can be answered"
        )
