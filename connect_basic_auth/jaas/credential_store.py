"""
Credential Stores
=================
Pluggable username/password stores consulted by login modules.
"""

import hmac
from abc import ABC, abstractmethod
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union

from ..errors import LoginConfigurationError
from ..models import FailureReason

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class CredentialStore(ABC):
    """Validates a username/password pair against some backing store."""

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        ...

    @abstractmethod
    def validate(self, username: Optional[str], password: Optional[str]) -> bool:
        ...


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines and drop comments and blank lines."""
    pending: List[str] = []
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line.strip() or line[0] in "#!"):
            continue
        # An odd number of trailing backslashes continues the line
        stripped = line.rstrip("\\")
        if (len(line) - len(stripped)) % 2 == 1:
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield "".join(pending)
        pending = []
    if pending:
        yield "".join(pending)


def _unescape(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue
        nxt = value[i + 1]
        if nxt == "u" and i + 6 <= len(value):
            try:
                out.append(chr(int(value[i + 2:i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_pair(line: str):
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=:" or ch.isspace():
            break
        i += 1
    key = line[:i]
    # Whitespace, then at most one '=' or ':', then whitespace
    j = i
    while j < len(line) and line[j].isspace():
        j += 1
    if j < len(line) and line[j] in "=:":
        j += 1
    while j < len(line) and line[j].isspace():
        j += 1
    return _unescape(key), _unescape(line[j:])


def parse_properties(text: str) -> Dict[str, str]:
    """Parse Java-properties style ``key=value`` text."""
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_pair(line)
        properties[key] = value
    return properties


class PropertiesCredentialStore(CredentialStore):
    """Credential store backed by a ``username=password`` properties file."""

    def __init__(self, credentials: Mapping[str, str], source: Optional[str] = None):
        self._credentials = MappingProxyType(dict(credentials))
        self.source = source

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PropertiesCredentialStore":
        """
        Load a credentials file.
        
        Raises:
            LoginConfigurationError: the file is missing, unreadable or holds invalid escapes
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoginConfigurationError(
                f"Cannot read credential store {path}: {e}",
                FailureReason.CREDENTIAL_STORE_UNAVAILABLE,
            ) from e
        credentials = parse_properties(text)
        for key, value in credentials.items():
            try:
                key.encode("utf-8")
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise LoginConfigurationError(
                    f"Credential store {path} contains an invalid escape: {e}",
                    FailureReason.CREDENTIAL_STORE_UNAVAILABLE,
                ) from e
        return cls(credentials, source=str(path))

    @property
    def is_empty(self) -> bool:
        return not self._credentials

    def __len__(self) -> int:
        return len(self._credentials)

    def validate(self, username: Optional[str], password: Optional[str]) -> bool:
        if username is None or password is None:
            return False
        expected = self._credentials.get(username)
        if expected is None:
            return False
        return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
