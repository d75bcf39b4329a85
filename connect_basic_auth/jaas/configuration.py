"""
Login Configuration
===================
Parses JAAS-style login configuration files::

    KafkaConnect {
        connect_basic_auth.jaas.modules.PropertyFileLoginModule required
            file="/etc/connect/credentials.properties";
    };

Each named entry lists the login modules to run, in order, with a control
flag and ``key=value`` options. The parsed configuration is immutable and is
loaded once at startup.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

import structlog

from ..errors import JaasConfigError

logger = structlog.get_logger(__name__)

_PUNCTUATION = "{};="


class ControlFlag(str, Enum):
    """How a module's outcome affects the overall login."""
    REQUIRED = "required"
    REQUISITE = "requisite"
    SUFFICIENT = "sufficient"
    OPTIONAL = "optional"

    @classmethod
    def parse(cls, value: str, line: Optional[int] = None) -> "ControlFlag":
        try:
            return cls(value.lower())
        except ValueError:
            raise JaasConfigError(f"Invalid control flag {value!r}", line) from None


@dataclass(frozen=True)
class AppConfigurationEntry:
    """One login module within a named entry."""
    login_module_name: str
    control_flag: ControlFlag
    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


@dataclass(frozen=True)
class _Token:
    value: str
    line: int
    quoted: bool = False


def _tokenize(text: str) -> Iterator[_Token]:
    i = 0
    line = 1
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\n":
            line += 1
            i += 1
        elif ch.isspace():
            i += 1
        elif ch == "#" or text.startswith("//", i):
            while i < length and text[i] != "\n":
                i += 1
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise JaasConfigError("Unterminated comment", line)
            line += text.count("\n", i, end)
            i = end + 2
        elif ch in _PUNCTUATION:
            yield _Token(ch, line)
            i += 1
        elif ch == '"':
            start_line = line
            chars = []
            i += 1
            while True:
                if i >= length:
                    raise JaasConfigError("Unterminated quoted string", start_line)
                c = text[i]
                if c == '"':
                    i += 1
                    break
                if c == "\\" and i + 1 < length:
                    i += 1
                    c = text[i]
                if c == "\n":
                    line += 1
                chars.append(c)
                i += 1
            yield _Token("".join(chars), start_line, quoted=True)
        else:
            start = i
            while (i < length and not text[i].isspace()
                   and text[i] not in _PUNCTUATION and text[i] != '"'):
                i += 1
            yield _Token(text[start:i], line)


class _Parser:
    def __init__(self, text: str):
        self._tokens = list(_tokenize(text))
        self._pos = 0

    def _peek(self) -> Optional[_Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self, expected: str) -> _Token:
        token = self._peek()
        if token is None:
            last = self._tokens[-1].line if self._tokens else 1
            raise JaasConfigError(f"Unexpected end of file, expected {expected}", last)
        self._pos += 1
        return token

    def _expect(self, symbol: str) -> None:
        token = self._next(f"'{symbol}'")
        if token.quoted or token.value != symbol:
            raise JaasConfigError(f"Expected '{symbol}' but found {token.value!r}", token.line)

    def _word(self, what: str) -> _Token:
        token = self._next(what)
        if not token.quoted and token.value in _PUNCTUATION:
            raise JaasConfigError(f"Expected {what} but found {token.value!r}", token.line)
        return token

    def _at(self, symbol: str) -> bool:
        token = self._peek()
        return token is not None and not token.quoted and token.value == symbol

    def parse(self) -> Dict[str, Tuple[AppConfigurationEntry, ...]]:
        entries: Dict[str, Tuple[AppConfigurationEntry, ...]] = {}
        while self._peek() is not None:
            name_token = self._word("login entry name")
            if name_token.value in entries:
                raise JaasConfigError(
                    f"Login entry {name_token.value!r} is defined more than once", name_token.line
                )
            self._expect("{")
            modules: List[AppConfigurationEntry] = []
            while not self._at("}"):
                modules.append(self._module())
            self._expect("}")
            self._expect(";")
            entries[name_token.value] = tuple(modules)
        return entries

    def _module(self) -> AppConfigurationEntry:
        class_token = self._word("login module class name")
        flag_token = self._word("control flag")
        flag = ControlFlag.parse(flag_token.value, flag_token.line)
        options: Dict[str, str] = {}
        while not self._at(";"):
            key = self._word("option name")
            self._expect("=")
            value = self._word(f"value for option {key.value!r}")
            options[key.value] = value.value
        self._expect(";")
        return AppConfigurationEntry(class_token.value, flag, options)


class Configuration:
    """Named login entries, each an ordered chain of login modules."""

    def __init__(self, entries: Optional[Mapping[str, Tuple[AppConfigurationEntry, ...]]] = None):
        self._entries = MappingProxyType(
            {name: tuple(modules) for name, modules in (entries or {}).items()}
        )

    @classmethod
    def from_string(cls, text: str) -> "Configuration":
        return cls(_Parser(text).parse())

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Configuration":
        """
        Load a configuration file.
        
        Raises:
            JaasConfigError: file missing, unreadable or malformed
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise JaasConfigError(f"Cannot read login configuration {path}: {e}") from e
        configuration = cls.from_string(text)
        logger.info(
            "login_configuration_loaded",
            path=str(path),
            entries=sorted(configuration.entry_names),
        )
        return configuration

    @property
    def entry_names(self):
        return self._entries.keys()

    def get_app_configuration_entry(self, name: str) -> Optional[Tuple[AppConfigurationEntry, ...]]:
        """Return the module chain for ``name``, or None if no such entry exists."""
        return self._entries.get(name)

    def __repr__(self) -> str:
        return f"Configuration(entries={sorted(self._entries)!r})"
