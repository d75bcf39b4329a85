"""
Shared fixtures for the Basic auth tests.
"""

import base64
from typing import Dict, List, Optional

import pytest

from connect_basic_auth.jaas import Configuration

PROPERTY_FILE_MODULE = "connect_basic_auth.jaas.modules.PropertyFileLoginModule"


def basic_header(scheme: str, username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"{scheme} {token}"


class RecordingRequestContext:
    """RequestContext double that records header reads and aborts."""

    def __init__(self, method: str, path: str, headers: Optional[Dict[str, str]] = None):
        self.method = method
        self.path = path
        self.headers = headers or {}
        self.header_reads: List[str] = []
        self.aborts: list = []

    def get_header(self, name: str) -> Optional[str]:
        self.header_reads.append(name)
        return self.headers.get(name)

    def abort_with(self, response) -> None:
        self.aborts.append(response)


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "credentials.properties"
    path.write_text("user=password\nuser1=password1\n", encoding="utf-8")
    return path


@pytest.fixture
def write_jaas_config(tmp_path):
    """Write a login configuration for the property file module and load it."""
    def _write(login_entry: str = "KafkaConnect", credentials_path=None, include_file_option: bool = True):
        lines = [f"{login_entry} {{ {PROPERTY_FILE_MODULE} required"]
        if include_file_option:
            lines.append(f'file="{credentials_path if credentials_path is not None else ""}"')
        lines.append(";};")
        path = tmp_path / "jaas.conf"
        path.write_text("\n".join(lines), encoding="utf-8")
        return Configuration.from_file(path)
    return _write


@pytest.fixture
def configuration(write_jaas_config, credentials_file):
    return write_jaas_config("KafkaConnect", credentials_file)


@pytest.fixture
def request_context():
    def _make(method: str, path: str, authorization: Optional[str] = None) -> RecordingRequestContext:
        headers = {"Authorization": authorization} if authorization is not None else {}
        return RecordingRequestContext(method, path, headers)
    return _make


@pytest.fixture
def auth_header():
    return basic_header
