"""
Tests for the properties-file credential store.
"""

import pytest

from connect_basic_auth.errors import LoginConfigurationError
from connect_basic_auth.jaas.credential_store import PropertiesCredentialStore, parse_properties
from connect_basic_auth.models import FailureReason


def test_parse_properties_formats():
    text = "\n".join([
        "# comment",
        "! also a comment",
        "",
        "user=password",
        "spaced = pass word",
        "colon:secret",
        "whitespace   value",
        "multi=first\\",
        "    second",
        "escaped\\=key=a\\tb",
        "unicode=caf\\u00e9",
    ])
    assert parse_properties(text) == {
        "user": "password",
        "spaced": "pass word",
        "colon": "secret",
        "whitespace": "value",
        "multi": "firstsecond",
        "escaped=key": "a\tb",
        "unicode": "café",
    }


class TestPropertiesCredentialStore:

    def test_validate(self, credentials_file):
        store = PropertiesCredentialStore.from_file(credentials_file)

        assert len(store) == 2
        assert store.validate("user", "password") is True
        assert store.validate("user1", "password1") is True
        assert store.validate("user1", "password") is False
        assert store.validate("user", "password1") is False
        assert store.validate("nobody", "password") is False
        assert store.validate(None, "password") is False
        assert store.validate("user", None) is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.properties"
        path.write_text("# nobody here\n", encoding="utf-8")
        assert PropertiesCredentialStore.from_file(path).is_empty

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoginConfigurationError) as exc_info:
            PropertiesCredentialStore.from_file(tmp_path / "missing.properties")
        assert exc_info.value.reason_code == FailureReason.CREDENTIAL_STORE_UNAVAILABLE

    def test_unencodable_escape(self, tmp_path):
        path = tmp_path / "surrogate.properties"
        path.write_text("user=\\uD800\n", encoding="utf-8")
        with pytest.raises(LoginConfigurationError) as exc_info:
            PropertiesCredentialStore.from_file(path)
        assert exc_info.value.reason_code == FailureReason.CREDENTIAL_STORE_UNAVAILABLE
