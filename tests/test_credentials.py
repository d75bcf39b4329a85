"""
Tests for Basic authorization header parsing.
"""

import pytest

from connect_basic_auth.credentials import parse_basic_authorization, split_scheme
from connect_basic_auth.errors import MalformedHeaderError
from connect_basic_auth.models import Credentials, FailureReason


class TestParseBasicAuthorization:

    def test_decodes_username_and_password(self, auth_header):
        credentials = parse_basic_authorization(auth_header("Basic", "user", "password"))
        assert credentials == Credentials("user", "password")

    def test_scheme_is_case_insensitive(self, auth_header):
        credentials = parse_basic_authorization(auth_header("basic", "user", "password"))
        assert credentials.username == "user"

    def test_password_keeps_colons(self, auth_header):
        credentials = parse_basic_authorization(auth_header("Basic", "user", "pa:ss:word"))
        assert credentials.password == "pa:ss:word"

    def test_empty_password_allowed(self, auth_header):
        credentials = parse_basic_authorization(auth_header("Basic", "user", ""))
        assert credentials.password == ""

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header):
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_basic_authorization(header)
        assert exc_info.value.reason_code == FailureReason.MISSING_HEADER

    def test_unknown_scheme(self, auth_header):
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_basic_authorization(auth_header("Unknown", "user", "password"))
        assert exc_info.value.reason_code == FailureReason.UNSUPPORTED_SCHEME

    def test_scheme_without_separator_is_rejected(self, auth_header):
        """'Basic' glued to the token is not a Basic header."""
        header = auth_header("Basic", "user", "password").replace(" ", "")
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_basic_authorization(header)
        assert exc_info.value.reason_code == FailureReason.UNSUPPORTED_SCHEME

    @pytest.mark.parametrize("token", ["not*base64", "dXNlcg==", "OnBhc3N3b3Jk", "/w=="])
    def test_malformed_token(self, token):
        # invalid alphabet, no colon, empty username, invalid UTF-8
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_basic_authorization(f"Basic {token}")
        assert exc_info.value.reason_code == FailureReason.MALFORMED_CREDENTIALS

    def test_password_not_in_repr(self, auth_header):
        credentials = parse_basic_authorization(auth_header("Basic", "user", "s3cret"))
        assert "s3cret" not in repr(credentials)


def test_split_scheme():
    assert split_scheme("Basic abc") == ("Basic", "abc")
    assert split_scheme("  abc  ") == (None, "abc")
