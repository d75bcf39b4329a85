"""
Basic Authorization Header Parsing
==================================
Decodes ``Authorization: Basic <base64(username:password)>`` values.
"""

import base64
import binascii
from typing import Optional, Tuple

from .errors import MalformedHeaderError
from .models import Credentials, FailureReason

AUTHORIZATION = "Authorization"
BASIC_SCHEME = "basic"


def split_scheme(header: str) -> Tuple[Optional[str], str]:
    """Split ``"<scheme> <token>"`` into its parts. The scheme is None when absent."""
    value = header.strip()
    scheme, sep, token = value.partition(" ")
    if not sep:
        return None, value
    return scheme, token.strip()


def decode_token(token: str) -> Credentials:
    """Decode a base64 ``username:password`` token."""
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise MalformedHeaderError(f"Credential token is not valid base64 UTF-8: {e}") from e

    username, sep, password = decoded.partition(":")
    if not sep:
        raise MalformedHeaderError("Credential token has no ':' separator")
    if not username:
        raise MalformedHeaderError("Credential token has an empty username")
    return Credentials(username=username, password=password)


def parse_basic_authorization(header: Optional[str]) -> Credentials:
    """
    Parse a Basic Authorization header value.
    
    Args:
        header: Raw header value, or None when the header is absent
        
    Returns:
        Decoded credentials
        
    Raises:
        MalformedHeaderError: header absent, not Basic, or undecodable
    """
    if header is None or not header.strip():
        raise MalformedHeaderError("Authorization header is missing", FailureReason.MISSING_HEADER)

    scheme, token = split_scheme(header)
    if scheme is None or scheme.lower() != BASIC_SCHEME:
        raise MalformedHeaderError("Authorization scheme is not Basic", FailureReason.UNSUPPORTED_SCHEME)

    return decode_token(token)
