"""
Request Classification
======================
Decides whether a request has to authenticate.

The only exemption is the task configuration fan-out between cooperating
workers: ``POST .../connectors/{name}/tasks``. Those calls are trusted
out-of-band and carry no user credentials.
"""

import re

from .models import RequestClass

TASK_CONFIG_METHOD = "POST"

# Optional prefix (possibly host:port) ending in '/', then exactly
# connectors/<name>/tasks with an optional trailing slash.
TASK_REQUEST_PATTERN = re.compile(r"(?:.*/)?connectors/(?P<name>[^/]+)/tasks/?")

_RESERVED_SEGMENTS = {".", ".."}


def is_task_config_request(method: str, path: str) -> bool:
    """Check if the request distributes task configuration to a connector."""
    if method != TASK_CONFIG_METHOD or not path:
        return False
    match = TASK_REQUEST_PATTERN.fullmatch(path)
    if match is None:
        return False
    name = match.group("name")
    return bool(name.strip()) and name not in _RESERVED_SEGMENTS


def classify_request(method: str, path: str) -> RequestClass:
    if is_task_config_request(method, path):
        return RequestClass.EXEMPT
    return RequestClass.REQUIRES_AUTH
