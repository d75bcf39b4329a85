"""
Rejection Responses
===================
Uniform 401 responses for rejected requests.

CRITICAL: every rejection looks the same to the client. The internal reason
is logged, never returned, so the response cannot be used to probe which
users exist or how the credential store is configured.
"""

from starlette.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)

WWW_AUTHENTICATE = "WWW-Authenticate"
BASIC_CHALLENGE = "Basic"
UNAUTHORIZED_MESSAGE = "User cannot access the resource."


def unauthorized_response(internal_code: str = None, log_message: str = None) -> JSONResponse:
    """
    Create a 401 response carrying the Basic challenge.
    
    Args:
        internal_code: Reason code for the logs (not sent to the client)
        log_message: Technical message for the logs
    
    Returns:
        JSONResponse with status 401 and ``WWW-Authenticate: Basic``
    """
    if internal_code or log_message:
        logger.info("basic_auth_unauthorized", code=internal_code, detail=log_message)

    return JSONResponse(
        status_code=401,
        content={
            "error": "unauthorized",
            "message": UNAUTHORIZED_MESSAGE,
        },
        headers={WWW_AUTHENTICATE: BASIC_CHALLENGE},
    )
