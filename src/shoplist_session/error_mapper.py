from __future__ import annotations

from .exceptions import (
    ApiError,
    ClientError,
    ConflictError,
    ServerError,
    SessionExpiredError,
)
from .pending import Action

SESSION_EXPIRED_MESSAGE = "Your session has expired. Logging you out"
LOGOUT_FAILED_MESSAGE = "Server responded with an error. Logging you out."
USERNAME_TAKEN_MESSAGE = "Username already in use"
NO_RESPONSE_MESSAGE = "Server sent no response"
INVALID_RESPONSE_MESSAGE = "Server sent an invalid response"
REGISTER_SUCCESS_MESSAGE = "Register success"


def map_error(status_code: int, reason_phrase: str = "", details: object | None = None) -> ApiError:
    mapped: type[ApiError]
    if status_code == 403:
        mapped = SessionExpiredError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    elif status_code >= 400:
        mapped = ClientError
    else:
        mapped = ApiError
    return mapped(
        code=f"HTTP_{status_code}",
        message=reason_phrase,
        status_code=status_code,
        details=details,
    )


def failure_message(error: ApiError, action: Action) -> str:
    """Render the text shown to the user for a failed request."""
    if isinstance(error, SessionExpiredError):
        return SESSION_EXPIRED_MESSAGE
    if error.status_code is None:
        if error.code == "INVALID_RESPONSE":
            return INVALID_RESPONSE_MESSAGE
        return NO_RESPONSE_MESSAGE
    if action is Action.REGISTER and isinstance(error, ConflictError):
        return USERNAME_TAKEN_MESSAGE
    return f"Server responded with a status {error.status_code} {error.message}"
