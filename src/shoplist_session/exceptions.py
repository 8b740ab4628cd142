from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int | None = None
    details: object | None = None

    def __str__(self) -> str:
        status = f"[{self.status_code}] " if self.status_code is not None else ""
        return f"{status}{self.code}: {self.message}"


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class ResponseFormatError(ApiError):
    """Success status with a body that does not match the expected shape."""


class ClientError(ApiError):
    pass


class SessionExpiredError(ClientError):
    """403 on any authenticated call: the token is no longer accepted."""


class ConflictError(ClientError):
    """409 or conflict-style errors."""


class ServerError(ApiError):
    """5xx server-side failures."""
