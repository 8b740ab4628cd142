from .config import ClientConfig, ConfigError, load_config
from .dispatcher import RequestDispatcher
from .exceptions import (
    ApiError,
    ClientError,
    ConflictError,
    ResponseFormatError,
    ServerError,
    SessionExpiredError,
    TransportError,
)
from .handler import ResponseHandler
from .http_client import HttpClient
from .models import AppState, Credentials, Failed, Idle, ShoppingItem, Succeeded, TokenResponse
from .pending import Action, PendingRequest
from .persistence import MemoryStorage, PersistenceAdapter, SessionFileStorage
from .session import ShoppingSession
from .store import StateStore

__all__ = [
    "Action",
    "ApiError",
    "AppState",
    "ClientConfig",
    "ClientError",
    "ConfigError",
    "ConflictError",
    "Credentials",
    "Failed",
    "HttpClient",
    "Idle",
    "MemoryStorage",
    "PendingRequest",
    "PersistenceAdapter",
    "RequestDispatcher",
    "ResponseFormatError",
    "ResponseHandler",
    "ServerError",
    "SessionExpiredError",
    "SessionFileStorage",
    "ShoppingItem",
    "ShoppingSession",
    "StateStore",
    "Succeeded",
    "TokenResponse",
    "TransportError",
    "load_config",
]
