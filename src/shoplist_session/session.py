from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .config import ClientConfig, load_config
from .dispatcher import RequestDispatcher
from .handler import ResponseHandler
from .http_client import HttpClient
from .logging_utils import configure_logging
from .models import AppState
from .persistence import PersistenceAdapter, SessionFileStorage
from .store import StateStore

logger = logging.getLogger(__name__)


@dataclass
class ShoppingSession:
    config: ClientConfig
    storage: PersistenceAdapter | None = None
    client: httpx.AsyncClient | None = None
    store: StateStore = field(init=False)
    http: HttpClient = field(init=False)
    handler: ResponseHandler = field(init=False)
    dispatcher: RequestDispatcher = field(init=False)

    def __post_init__(self) -> None:
        if self.storage is None:
            self.storage = SessionFileStorage(
                session_id=self.config.session_id,
                root=self.config.storage_dir,
            )
        self.store = StateStore(self.storage, initial=self._restore())
        self.http = HttpClient(self.config, client=self.client)
        self.handler = ResponseHandler(self.store, self.http)
        self.dispatcher = RequestDispatcher(self.store, self.handler.install)

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "ShoppingSession":
        config = load_config(env_file)
        configure_logging(config.log_level)
        return cls(config)

    def _restore(self) -> AppState:
        stored = self.storage.load() if self.storage else None
        if stored is None:
            return AppState.logged_out()
        logger.info("session_restored", extra={"session_id": self.config.session_id, "is_logged": stored.is_logged})
        # nothing is in flight right after startup
        return stored.model_copy(update={"loading": False})

    @property
    def state(self) -> AppState:
        return self.store.state

    async def settled(self) -> None:
        await self.handler.settled()

    def end(self) -> None:
        """Drop the persisted snapshot; the next open starts logged out."""
        if self.storage:
            self.storage.clear()

    async def aclose(self) -> None:
        await self.handler.settled()
        await self.http.aclose()

    async def __aenter__(self) -> "ShoppingSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
