from __future__ import annotations

import logging
from collections.abc import Callable

from .models import Credentials, ShoppingItem
from .pending import (
    PendingRequest,
    add_request,
    edit_request,
    list_request,
    login_request,
    logout_request,
    register_request,
    remove_request,
)
from .store import StateStore

logger = logging.getLogger(__name__)

Installer = Callable[[PendingRequest], PendingRequest]


class RequestDispatcher:
    """One method per user intent.

    Each method builds the request for its intent and hands it to the
    installer, which starts a handler run. Only ``login`` touches state
    directly: it shows the attempted username while the request is in flight.
    """

    def __init__(self, store: StateStore, install: Installer) -> None:
        self._store = store
        self._install = install

    @property
    def _token(self) -> str:
        return self._store.state.token

    def list(self, token: str) -> PendingRequest:
        return self._install(list_request(token))

    def add(self, item: ShoppingItem) -> PendingRequest:
        if not item.type.strip():
            raise ValueError("item type must not be empty")
        return self._install(add_request(self._token, item))

    def remove(self, item_id: str) -> PendingRequest:
        if not item_id:
            raise ValueError("item id must not be empty")
        return self._install(remove_request(self._token, item_id))

    def edit(self, item: ShoppingItem) -> PendingRequest:
        if not item.id:
            raise ValueError("cannot edit an item the server has not assigned an id to")
        return self._install(edit_request(self._token, item))

    def register(self, credentials: Credentials) -> PendingRequest:
        logger.info("register_attempt", extra={"username": credentials.username})
        return self._install(register_request(credentials))

    def login(self, credentials: Credentials) -> PendingRequest:
        logger.info("login_attempt", extra={"username": credentials.username})
        self._store.set_user(credentials.username)
        return self._install(login_request(credentials))

    def logout(self) -> PendingRequest:
        logger.info("logout")
        return self._install(logout_request(self._token))
