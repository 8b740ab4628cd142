from __future__ import annotations

import asyncio
import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter

from .error_mapper import (
    LOGOUT_FAILED_MESSAGE,
    REGISTER_SUCCESS_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    failure_message,
)
from .exceptions import ApiError, ResponseFormatError, SessionExpiredError, TransportError
from .http_client import HttpClient
from .logging_utils import log_transition
from .models import Failed, ShoppingItem, TokenResponse
from .pending import IDLE_REQUEST, Action, PendingRequest, list_request
from .store import StateStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ITEMS = TypeAdapter(list[ShoppingItem])

_MUTATIONS = {Action.ADD, Action.REMOVE, Action.EDIT}
_REPORTS_ERRORS = {Action.REGISTER, Action.LOGIN, Action.LIST, Action.ADD, Action.REMOVE, Action.EDIT}


class ResponseHandler:
    """Runs the request/response state machine for one session.

    Each installed request gets the next sequence number and its own task.
    A run goes Loading -> await network -> settle. Only the run holding the
    latest sequence number may settle; older runs are dropped when their
    response arrives.
    """

    def __init__(self, store: StateStore, http: HttpClient) -> None:
        self._store = store
        self._http = http
        self._sequence = itertools.count(1)
        self._current = IDLE_REQUEST
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def current(self) -> PendingRequest:
        return self._current

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def install(self, pending: PendingRequest) -> PendingRequest:
        installed = replace(pending, sequence=next(self._sequence))
        self._current = installed
        if installed.action is Action.NONE:
            return installed
        self._store.set_loading(True)
        task = asyncio.get_running_loop().create_task(
            self._run(installed),
            name=f"shoplist-{installed.action.value}-{installed.sequence}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return installed

    async def settled(self) -> None:
        """Wait until no run is in flight, cascades included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _is_latest(self, pending: PendingRequest) -> bool:
        return pending.sequence == self._current.sequence

    async def _run(self, pending: PendingRequest) -> None:
        started = time.monotonic()
        response: httpx.Response | None = None
        error: ApiError | None = None
        try:
            response = await self._http.send(pending)
        except ApiError as exc:
            error = exc
        except Exception as exc:
            logger.exception(
                "request_failed_unexpectedly",
                extra={"action": pending.action.value, "sequence": pending.sequence},
            )
            error = TransportError(
                code="UNEXPECTED_ERROR",
                message=str(exc) or type(exc).__name__,
                status_code=None,
                details={"type": type(exc).__name__},
            )
        duration_ms = int((time.monotonic() - started) * 1000)
        status_code = response.status_code if response is not None else (error.status_code if error else None)

        if not self._is_latest(pending):
            logger.info(
                "stale_response_discarded",
                extra={"action": pending.action.value, "sequence": pending.sequence},
            )
            log_transition(logger, pending.action.value, pending.sequence, "discarded", status_code, duration_ms)
            return

        self._store.set_loading(False)
        if error is not None:
            outcome = self._on_failure(pending, error)
        else:
            try:
                outcome = self._on_success(pending, response)
            except ResponseFormatError as exc:
                outcome = self._on_failure(pending, exc)
        log_transition(logger, pending.action.value, pending.sequence, outcome, status_code, duration_ms)

    def _on_success(self, pending: PendingRequest, response: httpx.Response) -> str:
        action = pending.action
        if action is Action.LIST:
            items = self._parse(response, _ITEMS.validate_python)
            self._store.replace(self._store.state.model_copy(update={"list": items}))
            return "succeeded"
        if action in _MUTATIONS:
            self.install(list_request(self._store.state.token))
            return "refetching"
        if action is Action.REGISTER:
            self._store.set_notice(REGISTER_SUCCESS_MESSAGE)
            return "succeeded"
        if action is Action.LOGIN:
            token = self._parse(response, TokenResponse.model_validate).token
            self._store.replace(self._store.state.model_copy(update={"is_logged": True, "token": token}))
            self.install(list_request(token))
            return "logged_in"
        if action is Action.LOGOUT:
            self._store.reset()
            return "logged_out"
        return "ignored"

    def _on_failure(self, pending: PendingRequest, error: ApiError) -> str:
        action = pending.action
        if error.status_code is None:
            # transport failures and unreadable bodies are surfaced, never dropped
            logger.warning(
                "request_failed_without_status",
                extra={"action": action.value, "error_code": error.code},
            )
            self._store.set_error(failure_message(error, action))
            return "failed"
        if isinstance(error, SessionExpiredError):
            self._store.reset(Failed(reason=SESSION_EXPIRED_MESSAGE))
            return "session_expired"
        if action is Action.LOGOUT:
            self._store.reset(Failed(reason=LOGOUT_FAILED_MESSAGE))
            return "logged_out"
        if action in _REPORTS_ERRORS:
            self._store.set_error(failure_message(error, action))
            return "failed"
        return "ignored"

    @staticmethod
    def _parse(response: httpx.Response, validate: Callable[[Any], T]) -> T:
        try:
            return validate(response.json())
        except ValueError as exc:
            raise ResponseFormatError(
                code="INVALID_RESPONSE",
                message=str(exc),
                status_code=None,
                details={"http_status": response.status_code},
            ) from exc
