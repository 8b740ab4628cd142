from __future__ import annotations

import logging
from collections.abc import Callable

from .models import AppState, Failed, Idle, Succeeded
from .persistence import PersistenceAdapter

logger = logging.getLogger(__name__)

StateListener = Callable[[AppState], None]


class StateStore:
    """Single owner of the session's AppState.

    Every change that is worth restoring goes through ``_commit`` and is
    saved before listeners see it. ``set_loading`` is the one setter that
    skips persistence.
    """

    def __init__(self, persistence: PersistenceAdapter, initial: AppState | None = None) -> None:
        self._persistence = persistence
        self._state = initial or AppState.logged_out()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_loading(self, loading: bool) -> None:
        self._apply(self._state.model_copy(update={"loading": loading, "outcome": Idle()}), persist=False)

    def set_error(self, message: str) -> None:
        outcome = Failed(reason=message) if message else Idle()
        self._commit(self._state.model_copy(update={"outcome": outcome}))

    def set_notice(self, message: str) -> None:
        self._commit(self._state.model_copy(update={"outcome": Succeeded(message=message)}))

    def set_user(self, user: str) -> None:
        self._commit(self._state.model_copy(update={"user": user}))

    def replace(self, state: AppState) -> None:
        self._commit(state)

    def reset(self, outcome: Idle | Succeeded | Failed | None = None) -> None:
        self._commit(AppState.logged_out(outcome))

    def _commit(self, state: AppState) -> None:
        self._apply(state, persist=True)

    def _apply(self, state: AppState, *, persist: bool) -> None:
        if persist:
            try:
                self._persistence.save(state)
            except OSError:
                # state still advances in memory
                logger.exception("state_snapshot_write_failed")
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("state_listener_failed")
