from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from platformdirs import user_cache_dir
from pydantic import ValidationError

from .models import AppState

logger = logging.getLogger(__name__)

APP_NAME = "shoplist-session"
STATE_KEY = "state"


class PersistenceAdapter(Protocol):
    def save(self, state: AppState) -> None: ...

    def load(self) -> AppState | None: ...

    def clear(self) -> None: ...


@dataclass
class SessionFileStorage:
    """Keeps the state snapshot in a per-session directory.

    Each session id gets its own directory, so independent sessions never
    read each other's snapshot. ``clear`` ends the session.
    """

    session_id: str = "default"
    root: Path | None = None

    def _dir(self) -> Path:
        base = self.root if self.root is not None else Path(user_cache_dir(APP_NAME, appauthor=False))
        return base / "sessions" / self.session_id

    def _path(self) -> Path:
        return self._dir() / f"{STATE_KEY}.json"

    def save(self, state: AppState) -> None:
        path = self._path()
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            if hasattr(os, "fchmod"):
                # an existing file keeps its old mode through O_CREAT
                os.fchmod(handle.fileno(), 0o600)
            handle.write(json.dumps(state.to_payload(), indent=2))

    def load(self) -> AppState | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("state_snapshot_corrupt", extra={"path": str(path)})
            self.clear()
            return None
        try:
            return AppState.model_validate(data)
        except ValidationError:
            logger.warning("state_snapshot_invalid", extra={"path": str(path)})
            self.clear()
            return None

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()


@dataclass
class MemoryStorage:
    values: dict[str, str] = field(default_factory=dict)

    def save(self, state: AppState) -> None:
        self.values[STATE_KEY] = json.dumps(state.to_payload())

    def load(self) -> AppState | None:
        raw = self.values.get(STATE_KEY)
        if raw is None:
            return None
        return AppState.model_validate_json(raw)

    def clear(self) -> None:
        self.values.pop(STATE_KEY, None)
