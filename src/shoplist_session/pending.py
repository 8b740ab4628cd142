from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

from .models import Credentials, ShoppingItem

SHOPPING_PATH = "/api/shopping"
JSON_HEADERS = {"Content-Type": "application/json"}


class Action(str, Enum):
    LIST = "list"
    ADD = "add"
    REMOVE = "remove"
    EDIT = "edit"
    REGISTER = "register"
    LOGIN = "login"
    LOGOUT = "logout"
    NONE = "none"


@dataclass(frozen=True)
class PendingRequest:
    method: str
    path: str
    action: Action
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None
    sequence: int = 0


IDLE_REQUEST = PendingRequest(method="GET", path="", action=Action.NONE)


def _item_path(item_id: str) -> str:
    return f"{SHOPPING_PATH}/{quote(item_id, safe='')}"


def list_request(token: str) -> PendingRequest:
    return PendingRequest("GET", SHOPPING_PATH, Action.LIST, headers={"token": token})


def add_request(token: str, item: ShoppingItem) -> PendingRequest:
    return PendingRequest(
        "POST",
        SHOPPING_PATH,
        Action.ADD,
        headers={**JSON_HEADERS, "token": token},
        body=item.to_create_payload(),
    )


def remove_request(token: str, item_id: str) -> PendingRequest:
    return PendingRequest("DELETE", _item_path(item_id), Action.REMOVE, headers={"token": token})


def edit_request(token: str, item: ShoppingItem) -> PendingRequest:
    return PendingRequest(
        "PUT",
        _item_path(item.id),
        Action.EDIT,
        headers={**JSON_HEADERS, "token": token},
        body=item.to_payload(),
    )


def register_request(credentials: Credentials) -> PendingRequest:
    return PendingRequest(
        "POST", "/register", Action.REGISTER, headers=dict(JSON_HEADERS), body=credentials.model_dump()
    )


def login_request(credentials: Credentials) -> PendingRequest:
    return PendingRequest(
        "POST", "/login", Action.LOGIN, headers=dict(JSON_HEADERS), body=credentials.model_dump()
    )


def logout_request(token: str) -> PendingRequest:
    return PendingRequest("POST", "/logout", Action.LOGOUT, headers={**JSON_HEADERS, "token": token})
