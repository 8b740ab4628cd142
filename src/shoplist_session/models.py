from __future__ import annotations

import builtins
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ShoppingItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="_id")
    type: str
    count: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)

    def to_create_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id"})

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Credentials(BaseModel):
    username: str
    password: str = Field(repr=False)


class TokenResponse(BaseModel):
    token: str = Field(min_length=1)


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"

    @property
    def text(self) -> str:
        return ""


class Succeeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["succeeded"] = "succeeded"
    message: str

    @property
    def text(self) -> str:
        return self.message


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    reason: str

    @property
    def text(self) -> str:
        return self.reason


Outcome = Annotated[Union[Idle, Succeeded, Failed], Field(discriminator="kind")]


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    list: List[ShoppingItem] = Field(default_factory=builtins.list)
    is_logged: bool = Field(default=False, alias="isLogged")
    token: str = ""
    loading: bool = False
    outcome: Outcome = Field(default_factory=Idle)
    user: str = ""

    @model_validator(mode="before")
    @classmethod
    def _upgrade_error_field(cls, data: Any) -> Any:
        # snapshots written before the outcome field carried a bare "error" string
        if isinstance(data, dict) and "error" in data and "outcome" not in data:
            data = dict(data)
            message = data.pop("error") or ""
            data["outcome"] = {"kind": "failed", "reason": message} if message else {"kind": "idle"}
        return data

    @model_validator(mode="after")
    def _token_requires_login(self) -> "AppState":
        if self.token and not self.is_logged:
            raise ValueError("token must be empty while logged out")
        return self

    @property
    def error(self) -> str:
        return self.outcome.text

    @classmethod
    def logged_out(cls, outcome: Idle | Succeeded | Failed | None = None) -> "AppState":
        return cls(outcome=outcome or Idle())

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
