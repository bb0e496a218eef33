from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Final

_CURRENT_REQUEST_ID: Final[ContextVar[str | None]] = ContextVar(
    "current_request_id",
    default=None,
)


def set_current_request_id(request_id: str | None) -> Token[str | None]:
    return _CURRENT_REQUEST_ID.set(request_id)


def get_current_request_id() -> str | None:
    return _CURRENT_REQUEST_ID.get()


def reset_current_request_id(token: Token[str | None]) -> None:
    _CURRENT_REQUEST_ID.reset(token)
