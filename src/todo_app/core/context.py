"""Per-request logging context.

Holds the correlation id of the request being served and, once a session has
been validated, the id of the user it belongs to.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str = "-"
    user_id: str | None = None


_current: ContextVar[RequestContext] = ContextVar("todo_request_context", default=RequestContext())


def current_context() -> RequestContext:
    return _current.get()


def bind_request(request_id: str) -> Token[RequestContext]:
    """Start a fresh context for ``request_id``; no user is attached yet."""

    return _current.set(RequestContext(request_id=request_id))


def bind_user(user_id: object) -> None:
    """Attach the authenticated user to the current request context."""

    _current.set(replace(_current.get(), user_id=str(user_id)))


def restore(token: Token[RequestContext]) -> None:
    _current.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContext",
    "bind_request",
    "bind_user",
    "current_context",
    "restore",
]
