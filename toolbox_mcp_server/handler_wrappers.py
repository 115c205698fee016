# handler_wrappers.py
"""Shared wrappers, error types and result types for tool handlers.

Error Handling Strategy:
    Handler functions may raise HandlerError subclasses for expected
    failures (missing file, unknown tool, bad parameters) or let any other
    exception escape for provider failures. The _error_handler wrapper turns
    both into an explicit Err result, so a wrapped handler never raises.
    The request processor collapses Ok/Err into the response envelope.
"""

from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Union
import logging

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# HandlerError - Custom exception for handler failures with structured error info
# ------------------------------------------------------------------------------
# Raise this (or a subclass) in handlers to return a clean error to the client.
# - message: What went wrong
# - hint: Actionable suggestion for the AI (optional)
# - **data: Extra context like filepath, collection, etc. (optional)
#
# Example: raise NotFound("File not found: /tmp/x", filepath="/tmp/x")
# ------------------------------------------------------------------------------
class HandlerError(Exception):
    """Structured error for tool handlers.

    Args:
        message: Description of what went wrong
        hint: Actionable suggestion for the AI (optional)
        **data: Extra context like filepath, collection, etc. (optional)
    """

    kind = "HandlerError"

    def __init__(self, message: str, hint: Optional[str] = None, **data: Any):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.data = data


class UnknownOperation(HandlerError):
    """No handler is bound to the requested tool name."""

    kind = "UnknownOperation"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", tool_name=name)
        self.name = name


class InvalidParams(HandlerError):
    """Tool arguments failed validation against the tool's parameter model."""

    kind = "InvalidParams"


class NotFound(HandlerError):
    """A referenced resource does not exist."""

    kind = "NotFound"


class ProviderFailure(HandlerError):
    """The capability provider failed while serving a request."""

    kind = "ProviderFailure"


class StartupFailure(Exception):
    """Provider initialization failed. Fatal: the server must not start."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ------------------------------------------------------------------------------
# Ok / Err - Explicit handler outcomes
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Ok:
    payload: Any = None

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: HandlerError) -> "Err":
        msg = error.message
        if error.hint:
            msg += f" (hint: {error.hint})"
        return cls(kind=error.kind, message=msg, data=dict(error.data))


Result = Union[Ok, Err]


# ------------------------------------------------------------------------------
# _error_handler - Outermost wrapper that catches exceptions
# ------------------------------------------------------------------------------
# Converts the handler's return value into Ok and any exception into Err:
#   - HandlerError -> Err(kind, "message (hint: ...)")
#   - Other exceptions -> Err("ProviderFailure", str(exc)), traceback logged
# ------------------------------------------------------------------------------
def _error_handler(
    func: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Result]]:
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Result:
        try:
            return Ok(await func(*args, **kwargs))
        except HandlerError as e:
            logger.warning("Handler error: %s (hint: %s)", e.message, e.hint)
            return Err.from_error(e)
        except OSError as e:
            # Expected provider failures (permissions, missing parents, ...)
            logger.warning("Provider error: %s", e)
            return Err(kind=ProviderFailure.kind, message=str(e))
        except Exception as e:
            # Log full traceback for debugging, return clean error to client
            logger.exception("Unexpected handler error: %s", e)
            return Err(kind=ProviderFailure.kind, message=str(e) or type(e).__name__)

    return wrapper


# ------------------------------------------------------------------------------
# _require_session - Check that the provider session is ready
# ------------------------------------------------------------------------------
# Raises ProviderFailure if the session has not been opened or is closing.
# The filesystem session is always ready; the document-store session is
# ready only between open() and close().
# ------------------------------------------------------------------------------
def _require_session(
    func: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Any]]:
    @wraps(func)
    async def wrapper(params: Any, session: Any) -> Any:
        if session is None or not session.is_ready:
            raise ProviderFailure(
                "Session not ready",
                hint="The server has not finished connecting to its provider",
            )
        return await func(params, session)

    return wrapper
