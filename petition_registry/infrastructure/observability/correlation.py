"""Correlation ids for tracing one registry request through the logs.

The id lives in a ContextVar, so it follows the request across awaits
(fee settlement, persistence) without being passed around explicitly.
The HTTP middleware establishes it; services read it when binding their
operation loggers; the structlog processor stamps it on every entry.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no request context"
_correlation_id: ContextVar[str] = ContextVar("registry_correlation_id", default="")


def generate_correlation_id() -> str:
    """Return a fresh UUID4 correlation id."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the current correlation id, or "" outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current context."""
    _correlation_id.set(correlation_id)


def adopt_correlation_id(incoming: str | None) -> str:
    """Use the caller's correlation id if it sent one, else start a new one.

    Args:
        incoming: Value of the X-Correlation-ID header, if any.

    Returns:
        The correlation id now active in this context.
    """
    correlation_id = (incoming or "").strip() or generate_correlation_id()
    _correlation_id.set(correlation_id)
    return correlation_id


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the active correlation id to each entry.

    An id already bound on the logger wins over the context value.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
