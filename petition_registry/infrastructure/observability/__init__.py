"""Observability infrastructure: structured logging and correlation ids.

Usage:
    from petition_registry.infrastructure.observability import (
        configure_structlog,
        get_correlation_id,
        set_correlation_id,
    )
"""

from petition_registry.infrastructure.observability.correlation import (
    adopt_correlation_id,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from petition_registry.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "adopt_correlation_id",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
