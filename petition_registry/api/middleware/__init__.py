"""HTTP middleware."""

from petition_registry.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
