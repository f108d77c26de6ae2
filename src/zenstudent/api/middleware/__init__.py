"""HTTP middleware."""

from zenstudent.api.middleware.error_handler import ErrorHandlerMiddleware

__all__ = ["ErrorHandlerMiddleware"]
