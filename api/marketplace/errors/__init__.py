"""Error handling module for the Marketplace API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    NotFoundError,
    InternalServerError,
    ServiceUnavailableError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "NotFoundError",
    "InternalServerError",
    "ServiceUnavailableError",
    "create_problem_response",
    "register_exception_handlers"
]
