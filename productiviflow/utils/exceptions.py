"""Domain exception classes and their HTTP translation."""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class ProductiviFlowException(Exception):
    """Base exception for the application."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ProductiviFlowException):
    """A task, section or subsection is missing or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND


class AlreadyCompletedError(ProductiviFlowException):
    """A completed task was completed again."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStateError(ProductiviFlowException):
    """An entity would violate a structural rule, e.g. a deadline task without a deadline."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class DuplicateEmailError(ProductiviFlowException):
    """Registration used an email that already belongs to an account."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentialsError(ProductiviFlowException):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


def handle_domain_error(request: Request, error: ProductiviFlowException) -> JSONResponse:
    """Render a domain error as a JSON response."""

    bound = logger.bind(path=request.url.path, error=type(error).__name__, details=error.details)
    if error.status_code >= 500:
        bound.error(error.message)
    else:
        bound.warning(error.message)
    content: Dict[str, Any] = {"detail": error.message}
    if error.details:
        content["details"] = error.details
    return JSONResponse(status_code=error.status_code, content=content, headers=error.headers)


__all__ = [
    "AlreadyCompletedError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidStateError",
    "NotFoundError",
    "ProductiviFlowException",
    "handle_domain_error",
]
