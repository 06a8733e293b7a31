# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories the wizard reacts to."""
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"


_VALIDATION_STATUSES = (400, 409, 422)


class ApiException(Exception):
    """Exception raised for API errors."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.context = context

    @property
    def kind(self) -> ErrorKind:
        if self.status_code == 404:
            return ErrorKind.NOT_FOUND
        if self.status_code in _VALIDATION_STATUSES:
            return ErrorKind.VALIDATION
        return ErrorKind.SERVER

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationException(Exception):
    """Exception raised for validation errors."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors or []
        self.context = context


class NetworkException(Exception):
    """Exception raised for network/connection errors."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context


def classify_error(error: Exception) -> ErrorKind:
    """Return the ErrorKind of any exception raised by a resource call."""
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind
    return ErrorKind.SERVER
