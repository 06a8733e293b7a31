# -*- coding: utf-8 -*-
"""
Turns any failure of a resource call into one translated message.

Technical details go to the log; the returned text is what the user sees.
"""

from typing import Any, Dict, Optional

from services.exceptions import (
    ApiException, ErrorKind, NetworkException, ValidationException
)
from services.translation_manager import tr
from utils.logger import get_logger

logger = get_logger(__name__)


def map_api_error(error: ApiException, fallback_key: Optional[str] = None) -> str:
    """
    Message for an HTTP-level failure.

    Validation answers show the backend's own explanation; other statuses
    use the caller's key (e.g. "agreement.create_failed") when given.
    """
    where = error.context or "request"

    if error.kind == ErrorKind.VALIDATION:
        details = _extract_validation_details(error.response_data) or error.message
        logger.warning(f"{where}: rejected ({error.status_code}): {details}")
        return tr("error.api.validation", details=details)

    if error.kind == ErrorKind.NOT_FOUND:
        logger.warning(f"{where}: not found: {error}")
        return tr(fallback_key or "error.api.not_found")

    logger.error(f"{where}: server error: {error}")
    return tr(fallback_key or "error.api.server")


def map_network_error(error: NetworkException) -> str:
    cause = str(error.original_error or "").lower()
    logger.warning(f"{error.context or 'request'}: network failure: {error.message}")
    if "timeout" in cause or "timed out" in cause:
        return tr("error.api.timeout")
    return tr("error.api.connection")


def map_exception(error: Exception, context: str = None, fallback_key: str = None) -> str:
    """Map any exception to exactly one user-facing message."""
    if isinstance(error, ApiException):
        error.context = error.context or context
        return map_api_error(error, fallback_key)

    if isinstance(error, NetworkException):
        error.context = error.context or context
        return map_network_error(error)

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"{context}: invalid input: {error.errors}")
        return error.message or tr("validation.check_data")

    logger.exception(f"Unexpected error in {context}: {error}")
    return tr(fallback_key or "error.unexpected")


def _extract_validation_details(response_data: Dict[str, Any]) -> str:
    """Readable text from an error envelope, or "" when there is none."""
    if not response_data:
        return ""

    error = response_data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str) and error:
        return error

    errors = response_data.get("errors")
    if isinstance(errors, dict):
        return "\n".join(
            f"{name}: {message}"
            for name, messages in errors.items()
            for message in (messages if isinstance(messages, list) else [messages])
        )
    if isinstance(errors, list):
        return "\n".join(str(e) for e in errors)

    return response_data.get("message") or ""
