# -*- coding: utf-8 -*-
"""
Tests for mapping failures to a single user-facing message.
"""

from services.error_mapper import map_exception
from services.exceptions import (
    ApiException, ErrorKind, NetworkException, ValidationException, classify_error
)


class TestClassifyError:

    def test_api_statuses(self):
        assert classify_error(ApiException("x", status_code=404)) == ErrorKind.NOT_FOUND
        assert classify_error(ApiException("x", status_code=422)) == ErrorKind.VALIDATION
        assert classify_error(ApiException("x", status_code=503)) == ErrorKind.SERVER

    def test_other_errors(self):
        assert classify_error(NetworkException("down")) == ErrorKind.NETWORK
        assert classify_error(KeyError("x")) == ErrorKind.SERVER


class TestMapException:

    def test_backend_message_is_shown_for_validation(self):
        error = ApiException("bad", status_code=400,
                             response_data={"success": False, "error": {"message": "Rent is required"}})
        assert map_exception(error) == "Validation error:\nRent is required"

    def test_field_errors(self):
        error = ApiException("bad", status_code=422, response_data={"errors": {"rent": ["too low"]}})
        assert "rent: too low" in map_exception(error)

    def test_server_error_uses_fallback(self):
        error = ApiException("boom", status_code=500)
        assert map_exception(error, fallback_key="agreement.create_failed") == "Failed to create agreement"
        assert map_exception(error) == "Server error. Please try again later."

    def test_context_is_recorded(self):
        error = ApiException("boom", status_code=500)
        map_exception(error, context="create_agreement")
        assert error.context == "create_agreement"

    def test_network(self):
        assert map_exception(NetworkException("x", original_error=TimeoutError("timed out"))) == \
            "Connection timeout. Please try again."
        assert map_exception(NetworkException("x")) == \
            "Connection error. Please check your internet connection."

    def test_validation_exception_message(self):
        assert map_exception(ValidationException("Unit is required")) == "Unit is required"

    def test_unexpected(self):
        assert map_exception(RuntimeError("x")) == "An unexpected error occurred."
