"""
Tests for error response mapping
"""

import json

import pytest

from flight_search.error_handlers import ErrorCode, ErrorHandler, ExceptionMapper
from flight_search.types import (
    AuthError,
    NetworkError,
    UpstreamClientError,
    UpstreamServerError,
    ValidationError,
)


def body_of(response):
    return json.loads(response.body)


class TestErrorHandler:
    """Test error body formatting"""

    def test_create_error_response(self):
        body = ErrorHandler.create_error_response("Something broke", ErrorCode.INTERNAL_ERROR)

        assert body["error"] == "Something broke"
        assert body["error_code"] == "INTERNAL_ERROR"
        assert "timestamp" in body
        assert "details" not in body

    def test_details_included_when_given(self):
        body = ErrorHandler.create_error_response("Bad", ErrorCode.VALIDATION_ERROR, {"fields": ["origin"]})
        assert body["details"] == {"fields": ["origin"]}

    def test_unknown_code_keeps_original_message(self):
        assert ErrorHandler.get_user_friendly_message("SOMETHING_ELSE", "raw") == "raw"


class TestExceptionMapper:
    """Test domain exception to status code mapping"""

    def test_validation_error(self):
        response = ExceptionMapper.map_exception(
            ValidationError("Missing required fields: origin", fields=["origin"])
        )

        assert response.status_code == 400
        body = body_of(response)
        assert body["error"] == "Missing required fields: origin"
        assert body["details"] == {"fields": ["origin"]}

    def test_upstream_bad_request_is_invalid_search(self):
        response = ExceptionMapper.map_exception(UpstreamClientError("INVALID DATE", 400))

        assert response.status_code == 400
        assert body_of(response)["error_code"] == ErrorCode.INVALID_SEARCH

    @pytest.mark.parametrize(
        "exception, error_code",
        [
            (AuthError("Failed to get access token", 401), ErrorCode.AUTH_FAILED),
            (NetworkError("connection refused"), ErrorCode.NETWORK_ERROR),
            (UpstreamClientError("not found", 404), ErrorCode.PROVIDER_ERROR),
            (UpstreamServerError("unavailable", 503), ErrorCode.PROVIDER_ERROR),
            (RuntimeError("boom"), ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_server_side_failures_return_500(self, exception, error_code):
        response = ExceptionMapper.map_exception(exception)

        assert response.status_code == 500
        body = body_of(response)
        assert body["error_code"] == error_code
        assert "boom" not in body["error"]
