"""Unit tests for custom exception hierarchy"""
import pytest
import httpx
from datetime import datetime

from silverville.exceptions import (
    CapabilityUnavailableError,
    ExternalAPIError,
    RemoteServiceError,
    SilverVilleError,
    ValidationError,
    wrap_external_exception,
)


class TestSilverVilleError:
    """Test base exception class"""

    def test_basic_exception(self):
        error = SilverVilleError("Test error")
        assert error.message == "Test error"
        assert error.user_message == "Something went wrong. Please try again."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        error = SilverVilleError(
            message="Could not apply meal",
            operation="apply_analysis",
            context={"analysis_id": "abc-123"},
            user_message="Your meal could not be saved"
        )
        assert error.operation == "apply_analysis"
        assert error.context["analysis_id"] == "abc-123"
        assert error.user_message == "Your meal could not be saved"

    def test_to_dict(self):
        error = SilverVilleError("Boom", request_id="req-1")
        data = error.to_dict()
        assert data["error"] == "SilverVilleError"
        assert data["request_id"] == "req-1"
        assert "timestamp" in data

    def test_error_is_logged(self, caplog):
        SilverVilleError("Logged failure")
        assert "Logged failure" in caplog.text


class TestSubclasses:
    """Test specialised exceptions"""

    def test_validation_error(self):
        error = ValidationError("cannot be negative", field="fertilizer", value=-3)
        assert error.field == "fertilizer"
        assert error.context == {"field": "fertilizer", "value": -3}
        assert "fertilizer" in error.user_message

    def test_validation_error_merges_context(self):
        error = ValidationError("bad", field="steps", context={"session": 2})
        assert error.context["session"] == 2
        assert error.context["field"] == "steps"

    def test_capability_unavailable(self):
        error = CapabilityUnavailableError("no step counter", capability="Pedometer")
        assert error.capability == "Pedometer"
        assert "Pedometer" in error.user_message

    def test_remote_service_error_defaults(self):
        error = RemoteServiceError("down", status_code=503)
        assert isinstance(error, ExternalAPIError)
        assert error.service == "SilverVille API"
        assert error.status_code == 503


class TestWrapExternalException:
    """Test mapping of httpx errors"""

    def test_timeout(self):
        wrapped = wrap_external_exception(httpx.ReadTimeout("slow"), operation="get_quiz_catalog")
        assert isinstance(wrapped, RemoteServiceError)
        assert "timed out" in wrapped.message

    def test_status_error(self):
        request = httpx.Request("GET", "http://testserver/api/barista/session")
        error = httpx.HTTPStatusError("bad", request=request, response=httpx.Response(500, request=request))

        wrapped = wrap_external_exception(error, operation="get_barista_session")

        assert isinstance(wrapped, RemoteServiceError)
        assert wrapped.status_code == 500
        assert wrapped.cause is error

    def test_passthrough(self):
        original = ValidationError("bad")
        assert wrap_external_exception(original, operation="x") is original

    def test_generic_error(self):
        wrapped = wrap_external_exception(RuntimeError("oops"), operation="complete_walk")
        assert type(wrapped) is SilverVilleError
        assert "complete_walk" in wrapped.message
