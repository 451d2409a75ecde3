"""
Tests for error handling middleware.

Tests:
- Sensitive data sanitization
- Exception to status code mapping
- Error envelope structure
"""

import json

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from core.middleware.error_handling import (
    ErrorHandlingMiddleware,
    build_error_body,
    get_safe_error_details,
    sanitize_error_message,
    setup_error_handlers,
)


class TestSensitiveDataSanitization:
    """Test redaction of secrets in error messages."""

    @pytest.mark.parametrize("sensitive_input,expected_redacted", [
        ('password="secret123"', True),
        ('token="abc123xyz"', True),
        ('access_token:jwt.token.here', True),
        ('api_key="sk_live_12345"', True),
        ('api-key="secret-key-123"', True),
        ('client_secret:abc123', True),
        ('authorization: Basic YWxhZGRpbg==', True),
        ('Bearer eyJhbGciOiJIUzI1NiJ9.payload.sig', True),
        ('message="Interview not found"', False),
        ('count=12345', False),
    ])
    def test_sanitize_sensitive_patterns(self, sensitive_input, expected_redacted):
        result = sanitize_error_message(sensitive_input)

        if expected_redacted:
            assert "[REDACTED]" in result
        else:
            assert result == sensitive_input

    def test_domain_messages_untouched(self):
        """Test that interview error messages pass through unchanged."""
        for message in (
            "Answer already exists and cannot be updated.",
            "Question doesn't exist in the interview!",
            "No Interview Exists!",
        ):
            assert sanitize_error_message(message) == message

    def test_non_string_input(self):
        assert sanitize_error_message(404) == "404"


class TestSafeErrorDetails:
    """Test error detail extraction."""

    def test_basic_exception_details(self):
        details = get_safe_error_details(ValueError("bad token=abc"))

        assert details["type"] == "ValueError"
        assert "abc" not in details["message"]
        assert "traceback" not in details

    def test_details_with_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            details = get_safe_error_details(exc, include_details=True)

        assert "traceback" in details

    def test_build_error_body(self):
        body = build_error_body("HTTP_EXCEPTION", "Nope", "/api/v1/x", "POST")

        assert body == {
            "error": {"code": "HTTP_EXCEPTION", "message": "Nope", "path": "/api/v1/x", "method": "POST"}
        }

    def test_build_error_body_with_details(self):
        body = build_error_body("VALIDATION_ERROR", "Bad", "/", "GET", details=[{"field": "x"}])

        assert body["error"]["details"] == [{"field": "x"}]


class Payload(BaseModel):
    value: int


class TestErrorHandlingMiddleware:
    """Test error handling middleware with various exception types."""

    @pytest.fixture
    def app(self):
        """Create FastAPI app with error handling middleware."""
        app = FastAPI()
        setup_error_handlers(app)
        app.add_middleware(ErrorHandlingMiddleware, debug=False)

        @app.get("/success")
        async def success():
            return {"message": "success"}

        @app.get("/http-error")
        async def http_error():
            raise HTTPException(status_code=400, detail="No interview found!")

        @app.post("/validate")
        async def validate(payload: Payload):
            return payload

        @app.get("/integrity-error")
        async def integrity_error():
            raise IntegrityError("duplicate key", None, Exception("uq_interview_user_job"))

        @app.get("/operational-error")
        async def operational_error():
            raise OperationalError("connection lost", None, Exception("down"))

        @app.get("/sqlalchemy-error")
        async def sqlalchemy_error():
            raise SQLAlchemyError("something broke")

        @app.get("/timeout-error")
        async def timeout_error():
            raise TimeoutError("Request timed out")

        @app.get("/generic-error")
        async def generic_error():
            raise RuntimeError("Unexpected error with api_key=secret")

        return app

    @pytest.fixture
    def client(self, app):
        return TestClient(app)

    def test_successful_request(self, client):
        response = client.get("/success")

        assert response.status_code == 200
        assert response.json() == {"message": "success"}

    def test_http_exception(self, client):
        response = client.get("/http-error")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "HTTP_EXCEPTION"
        assert error["message"] == "No interview found!"
        assert error["path"] == "/http-error"
        assert error["method"] == "GET"

    def test_validation_error(self, client):
        response = client.post("/validate", json={"value": "not-a-number"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "body.value"

    @pytest.mark.parametrize("path,status_code,code", [
        ("/integrity-error", 409, "INTEGRITY_ERROR"),
        ("/operational-error", 503, "DATABASE_ERROR"),
        ("/sqlalchemy-error", 500, "DATABASE_ERROR"),
        ("/timeout-error", 504, "TIMEOUT"),
        ("/generic-error", 500, "INTERNAL_SERVER_ERROR"),
    ])
    def test_exception_mapping(self, client, path, status_code, code):
        response = client.get(path)

        assert response.status_code == status_code
        assert response.json()["error"]["code"] == code

    def test_internal_details_hidden(self, client):
        response = client.get("/generic-error")

        data = response.json()
        assert "secret" not in json.dumps(data)
        assert "details" not in data["error"]

    def test_request_id_echoed(self, client):
        response = client.get("/generic-error", headers={"x-request-id": "req-123"})

        assert response.json()["error"]["request_id"] == "req-123"

    def test_debug_mode_includes_details(self):
        app = FastAPI()
        app.add_middleware(ErrorHandlingMiddleware, debug=True)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("boom")

        response = TestClient(app).get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["details"]["type"] == "RuntimeError"
