"""Tests for the tool response envelope."""

import json

from figma_mcp.errors import FigmaApiError, NotFoundError, RateLimitError
from figma_mcp.formatters import format_error, format_response, format_success


def _payload(result):
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


def test_format_response_passes_data_through():
    result = format_response({"name": "Design", "nodes": [1, 2]})

    assert result.isError is False
    assert _payload(result) == {"name": "Design", "nodes": [1, 2]}


def test_format_response_is_indented():
    result = format_response({"a": 1})

    assert result.content[0].text == '{\n  "a": 1\n}'


def test_format_success_without_data():
    assert _payload(format_success("Done")) == {"success": True, "message": "Done"}


def test_format_success_with_data():
    payload = _payload(format_success("Done", {"id": "x"}))

    assert payload["data"] == {"id": "x"}


def test_format_error_for_rate_limit():
    result = format_error(RateLimitError("Rate limit exceeded", retry_after=30))

    assert result.isError is True
    payload = _payload(result)
    assert payload["error"] == "Error: Rate limit exceeded (retryable)"
    assert payload["details"] == {
        "name": "RateLimitError",
        "code": "RATE_LIMIT_EXCEEDED",
        "message": "Rate limit exceeded",
        "status_code": 429,
        "retryable": True,
        "retry_after": 30,
    }


def test_format_error_for_not_found():
    payload = _payload(format_error(NotFoundError("Resource", "/v1/files/abc")))

    assert payload["error"] == "Error: Resource not found: /v1/files/abc"
    assert payload["details"]["code"] == "NOT_FOUND"
    assert payload["details"]["resource"] == "Resource"


def test_format_error_for_client_error_is_not_retryable():
    payload = _payload(format_error(FigmaApiError("Invalid depth", status_code=400)))

    assert payload["error"] == "Error: Invalid depth"
    assert payload["details"]["retryable"] is False


def test_format_error_for_unexpected_exception():
    result = format_error(ValueError("boom"))

    assert result.isError is True
    assert _payload(result) == {
        "error": "Error: boom",
        "details": {"name": "ValueError", "code": "UNKNOWN_ERROR", "message": "boom"},
    }
