"""
Name: Observability Tests (logger + metrics + context)

Responsibilities:
  - Validate secret redaction in JSON logs
  - Validate request context enrichment
  - Validate logger bootstrap with broken settings
  - Validate metric normalization and exposition
"""

import json
import logging
import sys

import pytest
from erp_client.context import current_request, get_context_dict, outgoing_request
from erp_client.crosscutting import metrics
from erp_client.crosscutting.config import get_settings
from erp_client.crosscutting.logger import JSONFormatter, setup_logger

pytestmark = pytest.mark.unit


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("erp-client", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_redacts_sensitive_keys(self):
        record = _record(
            password="hunter2",
            payload={"email": "a@x.com", "token": "abc", "refreshToken": "def"},
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["password"] == "***REDACTADO***"
        assert data["payload"]["token"] == "***REDACTADO***"
        assert data["payload"]["refreshToken"] == "***REDACTADO***"
        assert data["payload"]["email"] == "a@x.com"

    def test_key_spelling_does_not_bypass_redaction(self):
        data = json.loads(
            JSONFormatter().format(_record(refresh_token="r", headers={"Set-Cookie": "s"}))
        )

        assert data["refresh_token"] == "***REDACTADO***"
        assert data["headers"]["Set-Cookie"] == "***REDACTADO***"

    def test_cookie_name_is_not_a_secret(self):
        data = json.loads(JSONFormatter().format(_record(cookie_name="auth-storage")))

        assert data["cookie_name"] == "auth-storage"

    def test_bearer_value_under_any_key_is_redacted(self):
        data = json.loads(JSONFormatter().format(_record(header="Bearer abc.def")))

        assert data["header"] == "Bearer ***REDACTADO***"

    def test_includes_request_context(self):
        with outgoing_request("GET", "/empresas") as ctx:
            data = json.loads(JSONFormatter().format(_record()))

        assert data["request_id"] == ctx.request_id
        assert data["method"] == "GET"
        assert data["path"] == "/empresas"

    def test_truncates_long_strings(self):
        data = json.loads(JSONFormatter().format(_record(blob="x" * 10_000)))

        assert data["blob"].endswith("…(truncado)")

    def test_exception_is_rendered(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "erp-client", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]


class TestSetupLogger:
    def test_invalid_settings_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("ERP_DEFAULT_PAGE_SIZE", "0")
        get_settings.cache_clear()
        try:
            log = setup_logger("erp-client-bootstrap")
        finally:
            monkeypatch.delenv("ERP_DEFAULT_PAGE_SIZE")
            get_settings.cache_clear()

        assert log.level == logging.INFO
        assert isinstance(log.handlers[0].formatter, JSONFormatter)


class TestContext:
    def test_outside_a_request_there_is_no_context(self):
        assert current_request() is None
        assert get_context_dict() == {}

    def test_context_is_restored_after_failure(self):
        with pytest.raises(ValueError):
            with outgoing_request("POST", "/auth/login"):
                assert current_request().method == "POST"
                raise ValueError("x")

        assert current_request() is None

    def test_nested_requests_restore_outer(self):
        with outgoing_request("GET", "/a") as outer:
            with outgoing_request("GET", "/b"):
                pass
            assert current_request() is outer

        assert outer.request_id != ""


class TestMetrics:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/empresas/5/contas", "/empresas/{id}/contas"),
            ("/empresas/5/contas/12?x=1", "/empresas/{id}/contas/{id}"),
            (
                "/tarefas/8c1f7a52-3b2e-4d7a-9a4e-1f2b3c4d5e6f/status",
                "/tarefas/{id}/status",
            ),
            ("/auth/login", "/auth/login"),
        ],
    )
    def test_normalize_endpoint(self, path, expected):
        assert metrics._normalize_endpoint(path) == expected

    @pytest.mark.parametrize(
        "code, bucket",
        [(200, "2xx"), (302, "3xx"), (404, "4xx"), (503, "5xx"), (0, "no_response")],
    )
    def test_status_bucket(self, code, bucket):
        assert metrics._status_bucket(code) == bucket

    def test_exposition_contains_recorded_series(self):
        metrics.record_request_metrics("/empresas/99/contas", "GET", 200, 0.05)
        metrics.record_request_failure("network")
        metrics.record_session_event("login")

        body, content_type = metrics.get_metrics_text()
        text = body.decode()

        assert content_type.startswith("text/plain")
        assert 'endpoint="/empresas/{id}/contas"' in text
        assert 'erp_client_request_failures_total{reason="network"}' in text
        assert 'erp_client_session_events_total{event="login"}' in text
        assert "erp_client_request_latency_seconds_bucket" in text
