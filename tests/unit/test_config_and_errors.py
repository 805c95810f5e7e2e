# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import logging
import socket
import ssl

import httpx
import pytest

from httpmodule import config, log
from httpmodule.config import DEFAULT_USER_AGENT
from httpmodule.errors import ErrorCategory, InvalidMethodError, categorize_exception


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("HTTPMODULE_BASE_URL", "http://api.test")
    monkeypatch.setenv("HTTPMODULE_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRIES", "3")
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRY_DELAY", "0.1")
    monkeypatch.setenv("HTTPMODULE_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("HTTPMODULE_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("HTTPMODULE_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.base_url == "http://api.test"
    assert settings.timeout == 5.5
    assert settings.retry == 3
    assert settings.retry_delay == 0.1
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("HTTPMODULE_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRIES", "ten")
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRY_DELAY", "")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout == 10.0
    assert settings.retry == config.HttpSettings.retry == 0
    assert settings.retry_delay == config.HttpSettings.retry_delay == 0.02
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_http_settings_clamp_negative_retry(monkeypatch):
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRIES", "-2")
    monkeypatch.setenv("HTTPMODULE_HTTP_RETRY_DELAY", "-1")
    settings = config.load_http_settings()
    assert settings.retry == 0
    assert settings.retry_delay == 0.0


def test_http_settings_redirects_truthy_variants(monkeypatch):
    monkeypatch.setenv("HTTPMODULE_HTTP_REDIRECTS", "1")
    assert config.load_http_settings().allow_redirects is True

    monkeypatch.setenv("HTTPMODULE_HTTP_REDIRECTS", "on")
    assert config.load_http_settings().allow_redirects is True


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("HTTPMODULE_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("HTTPMODULE_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


@pytest.fixture
def transport_loggers():
    saved = {name: logging.getLogger(name).level for name in log.TRANSPORT_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_setup_logging_uses_env_level(monkeypatch, transport_loggers):
    calls = {}
    monkeypatch.setenv("HTTPMODULE_LOG_LEVEL", "debug")
    importlib.reload(log)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    log.setup_logging()
    assert calls["level"] == logging.DEBUG

    log.setup_logging("error")
    assert calls["level"] == logging.ERROR

    log.setup_logging("nonsense")
    assert calls["level"] == logging.WARNING
    monkeypatch.delenv("HTTPMODULE_LOG_LEVEL")
    importlib.reload(log)


def test_setup_logging_quiets_httpx_unless_debugging(monkeypatch, transport_loggers):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)

    log.setup_logging("info")
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING

    log.setup_logging("debug")
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_invalid_method_error_message():
    err = InvalidMethodError("trace")
    assert err.method == "trace"
    assert "'trace'" in str(err)


def test_categorize_exception():
    request = httpx.Request("GET", "http://api.test")
    response = httpx.Response(500, request=request)
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert (
        categorize_exception(httpx.HTTPStatusError("boom", request=request, response=response))
        is ErrorCategory.HTTP_ERROR
    )
    assert categorize_exception(ssl.SSLError("bad cert")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no host")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("?")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_inspects_cause():
    try:
        try:
            raise socket.gaierror("no host")
        except socket.gaierror as inner:
            raise httpx.ConnectError("connect failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR
