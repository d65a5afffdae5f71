"""Tests for the server logger: level gating, context prefix, JSON output, masking."""

import io
import json

import pytest

from loggers.levels import LogLevel
from loggers.server_logger import ServerLogger, create_server_logger, json_output_from_env
from redaction import mask_config


def setup_function():
    mask_config.reset({})


def teardown_function():
    mask_config.reset({})


def _server(level=LogLevel.DEBUG, **kwargs):
    stream = io.StringIO()
    kwargs.setdefault("json_output", False)
    kwargs.setdefault("hostname", "test-host")
    logger = ServerLogger(level, False, kwargs.pop("context", None), stream=stream, **kwargs)
    return logger, stream


@pytest.mark.parametrize(
    "method,label",
    [("debug", "DEBUG"), ("info", "INFO"), ("warn", "WARN"), ("error", "ERROR")],
)
def test_logs_each_level(method, label):
    logger, stream = _server()
    getattr(logger, method)(f"{label} message")
    line = stream.getvalue()
    assert "[SERVER]" in line
    assert f"[{label}]" in line
    assert f"{label} message" in line


def test_respects_log_level():
    logger, stream = _server(LogLevel.WARN)
    logger.info("This should not appear")
    assert stream.getvalue() == ""

    logger.warn("This should appear")
    assert "This should appear" in stream.getvalue()


def test_set_level_changes_gate():
    logger, stream = _server(LogLevel.ERROR)
    logger.warn("hidden")
    logger.set_level("warn")
    logger.warn("shown")
    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_data_is_masked_in_human_output():
    logger, stream = _server()
    logger.info("login", {"user": "Rafael", "password": "secret123"})
    line = stream.getvalue()
    assert '"password": "sec***123"' in line
    assert "secret123" not in line
    assert '"user": "Rafael"' in line


def test_no_colors_when_disabled():
    logger, stream = _server()
    logger.info("plain")
    assert "\x1b[" not in stream.getvalue()


def test_colors_when_enabled():
    stream = io.StringIO()
    logger = ServerLogger(LogLevel.DEBUG, True, json_output=False, hostname="h", stream=stream)
    logger.error("colored")
    assert "\x1b[31m[ERROR]" in stream.getvalue()


def test_context_prefix_and_stripped_data():
    logger, stream = _server(context={"service": "users-api", "env": "production", "version": "1.2.0", "region": "sa"})
    logger.info("Teste", {"action": "login"})
    line = stream.getvalue()
    assert "[Context:users-api] [Host:test-host] [Env:production] [v1.2.0] Teste" in line
    data = json.loads(line[line.index("{"):])
    assert data == {"region": "sa", "action": "login"}


def test_context_without_prefix_fields_kept_in_data():
    logger, stream = _server(context={"region": "sa"})
    logger.info("msg")
    line = stream.getvalue()
    assert "[Host:test-host]" in line
    assert '"region": "sa"' in line


def test_context_values_are_masked_too():
    logger, stream = _server(context={"service": "api", "api_key": "sk-1234567890"})
    logger.info("boot")
    assert "sk-***890" in stream.getvalue()


def test_error_with_exception_is_flattened():
    logger, stream = _server()
    try:
        raise KeyError("missing")
    except KeyError as e:
        logger.error("failed", e)
    line = stream.getvalue()
    payload = json.loads(line[line.index("{"):])
    assert payload["name"] == "KeyError"
    assert payload["error"] == "'missing'"
    assert "Traceback" in payload["stack"]


def test_json_output_payload():
    logger, stream = _server(json_output=True, context={"service": "orders-api", "env": "staging", "version": "2.1.0"})
    logger.info("Pedido criado", {"orderId": 123, "email": "john@example.com"})
    payload = json.loads(stream.getvalue())
    assert payload["level"] == "INFO"
    assert payload["message"] == "Pedido criado"
    assert payload["source"] == "server"
    assert payload["hostname"] == "test-host"
    assert payload["service"] == "orders-api"
    assert payload["env"] == "staging"
    assert payload["version"] == "2.1.0"
    assert payload["data"] == {"orderId": 123, "email": "joh***com"}
    assert payload["ts"].endswith("Z")


def test_json_output_without_data_has_no_data_key():
    logger, stream = _server(json_output=True)
    logger.warn("bare")
    payload = json.loads(stream.getvalue())
    assert "data" not in payload
    assert "service" not in payload


@pytest.mark.parametrize(
    "environ,expected",
    [
        ({}, False),
        ({"LOG_JSON": "1"}, True),
        ({"LOG_JSON": "true"}, True),
        ({"RNL_SERVER_LOG_JSON": "true"}, True),
        ({"LOG_JSON": "yes"}, False),
    ],
)
def test_json_output_from_env(environ, expected):
    assert json_output_from_env(environ) is expected


def test_create_server_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.delenv("RNL_LOG_LEVEL", raising=False)
    logger = create_server_logger(stream=io.StringIO(), json_output=False)
    assert logger.level == LogLevel.ERROR


def test_create_server_logger_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    logger = create_server_logger(level="debug", stream=io.StringIO(), json_output=False)
    assert logger.level == LogLevel.DEBUG
