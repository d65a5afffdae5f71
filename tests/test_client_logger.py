"""Tests for the client logger."""

import io

from loggers.client_logger import ClientLogger
from loggers.levels import LogLevel
from redaction import mask_config


def setup_function():
    mask_config.reset({})


def teardown_function():
    mask_config.reset({})


def _client(level=LogLevel.INFO):
    stream = io.StringIO()
    return ClientLogger(level, stream=stream), stream


def test_client_info_format():
    logger, stream = _client()
    logger.info("Info message")
    assert stream.getvalue() == "[INFO] Info message\n"


def test_client_warn_and_error():
    logger, stream = _client()
    logger.warn("Warning message")
    logger.error("Error message")
    assert stream.getvalue().splitlines() == ["[WARN] Warning message", "[ERROR] Error message"]


def test_client_default_level_hides_debug():
    logger, stream = _client()
    logger.debug("Debug message")
    assert stream.getvalue() == ""


def test_client_respects_level():
    logger, stream = _client(LogLevel.ERROR)
    logger.info("nope")
    logger.warn("nope")
    logger.error("yes")
    assert stream.getvalue() == "[ERROR] yes\n"


def test_client_masks_data():
    logger, stream = _client()
    logger.info("signup", {"email": "jane@example.com", "plan": "pro"})
    assert stream.getvalue() == '[INFO] signup {"email": "jan***com", "plan": "pro"}\n'


def test_client_message_with_percent_is_not_formatted():
    logger, stream = _client()
    logger.info("100% done")
    assert stream.getvalue() == "[INFO] 100% done\n"


def test_client_keeps_falsy_scalar_data():
    logger, stream = _client()
    logger.info("count", 0)
    logger.info("enabled", False)
    logger.info("name", "")
    assert stream.getvalue().splitlines() == ["[INFO] count 0", "[INFO] enabled false", '[INFO] name ""']


def test_client_omits_empty_mapping_data():
    logger, stream = _client()
    logger.info("nothing", {})
    assert stream.getvalue() == "[INFO] nothing\n"
