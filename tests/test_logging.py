"""Tests for request logging and the rich handler setup."""

import logging

import pytest
from rich.logging import RichHandler

from pdum.compute import Compute, ComputeConfig, configure_logging

from .stubs import PROJECT_URL, StubSession, make_response


@pytest.fixture
def package_logger():
    """The ``pdum.compute`` logger, restored after the test."""
    logger = logging.getLogger("pdum.compute")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def _compute(*replies):
    return Compute("proj-1", config=ComputeConfig(retry_factor=0, max_retries=2), session=StubSession(*replies))


def test_each_request_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="pdum.compute")

    _compute(make_response(200, {})).request("GET")

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert f"GET {PROJECT_URL}" in messages
    assert f"GET {PROJECT_URL} -> 200" in messages


def test_each_retry_is_logged_at_warning(caplog):
    caplog.set_level(logging.DEBUG, logger="pdum.compute")
    compute = _compute(
        make_response(503, {"error": {"code": 503, "message": "unavailable"}}),
        make_response(500, {"error": {"code": 500, "message": "boom"}}),
        make_response(200, {}),
    )

    compute.request("GET")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert warnings[0].name == "pdum.compute.compute"
    assert "Retrying GET" in warnings[0].getMessage()
    assert "503: unavailable" in warnings[0].getMessage()
    assert "500: boom" in warnings[1].getMessage()


def test_permanent_errors_log_no_retry(caplog):
    caplog.set_level(logging.DEBUG, logger="pdum.compute")

    with pytest.raises(Exception):
        _compute(make_response(404, {"error": {"code": 404, "message": "gone"}})).request("GET")

    assert not [r for r in caplog.records if r.levelno == logging.WARNING]


def test_configure_logging_attaches_one_rich_handler(package_logger):
    configure_logging(verbose=False)
    assert package_logger.level == logging.WARNING

    configure_logging(verbose=True)
    assert package_logger.level == logging.DEBUG

    rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
