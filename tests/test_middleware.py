"""
MVC Blog - Middleware & Logging Tests
=====================================

What we test:
    ✅ RequestIDLogFilter stamps records with the current request ID
    ✅ setup_logging() installs the filter and prints the ID on every line
    ✅ Access lines are logged at a level matching the status class
"""

import io
import logging

import pytest

from mvcblog.main import LOG_FORMAT, setup_logging
from mvcblog.middleware.logging import level_for_status
from mvcblog.middleware.request_id import RequestIDLogFilter, request_id_var


def _record(msg="hello"):
    return logging.LogRecord("mvcblog.test", logging.INFO, __file__, 1, msg, None, None)


@pytest.fixture
def restore_root_logging():
    """setup_logging() replaces the root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRequestIDLogFilter:

    def test_stamps_current_request_id(self):
        token = request_id_var.set("abc123")
        try:
            record = _record()
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc123"

    def test_outside_a_request_uses_dash(self):
        record = _record()

        RequestIDLogFilter().filter(record)

        assert record.request_id == "-"

    def test_format_includes_request_id(self):
        token = request_id_var.set("feedbeef")
        try:
            record = _record("Post 3 created")
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        line = logging.Formatter(LOG_FORMAT).format(record)

        assert "[feedbeef] mvcblog.test: Post 3 created" in line


class TestSetupLogging:

    def test_root_handler_carries_filter(self, restore_root_logging):
        setup_logging()

        handlers = restore_root_logging.handlers
        assert len(handlers) == 1
        assert any(isinstance(f, RequestIDLogFilter) for f in handlers[0].filters)

    def test_library_lines_get_request_id(self, restore_root_logging):
        setup_logging()
        stream = io.StringIO()
        restore_root_logging.handlers[0].setStream(stream)

        token = request_id_var.set("r-42")
        try:
            logging.getLogger("mvcblog.services.post_service").warning("Post 1 deleted")
        finally:
            request_id_var.reset(token)

        assert "[r-42] mvcblog.services.post_service: Post 1 deleted" in stream.getvalue()


class TestAccessLog:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (303, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_access_line_tagged_with_response_request_id(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="mvcblog.access")
        caplog.handler.addFilter(RequestIDLogFilter())

        response = await test_client.get("/posts/999")

        access = [r for r in caplog.records if r.name == "mvcblog.access"]
        assert len(access) == 1
        assert access[0].levelno == logging.WARNING
        assert "GET /posts/999 404" in access[0].getMessage()
        assert access[0].request_id == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="mvcblog.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "mvcblog.access"]
