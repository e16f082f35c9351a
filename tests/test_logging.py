"""Tests for request-scoped logging context and timed operations."""
import pytest
import structlog

from ticker.logging import (
    TimedOperation,
    clear_request_context,
    generate_request_id,
    set_request_context,
)


class TestRequestContext:
    """The request id is bound for the duration of a request."""

    def teardown_method(self):
        clear_request_context()

    def test_request_id_is_bound(self):
        set_request_context("req-1")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}

    def test_clear_removes_request_id(self):
        set_request_context("req-1")
        clear_request_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_generated_ids_are_unique(self):
        assert generate_request_id() != generate_request_id()


class TestTimedOperation:
    """Timed operations measure duration and re-raise failures."""

    def test_records_duration(self):
        with TimedOperation("unit_of_work", path="tokens.json") as op:
            pass
        assert op.duration_ms >= 0

    def test_exception_propagates(self):
        with pytest.raises(ValueError):
            with TimedOperation("unit_of_work"):
                raise ValueError("boom")
