"""Tests for the structured logger."""

import json
import logging

import pytest

from function_host_core.core.logging import Logger


def _records(caplog, name):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == name]


def test_step_logs_elapsed_time(caplog):
    logger = Logger("function_host.test.ok")
    with caplog.at_level(logging.INFO, logger="function_host.test.ok"):
        with logger.step("FunctionRegistry.get(foo)", function="foo"):
            pass
    (record,) = _records(caplog, "function_host.test.ok")
    assert record["level"] == "info"
    assert record["message"] == "FunctionRegistry.get(foo)"
    assert record["function"] == "foo"
    assert record["elapsed_ms"] >= 0


def test_step_logs_error_type_and_reraises(caplog):
    logger = Logger("function_host.test.fail")
    with caplog.at_level(logging.INFO, logger="function_host.test.fail"):
        with pytest.raises(PermissionError):
            with logger.step("FunctionRegistry.delete(foo)"):
                raise PermissionError("denied")
    (record,) = _records(caplog, "function_host.test.fail")
    assert record["level"] == "error"
    assert record["error"] == "PermissionError"
