from __future__ import annotations

import io
import json
import logging

from tasktrack.core.config import Settings
from tasktrack.core.context import (
    bind_principal_id,
    bind_request_id,
    reset_principal_id,
    reset_request_id,
)
from tasktrack.core.logging import configure_logging


def test_configure_logging_outputs_json_with_request_id() -> None:
    settings = Settings(environment="test")
    settings.log_level = "INFO"
    configure_logging(settings)

    root_logger = logging.getLogger()
    handler = next(
        (h for h in root_logger.handlers if isinstance(h, logging.StreamHandler)),
        None,
    )
    assert handler is not None, "Expected JSON stream handler to be configured"

    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)

    token = bind_request_id("req-json-1")
    try:
        logger = logging.getLogger("tasktrack.tests.logging")
        logger.info("structured log event", extra={"component": "unit-test", "task_id": 7})
    finally:
        handler.flush()
        reset_request_id(token)
        handler.setStream(previous_stream)

    log_lines = buffer.getvalue().strip().splitlines()
    assert log_lines, "Expected structured log line to be captured"
    payload = json.loads(log_lines[-1])

    assert payload["message"] == "structured log event"
    assert payload["request_id"] == "req-json-1"
    assert payload["environment"] == settings.environment
    assert payload["level"] == "INFO"
    assert payload["component"] == "unit-test"
    assert payload["task_id"] == 7
    assert payload["service"] == settings.project_name


def test_log_records_outside_a_request_use_placeholder_id() -> None:
    settings = Settings(environment="test")
    settings.log_level = "INFO"
    configure_logging(settings)

    handler = next(h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler))
    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)
    try:
        logging.getLogger("tasktrack.tests.logging").warning("background event")
    finally:
        handler.flush()
        handler.setStream(previous_stream)

    payload = json.loads(buffer.getvalue().strip().splitlines()[-1])
    assert payload["request_id"] == "-"
    assert payload["level"] == "WARNING"


def test_log_records_carry_bound_principal() -> None:
    settings = Settings(environment="test")
    configure_logging(settings)

    handler = next(h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler))
    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)
    token = bind_principal_id(42)
    try:
        logging.getLogger("tasktrack.tests.logging").info("acting user event")
    finally:
        reset_principal_id(token)
        handler.flush()
        handler.setStream(previous_stream)

    payload = json.loads(buffer.getvalue().strip().splitlines()[-1])
    assert payload["principal_id"] == 42

    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)
    try:
        logging.getLogger("tasktrack.tests.logging").info("anonymous event")
    finally:
        handler.flush()
        handler.setStream(previous_stream)

    assert "principal_id" not in json.loads(buffer.getvalue().strip().splitlines()[-1])
