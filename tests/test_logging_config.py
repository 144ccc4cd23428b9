from __future__ import annotations

import json
import logging

from dealdesk.core.logging import LogContext, build_log_event
from dealdesk.core.logging_config import JsonFormatter


def test_json_formatter_includes_event_fields():
    record = logging.LogRecord("dealdesk.test", logging.INFO, __file__, 1, "deal.stage.moved", None, None)
    record.event = "deal.stage.moved"
    record.deal_id = "7"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["message"] == "deal.stage.moved"
    assert payload["event"] == "deal.stage.moved"
    assert payload["deal_id"] == "7"


def test_build_log_event_merges_context_and_fields():
    event = build_log_event("deal.approval.toggled", LogContext(user_id="u3", role="SALES_OPS", deal_id="1"), gate="ps")
    assert event["event"] == "deal.approval.toggled"
    assert event["user_id"] == "u3"
    assert event["deal_id"] == "1"
    assert event["gate"] == "ps"
    assert "timestamp" in event


def test_json_formatter_keeps_arbitrary_extra_fields():
    logger = logging.getLogger("dealdesk.test.extra")
    captured: list[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = captured.append
    logger.addHandler(handler)
    try:
        logger.warning(
            "drafting.generate.failed",
            extra={"event": "drafting.generate.failed", "kind": "proposal", "error": "provider timed out"},
        )
    finally:
        logger.removeHandler(handler)

    payload = json.loads(JsonFormatter().format(captured[0]))
    assert payload["error"] == "provider timed out"
    assert payload["kind"] == "proposal"
    assert "args" not in payload
    assert "levelno" not in payload
