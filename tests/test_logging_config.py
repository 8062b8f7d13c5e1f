"""
Tests for the JSON log formatter.
"""

import json
import logging

from account_ledger.logging_config import JSONFormatter, setup_logging


def make_record(message, *args, **extra):
    record = logging.LogRecord(
        "account_ledger.test", logging.INFO, __file__, 1, message, args, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_message_as_json():
    line = JSONFormatter().format(make_record("applied %s", 100))
    entry = json.loads(line)

    assert entry["message"] == "applied 100"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "account_ledger.test"
    assert "timestamp" in entry


def test_includes_extra_fields():
    entry = json.loads(JSONFormatter().format(make_record("x", account_id=2)))
    assert entry["account_id"] == 2


def test_setup_logging_does_not_duplicate_handlers():
    setup_logging("DEBUG")
    logger = setup_logging("WARNING")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
