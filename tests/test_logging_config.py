"""Tests for structured logging."""

import io
import json
import logging
from datetime import date
from decimal import Decimal

from ledgerkit.domain.entities import LineInput
from ledgerkit.logging_config import StructuredFormatter, configure_logging, get_logger, reset_logging

from conftest import TENANT


def test_formatter_renders_extra_fields():
    record = logging.LogRecord("ledgerkit.test", logging.INFO, __file__, 1, "journal_entry_posted", (), None)
    record.amount = Decimal("10.50")
    record.on = date(2024, 1, 2)

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["message"] == "journal_entry_posted"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "ledgerkit.test"
    assert payload["amount"] == "10.50"
    assert payload["on"] == "2024-01-02"
    assert "ts" in payload


def test_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        import sys

        record = logging.LogRecord("ledgerkit.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"
    assert "Traceback" in payload["traceback"]


def test_configure_logging_is_idempotent():
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)
    configure_logging(level="DEBUG", stream=io.StringIO())

    root = logging.getLogger("ledgerkit")
    assert len(root.handlers) == 1
    assert root.level == logging.INFO

    get_logger("test").info("hello", extra={"tenant_id": TENANT})
    line = json.loads(stream.getvalue().strip())
    assert line["message"] == "hello"
    assert line["tenant_id"] == TENANT

    reset_logging()
    assert root.handlers == []


def test_posting_emits_event(journal, chart):
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)

    journal.post_entry(
        TENANT,
        date(2024, 1, 1),
        [
            LineInput.debit_line(chart["Cash"].id, Decimal("5")),
            LineInput.credit_line(chart["Sales"].id, Decimal("5")),
        ],
        reference="S-1",
    )

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    posted = [e for e in events if e["message"] == "journal_entry_posted"]
    assert len(posted) == 1
    assert posted[0]["entry_number"] == "JE-000001"
    assert posted[0]["amount"] == "5"
    assert posted[0]["logger"] == "ledgerkit.domain.journal"
