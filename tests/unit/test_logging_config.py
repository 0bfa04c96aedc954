"""Unit tests for structured log formatting."""

import logging

from snapsync.logging_config import StructuredFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="snapsync.engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Timescale updated",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_key_value_pairs():
    line = StructuredFormatter().format(make_record())
    assert "level=INFO" in line
    assert "logger=snapsync.engine" in line
    assert "message=Timescale updated" in line


def test_includes_timeline_context():
    line = StructuredFormatter().format(make_record(drift=0.02, timescale=1.02))
    assert "drift=0.02" in line
    assert "timescale=1.02" in line
    assert "remote_time=" not in line
