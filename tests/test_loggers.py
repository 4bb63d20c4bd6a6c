"""
Tests for the JSONL and text run loggers.

Focus on appended content.
"""

import json

from cfip_finder.logging import JSONLLogger, TextLogger
from cfip_finder.models import (
    BatchResult,
    Candidate,
    CollectionResult,
    ProbeErrorKind,
    ProbeOutcome,
    SourceOutcome,
)


def sample_run():
    collection = CollectionResult(
        candidates=(Candidate("1.1.1.1"), Candidate("2.2.2.2"), Candidate("3.3.3.3")),
        sources=(
            SourceOutcome("https://a.example", raw_count=4, valid_count=3),
            SourceOutcome("https://b.example", success=False, error_message="HTTP 502"),
        ),
        timestamp="2024-01-01T00:00:00+08:00",
    )
    fast = ProbeOutcome.succeeded("2.2.2.2", 11.25)
    slow = ProbeOutcome.succeeded("1.1.1.1", 48.0)
    dead = ProbeOutcome.failed("3.3.3.3", ProbeErrorKind.TIMEOUT, "Timeout after 5s")
    batch = BatchResult(top=(fast, slow), all=(slow, fast, dead),
                        tested_at="2024-01-01T00:00:09+08:00")
    return collection, batch


class TestJSONLLogger:
    """Test JSONLLogger output."""

    def test_appends_one_line_per_run(self, tmp_path):
        # Arrange
        log_file = tmp_path / "reports" / "run.jsonl"
        logger = JSONLLogger(str(log_file))
        collection, batch = sample_run()

        # Act
        logger.log_run(collection, batch)
        logger.log_run(collection, batch)

        # Assert
        lines = log_file.read_text().splitlines()
        assert len(lines) == 2
        entry = json.loads(lines[0])
        assert entry["candidate_count"] == 3
        assert entry["tested"] == 3
        assert entry["responded"] == 2
        assert entry["failures"] == {"timeout": 1}
        assert entry["fast_ips"] == [{"ip": "2.2.2.2", "delay": 11.25},
                                     {"ip": "1.1.1.1", "delay": 48.0}]
        assert entry["sources"][1]["error"] == "HTTP 502"


class TestTextLogger:
    """Test TextLogger output."""

    def test_writes_readable_report(self, tmp_path):
        log_file = tmp_path / "run.txt"
        collection, batch = sample_run()

        TextLogger(str(log_file)).log_run(collection, batch)

        text = log_file.read_text()
        assert "Collected 3 unique IPs" in text
        assert "FAIL  https://b.example  error=HTTP 502" in text
        assert "Tested 3 IPs, 2 responded" in text
        assert "2.2.2.2" in text and "11.25 ms" in text

    def test_empty_run_is_reported(self, tmp_path):
        log_file = tmp_path / "run.txt"
        collection = CollectionResult(candidates=(), sources=(), timestamp="t0")
        batch = BatchResult(top=(), all=(), tested_at="t1")

        TextLogger(str(log_file)).log_run(collection, batch)

        assert "(none)" in log_file.read_text()
