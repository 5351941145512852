import json
import logging
from pathlib import Path

import pytest

from denopak.observability import StructuredLogger


def test_records_filter_by_registry_and_persist_as_json_lines(tmp_path: Path) -> None:
    logger = StructuredLogger()
    logger.log(operation="fetch", registry="jsr", module="@std/path", version="1.0.8", message="GET a")
    logger.log(
        operation="expand",
        registry="npm",
        module="chalk",
        version="5.3.0",
        message="Resolved 2 sources.",
        extra={"architecture": None},
    )

    assert [record["module"] for record in logger.records_for_registry("npm")] == ["chalk"]

    path = logger.to_json_lines(tmp_path / "log" / "fetch.jsonl")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["operation"] for line in lines] == ["fetch", "expand"]
    assert "extra" not in json.loads(lines[0])


def test_records_are_forwarded_to_stdlib_sink(caplog: pytest.LogCaptureFixture) -> None:
    logger = StructuredLogger(sink=logging.getLogger("denopak.test"))

    with caplog.at_level(logging.DEBUG, logger="denopak.test"):
        logger.log(
            operation="fetch",
            registry="jsr",
            module="@std/path",
            version="1.0.8",
            message="GET https://jsr.io/@std/path/meta.json",
            level="debug",
        )

    assert caplog.records[0].levelno == logging.DEBUG
    assert "[jsr] @std/path@1.0.8: GET" in caplog.records[0].getMessage()
