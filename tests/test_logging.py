"""Tests for springviz.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from springviz.extractors import MissingPackageDeclarationError
from springviz.logging import configure_logging, get_logger, report_failures
from springviz.orchestrator import ExtractionFailure


@pytest.fixture
def log_file(tmp_path: Path):
    path = tmp_path / "springviz.log"
    yield path
    configure_logging()


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_get_logger_uses_package_hierarchy() -> None:
    assert get_logger().name == "springviz"
    assert get_logger("orchestrator").name == "springviz.orchestrator"


def test_configure_logging_replaces_handlers(log_file: Path) -> None:
    configure_logging()
    logger = configure_logging(log_file=log_file)

    assert len(logger.handlers) == 2
    assert logger.propagate is False


def test_log_file_keeps_debug_output_without_verbose(
    log_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    logger = configure_logging(log_file=log_file)

    get_logger("extractors.parameters").debug("Dropping parameter entry")
    _flush(logger)

    assert "Dropping parameter entry" in log_file.read_text(encoding="utf-8")
    assert "Dropping parameter entry" not in capsys.readouterr().err


def test_report_failures_lists_each_skipped_file(
    log_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    logger = configure_logging(log_file=log_file)
    failures = [
        ExtractionFailure("src/A.java", MissingPackageDeclarationError("No package declaration found")),
        ExtractionFailure("src/B.java", MissingPackageDeclarationError("No package declaration found")),
    ]

    report_failures(failures, extracted=3)
    _flush(logger)

    err = capsys.readouterr().err
    assert "[springviz] WARNING Skipped src/A.java: No package declaration found" in err
    assert "src/B.java" in err
    assert "Extracted 3 records, skipped 2 files" in err
    assert "springviz.orchestrator: Skipped src/A.java" in log_file.read_text(encoding="utf-8")


def test_report_failures_is_silent_without_failures(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()

    report_failures([], extracted=5)

    assert capsys.readouterr().err == ""
