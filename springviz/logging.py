"""Diagnostics for springviz runs.

stdout carries the rendered graph (or the JSON dump), so every diagnostic
goes through the ``springviz`` logger hierarchy to stderr and, optionally,
a log file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .orchestrator import ExtractionFailure

_LOGGER_NAME = "springviz"
_STDERR_FORMAT = "[springviz] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``springviz`` or one of its children (``springviz.<name>``)."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route springviz diagnostics to stderr and, when given, ``log_file``.

    Verbose runs also show per-file extraction details and dropped parameter
    entries. Calling this again replaces the previous handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file always keeps the full trace.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


def report_failures(
    failures: Sequence["ExtractionFailure"],
    *,
    extracted: int,
    logger: logging.Logger | None = None,
) -> None:
    """Log one WARNING per skipped file, then a one-line summary."""
    if not failures:
        return
    logger = logger or get_logger("orchestrator")
    for failure in failures:
        logger.warning("Skipped %s: %s", failure.path, failure.message)
    noun = "file" if len(failures) == 1 else "files"
    logger.info(
        "Extracted %d records, skipped %d %s (rerun with --strict to stop at the first one)",
        extracted,
        len(failures),
        noun,
    )


__all__ = ["configure_logging", "get_logger", "report_failures"]
