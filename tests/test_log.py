"""Rich logging setup"""

from __future__ import annotations

import io
import logging
import warnings

import pytest
from rich.console import Console

from envsnap._src.exceptions import RuntimeVersionWarning
from envsnap._src.log import setup_logging


class _Collect(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    logging.captureWarnings(False)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    def test_single_rich_handler_at_level(self, restore_root_logger) -> None:
        console = Console(file=io.StringIO())

        setup_logging("warning", console=console)
        setup_logging("debug", console=console)

        root = restore_root_logger
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_records_written_to_console(self, restore_root_logger) -> None:
        stream = io.StringIO()
        setup_logging("INFO", console=Console(file=stream, width=200))

        logging.getLogger("envsnap.test").info("Restoring environment took 1.0 secs")

        assert "Restoring environment took 1.0 secs" in stream.getvalue()

    def test_runtime_warning_becomes_log_record(self, restore_root_logger) -> None:
        stream = io.StringIO()
        collected = _Collect()

        with warnings.catch_warnings():
            warnings.simplefilter("always")
            setup_logging("INFO", console=Console(file=stream, width=200))
            logging.getLogger("py.warnings").addHandler(collected)
            try:
                warnings.warn(
                    "Wrong Python version: need version 3.8.10, found version 3.11.4",
                    RuntimeVersionWarning,
                )
            finally:
                logging.getLogger("py.warnings").removeHandler(collected)

        assert len(collected.records) == 1
        assert collected.records[0].levelno == logging.WARNING
        assert "need version 3.8.10" in collected.records[0].getMessage()
        assert "need version 3.8.10" in stream.getvalue()
