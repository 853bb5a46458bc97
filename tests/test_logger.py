import logging
from typing import Iterator

import pytest
from rich.logging import RichHandler

from stint.logger import LOGGER_NAME, configure_logging
from stint.service.entry import stop_entry
from stint.template.entry import get_entry_template


@pytest.fixture
def stint_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_configure_logging_installs_one_rich_handler(stint_logger) -> None:
    configure_logging("INFO")
    configure_logging("DEBUG")

    rich_handlers = [h for h in stint_logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
    assert stint_logger.level == logging.DEBUG
    assert stint_logger.propagate is False


def test_notices_go_to_stderr_without_changing_results(
    stint_logger,
    clock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    configure_logging("WARNING")
    entry = get_entry_template()
    assert stop_entry(entry) is True
    end_time = entry["end_time"]

    assert stop_entry(entry) is False

    assert entry["end_time"] == end_time
    captured = capsys.readouterr()
    assert "already stopped" in captured.err
    assert captured.out == ""
