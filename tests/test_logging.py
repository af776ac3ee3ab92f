from __future__ import annotations

import io
import logging
from pathlib import Path

from tocgen.logging import configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger("cli").name == "tocgen.cli"
    assert get_logger().name == "tocgen"


def test_quiet_by_default_and_debug_when_verbose() -> None:
    stream = io.StringIO()
    logger = configure_logging(stream=stream)
    get_logger("test").debug("hidden")
    get_logger("test").warning("shown")
    assert logger.level == logging.WARNING
    assert stream.getvalue() == "[tocgen] WARNING shown\n"

    stream = io.StringIO()
    configure_logging(verbose=True, stream=stream)
    get_logger("test").debug("details")
    assert "[tocgen] DEBUG details" in stream.getvalue()


def test_reconfiguring_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tocgen.log"
    logger = configure_logging(stream=io.StringIO(), log_file=log_file)
    get_logger("test").debug("to file")
    for handler in logger.handlers:
        handler.flush()

    assert "to file" in log_file.read_text(encoding="utf-8")

    logger = configure_logging(stream=io.StringIO())
    assert len(logger.handlers) == 1
