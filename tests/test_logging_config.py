import logging

import pytest

from runt.utils.logging_config import setup_logging

pytestmark = pytest.mark.usefixtures("restore_root_logging")


def test_console_only_by_default():
    logger = setup_logging(level="INFO")
    root = logging.getLogger()
    assert logger.name == "runt"
    assert len(root.handlers) == 1
    assert root.handlers[0].level == logging.WARNING


def test_file_handler_when_requested(tmp_path):
    log_file = tmp_path / "logs" / "runt.log"
    setup_logging(level="DEBUG", log_file=log_file, console_level="ERROR")
    logging.getLogger("runt.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello file" in log_file.read_text()
