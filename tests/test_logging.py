import logging

import pytest

from mentorhub.core.logging import LOG_FORMAT, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_one_handler(restore_root_logger):
    setup_logging("debug")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT
    assert logging.getLogger("uvicorn").propagate
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
