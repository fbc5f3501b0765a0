import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    # cli.main reconfigures the root logger for each invocation
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
