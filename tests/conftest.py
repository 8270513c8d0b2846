import logging
from typing import Iterator

import pytest

from trackcodes.app_context import reset_app_context
from trackcodes.config import TrackingConfig


@pytest.fixture(autouse=True)
def package_logs_reach_caplog() -> Iterator[None]:
    # the package logger does not propagate outside tests
    pkg_logger = logging.getLogger("trackcodes")
    saved = pkg_logger.propagate
    pkg_logger.propagate = True
    yield
    pkg_logger.propagate = saved


@pytest.fixture(autouse=True)
def fresh_app_context() -> Iterator[None]:
    reset_app_context(TrackingConfig())
    yield
    reset_app_context(TrackingConfig())
