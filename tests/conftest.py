import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_rulehash_logger() -> Iterator[None]:
    """Drop handlers the CLI installs so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("rulehash")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
