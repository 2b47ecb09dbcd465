import pytest

from src.log import configure_logging


@pytest.fixture(autouse=True)
def stderr_logging():
    # bind the log handler to this test's stderr, not a previous test's captured stream
    configure_logging("stderr")
    yield
    configure_logging("stderr")
