import pytest

from doclayer.core.logging.builder import setup_logging, stop_queue_logging
from doclayer.core.logging.filters import set_request_id
from doclayer.tests.conftest import make_test_settings


@pytest.fixture(autouse=True)
def restore_logging():
    """
    Tests in this package install their own logging config; put the session config back
    afterwards so later tests do not write into a deleted tmp_path.
    """
    yield
    stop_queue_logging()
    set_request_id(None)
    setup_logging(make_test_settings())
