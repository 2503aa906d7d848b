import pytest

from momentkit import reset_default_config


@pytest.fixture(autouse=True)
def _restore_default_config():
    """Keep tests independent of each other's default configuration."""
    yield
    reset_default_config()
