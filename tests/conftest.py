"""
Shared fixtures for parameter cache tests.
"""

import pytest

from parameter_cache import defaults as defaults_module
from parameter_cache.defaults import DEFAULT_DECRYPT, DEFAULT_EXPIRY


@pytest.fixture(autouse=True)
def reset_process_defaults():
    """Restore the process-wide defaults after each test."""
    yield
    defaults_module.get_defaults().set_expiry(DEFAULT_EXPIRY)
    defaults_module.get_defaults().set_decrypt(DEFAULT_DECRYPT)
