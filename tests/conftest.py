"""
Shared fixtures: every test starts with default configuration and an empty catalog.
"""

import pytest

from fehlerteufel.config import FehlerteufelConfig, set_default_config
from fehlerteufel.runtime.catalog import Catalog, set_default_catalog


@pytest.fixture(autouse=True)
def isolated_defaults():
    """Reset process-wide config and catalog around each test."""
    set_default_config(FehlerteufelConfig())
    set_default_catalog(Catalog())
    yield
    set_default_config(None)
    set_default_catalog(None)
