# conftest.py - Global pytest configuration
"""
Global pytest configuration.

This file is automatically loaded by pytest before collecting tests.
We use it to ensure debug scripts are never collected and that cached
settings never leak between tests.
"""
import glob
import os

import pytest

from installer.config import get_settings

# Collect all debug_*.py files anywhere in the backend tree and ignore them
_backend_root = os.path.dirname(os.path.abspath(__file__))
collect_ignore = []

for pattern in ["**/debug_*.py"]:
    for path in glob.glob(os.path.join(_backend_root, pattern), recursive=True):
        # Make relative to backend root
        collect_ignore.append(os.path.relpath(path, _backend_root))


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached Settings so env changes made by a test are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
