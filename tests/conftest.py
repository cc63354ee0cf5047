"""Root test configuration: isolate tests from the caller's environment"""

import os

import pytest


_ENV_PREFIX = "GHOSTPUB_"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any GHOSTPUB_* variables so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIX):
            monkeypatch.delenv(name)
