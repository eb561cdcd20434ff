"""
Test configuration and fixtures for the Fugue position test suite.

This file contains shared fixtures and configuration for all tests.
"""

import os
import sys
import pytest

# Add project root to Python path so we can import project modules
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from fugue import Fugue
from tests.fixtures.sample_data import FugueFactory


@pytest.fixture(autouse=True)
def clean_fugue_env(monkeypatch):
    """Keep developer environment settings out of the tests."""
    monkeypatch.delenv("FUGUE_MAX_CACHED_PREFIXES", raising=False)
    monkeypatch.delenv("FUGUE_LOG_LEVEL", raising=False)


@pytest.fixture
def fugue():
    """A replica with a fixed client ID."""
    return Fugue("client1")


@pytest.fixture
def replicas():
    """Five replicas with distinct, realistic client IDs."""
    return FugueFactory.create_batch(5)


@pytest.fixture
def anchors():
    """Two adjacent positions created by a separate 'base' replica."""
    base = Fugue("base")
    first = base.between(None, None)
    last = base.after(first)
    return first, last
