"""
Fixtures for the synchronization engine validators.
"""
from hewgrammar.sync.validators.shared_fixtures import *  # noqa: F401,F403


def pytest_configure(config):
    config.addinivalue_line("markers", "sync: synchronization engine self-checks")
