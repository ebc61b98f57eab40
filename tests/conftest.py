"""
Test Configuration and Fixtures

This module provides pytest fixtures shared by the unit tests.

Key fixtures:
- clean_env: removes MONITOR_* variables so tests never see a real API key
- config: MonitorConfig with a test API key
- client: MonitorClient built from `config` with a fixed source detector
- mock_request: patched requests.request used by the client
- make_response: factory for fake HTTP responses
"""

import os

import pytest
from unittest.mock import Mock, patch

from cronradar.client import MonitorClient
from cronradar.config import MonitorConfig
from cronradar.source import SourceDetector

MONITOR_ENV_VARS = ('MONITOR_API_KEY', 'MONITOR_BASE_URL', 'MONITOR_METHOD', 'MONITOR_SOURCE')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start and end every test without MONITOR_* variables."""
    for name in MONITOR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    yield monkeypatch

    # load_env_file() writes to os.environ directly
    for name in MONITOR_ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def config():
    """Configuration with a test API key and the default base URL."""
    return MonitorConfig(api_key='test-key')


@pytest.fixture
def client(config):
    """
    Client with a detector that always answers "manual".

    Returns:
        MonitorClient using the `config` fixture
    """
    return MonitorClient(config, detector=SourceDetector(markers=(), frame_markers=()))


@pytest.fixture
def make_response():
    """Build a fake requests.Response with the given status code."""
    def factory(status_code=200, text=''):
        response = Mock()
        response.status_code = status_code
        response.text = text
        return response
    return factory


@pytest.fixture
def mock_request():
    """Patch the single HTTP entry point of the client."""
    with patch('cronradar.client.requests.request') as mocked:
        yield mocked
