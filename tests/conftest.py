"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.Config import Config  # noqa: E402

TEST_ENV = {
    'OKX_API_KEY': 'test-key',
    'OKX_SECRET_KEY': 'test-secret',
    'OKX_PASSPHRASE': 'test-passphrase',
    'TELEGRAM_BOT_TOKEN': '123:abc',
    'TELEGRAM_CHAT_ID': '-100200300',
    'REQUEST_DELAY_SECONDS': '0',
}


@pytest.fixture
def config():
    """Valid configuration that never reads the real environment."""
    return Config(environ=dict(TEST_ENV))


@pytest.fixture
def configFactory():
    def _make(**overrides):
        environ = dict(TEST_ENV)
        environ.update({key: str(value) for key, value in overrides.items()})
        return Config(environ=environ)
    return _make
