"""
Pytest configuration and fixtures for the Discord notification client tests.

This file provides test isolation and shared fixtures.
"""
import os
import pytest

# Ensure environment is set up before any imports happen
os.environ.setdefault("DISCORD_BOT_TOKEN", "test-bot-token")


@pytest.fixture(autouse=True)
def reset_singleton_state():
    """
    Reset any singleton/global state between tests.

    This prevents test pollution from the config singleton and logging context.
    """
    yield  # Run test

    import config as cfg
    cfg._config = None

    from utils.logging import clear_context
    clear_context()
