import logging as std_logging
from types import SimpleNamespace

import pytest

import utils.retry


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff waits (in seconds) instead of sleeping."""
    recorded = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(utils.retry, "asyncio", SimpleNamespace(sleep=fake_sleep))
    return recorded


@pytest.fixture
def service_log(caplog):
    """caplog wired to the service logger, which does not propagate to root."""
    logger = std_logging.getLogger("oghmai")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
