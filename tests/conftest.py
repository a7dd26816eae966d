"""
tests/conftest.py
Shared fixtures for convo_core tests.
Provides message builders and a default manager.
"""

import pytest

from convo_core.config import ConversationConfig
from convo_core.context import ConversationManager
from convo_core.models import ChatMessage, Role


def msg(role, content):
    """Shorthand message builder."""
    return ChatMessage(role=Role(role), content=content)


def alternating(count, template="Message number {i} about things"):
    """count user/assistant messages with unique contents, user first."""
    roles = ("user", "assistant")
    return [msg(roles[i % 2], template.format(i=i)) for i in range(count)]


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() between tests so caplog keeps working."""
    import logging
    from convo_core import logging_config

    yield
    logger = logging.getLogger("convo_core")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging_config._logging_configured = False


@pytest.fixture
def config():
    return ConversationConfig()


@pytest.fixture
def manager(config):
    return ConversationManager(config=config)


class RecordingTask:
    """Stand-in tracing task that records events."""

    def __init__(self):
        self.events = []

    def event(self, name, payload=None):
        self.events.append((name, payload))


@pytest.fixture
def recording_task():
    from convo_core.observability import set_current_task, clear_current_task

    task = RecordingTask()
    set_current_task(task)
    yield task
    clear_current_task()
