import io
import logging

import pytest
from rich.logging import RichHandler

from wikigraph import Wikigraph
from wikigraph.clients import InMemoryWikipediaClient
from wikigraph.logging_config import SEARCH_LOGGER, resolve_level, setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_loggers():
    names = [None, SEARCH_LOGGER, "httpx", "httpcore", "aiosqlite"]
    saved = {name: (logging.getLogger(name).handlers[:], logging.getLogger(name).level) for name in names}
    yield
    for name, (handlers, level) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers[:] = handlers
        logger.setLevel(level)


def test_rich_handler_when_requested():
    setup_logging(level="debug", use_rich=True)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], RichHandler)


def test_plain_handler_when_stderr_is_not_a_terminal(monkeypatch):
    monkeypatch.setattr("sys.stderr", io.StringIO())
    setup_logging(level="WARNING")

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert type(root_logger.handlers[0]) is logging.StreamHandler
    assert root_logger.level == logging.WARNING


def test_search_level_defaults_to_global_level():
    setup_logging(level="WARNING", use_rich=False)
    assert logging.getLogger(SEARCH_LOGGER).level == logging.WARNING


def test_search_level_tuned_on_its_own():
    setup_logging(level="WARNING", use_rich=False, search_level="debug")

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger(SEARCH_LOGGER).isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("wikigraph.clients.live").isEnabledFor(logging.INFO)


@pytest.mark.asyncio
async def test_search_progress_reaches_the_handler(chain_client: InMemoryWikipediaClient, caplog):
    setup_logging(level="WARNING", use_rich=False, search_level="DEBUG")
    logging.getLogger().addHandler(caplog.handler)

    await Wikigraph(chain_client).breadth_first_search(1, 4, max_depth=3)

    search_messages = [record.getMessage() for record in caplog.records if record.name == SEARCH_LOGGER]
    assert "Searching depth 3: 1 articles queued, 4 seen" in search_messages
    assert any("Found 4 at distance 3" in message for message in search_messages)


def test_noisy_libraries_are_quieted():
    setup_logging(level="DEBUG", use_rich=False)

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("aiosqlite").level == logging.WARNING


def test_noisy_libraries_follow_a_stricter_level():
    setup_logging(level="ERROR", use_rich=False)
    assert logging.getLogger("httpcore").level == logging.ERROR


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(None) == logging.INFO
    assert resolve_level("chatty") == logging.INFO
    assert resolve_level("", default=logging.ERROR) == logging.ERROR
