import logging

import pytest

from ascii_trie.logger import PACKAGE_LOGGER_NAME
from ascii_trie.trie import AsciiTrie


@pytest.fixture(params=[True, False], ids=["tracked", "traversal"])
def trie(request) -> AsciiTrie:
    """An empty trie, once per size strategy."""
    return AsciiTrie(track_size=request.param)


@pytest.fixture
def animals(trie) -> AsciiTrie:
    """A trie holding cat, car and dog."""
    trie.put("cat", 1)
    trie.put("car", 2)
    trie.put("dog", 3)
    return trie


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging between tests."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
