import logging
import logging.handlers

from ascii_trie.config import TrieConfig
from ascii_trie.logger import (
    PACKAGE_LOGGER_NAME,
    log_operation,
    setup_logging,
    setup_logging_from_config,
)
from ascii_trie.trie import AsciiTrie


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / "logs" / "trie.log"
    package_logger = setup_logging(logging.INFO, log_file)

    assert package_logger.name == PACKAGE_LOGGER_NAME
    assert len(package_logger.handlers) == 1
    assert isinstance(
        package_logger.handlers[0],
        logging.handlers.RotatingFileHandler,
    )

    log_operation("put", "cat", 1.234)
    package_logger.handlers[0].flush()

    content = log_file.read_text(encoding="utf-8")
    assert "level=INFO" in content
    assert "funcName=log_operation" in content
    assert "Operation: put, Key: 'cat', Execution Time: 1.23 ms" in content


def test_setup_logging_to_stderr(capsys):
    setup_logging(logging.WARNING)
    log_operation("get", "dog", 0.5)  # below WARNING
    logging.getLogger("ascii_trie.trie").warning("visible")

    captured = capsys.readouterr()
    assert "visible" in captured.err
    assert "Operation: get" not in captured.err


def test_setup_logging_replaces_handlers(tmp_path):
    setup_logging(logging.INFO, tmp_path / "first.log")
    package_logger = setup_logging(logging.DEBUG, tmp_path / "second.log")

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_trie_debug_records_reach_log_file(tmp_path):
    log_file = tmp_path / "trie.log"
    config = TrieConfig(
        track_size=True,
        log_level=logging.DEBUG,
        log_file=log_file,
    )
    package_logger = setup_logging_from_config(config)

    trie = config.create_trie()
    trie.put("abc", 1)
    trie.remove("abc")
    trie.clear()
    package_logger.handlers[0].flush()

    content = log_file.read_text(encoding="utf-8")
    assert "module=trie" in content
    assert "Pruned 3 node(s) after removing 'abc'" in content
    assert "Trie cleared" in content


def test_info_level_hides_trie_debug_records(tmp_path):
    log_file = tmp_path / "trie.log"
    package_logger = setup_logging(logging.INFO, log_file)

    trie = AsciiTrie()
    trie.put("a", 1)
    trie.clear()
    package_logger.handlers[0].flush()

    assert "Trie cleared" not in log_file.read_text(encoding="utf-8")
