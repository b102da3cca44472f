"""Configuration parser for the trie and its logging."""

import logging
from pathlib import Path
from typing import Optional, cast

from ascii_trie.trie import AsciiTrie

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigValueError(Exception):
    """Raised when a configuration value is not one of the accepted ones."""


class ConfigNotFoundError(Exception):
    """Raised when any of the required configuration settings
    is not provided.
    """


class TrieConfig:
    """A class to save trie configuration settings."""

    def __init__(
        self,
        track_size: bool,
        log_level: int,
        log_file: Optional[Path] = None,
    ) -> None:
        """Initialize the trie configuration.

        Args:
            track_size (bool): Whether tries keep a running key counter.
            log_level (int): The `logging` level for the package logger.
            log_file (Optional[Path]): Where to write the rotating log file.
            None means records only go to stderr.

        """
        self.track_size = track_size
        self.log_level = log_level
        self.log_file = log_file

    def create_trie(self) -> AsciiTrie:
        """Create an empty trie honouring these settings."""
        return AsciiTrie(track_size=self.track_size)

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Trie configuration settings:
                Track size: {"YES" if self.track_size else "NO"}
                Log level: {logging.getLevelName(self.log_level)}
                Log file: {self.log_file if self.log_file else "stderr"}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def parse_log_level(key: str, val: str) -> int:
    """Parse a log level name into its `logging` constant.

    Args:
        key (str): The key to parse the level for.
        val (str): The level name, case-insensitive.

    Raises:
        ConfigValueError: If the name is not a standard level.

    Returns:
        int: The matching `logging` level.

    """
    level = LOG_LEVELS.get(val.strip().upper())
    if level is None:
        raise ConfigValueError(
            f"Invalid log level for key '{key}' in the configuration file. "
            f"Expected one of {', '.join(LOG_LEVELS)} (case-insensitive).",
        )
    return level


def load_config_file(config_file_path: Path) -> TrieConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing.
        ConfigBoolParsingError: If a boolean setting is invalid.
        ConfigValueError: If the log level is invalid.
        FileNotFoundError: If the config file does not exist.

    Returns:
        TrieConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    track_size = log_level = None
    log_file: Optional[Path] = None

    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            if key == "track_size":
                track_size = parse_bool("track_size", value)
            elif key == "log_level":
                log_level = parse_log_level("log_level", value)
            elif key == "log_file" and value:
                log_file = Path(value)

    required = {
        "track_size": track_size,
        "log_level": log_level,
    }

    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                f"Please ensure the config file includes a valid line for "
                f"'{key}'.",
            )

    return TrieConfig(
        cast("bool", track_size),
        cast("int", log_level),
        log_file,
    )
