"""
Server configuration module.

This module handles server-side configuration settings. The configuration file
is a plain ``key=value`` text file::

    port=1701
    serverName=MyServer
    bannedPhrases=spam,bad word
"""

from pathlib import Path
from typing import Iterable, Optional

from dotenv import dotenv_values

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, DEFAULT_SERVER_NAME, LOG_DIR,
    MAX_LINE_LENGTH, OUTBOUND_QUEUE_SIZE
)
from server.utils.logger import logger

KNOWN_KEYS = ('port', 'serverName', 'bannedPhrases', 'host',
              'stopWhenEmpty', 'outboundQueueSize', 'maxLineLength')

TRUE_VALUES = ('1', 'true', 'yes', 'on')


class ConfigError(Exception):
    """Raised when the server configuration cannot be loaded."""


def normalize_phrases(phrases: Iterable[str]) -> frozenset:
    """Lower-case and trim phrases, dropping empty ones."""
    return frozenset(p.strip().lower() for p in phrases if p and p.strip())


class ServerConfig:
    """Server configuration class. Values are fixed at construction."""

    def __init__(self, port: int = DEFAULT_PORT, server_name: str = DEFAULT_SERVER_NAME,
                 banned_phrases: Iterable[str] = (), host: str = DEFAULT_SERVER_HOST,
                 logs_dir: str = LOG_DIR, stop_when_empty: bool = False,
                 outbound_queue_size: int = OUTBOUND_QUEUE_SIZE,
                 max_line_length: int = MAX_LINE_LENGTH):
        self._port = port
        self._server_name = server_name
        self._banned_phrases = normalize_phrases(banned_phrases)
        self._host = host
        self._logs_dir = logs_dir
        self._stop_when_empty = stop_when_empty
        self._outbound_queue_size = outbound_queue_size
        self._max_line_length = max_line_length

    @property
    def port(self) -> int:
        return self._port

    @property
    def server_name(self) -> str:
        return self._server_name

    @property
    def banned_phrases(self) -> frozenset:
        return self._banned_phrases

    @property
    def host(self) -> str:
        return self._host

    @property
    def logs_dir(self) -> str:
        return self._logs_dir

    @property
    def stop_when_empty(self) -> bool:
        return self._stop_when_empty

    @property
    def outbound_queue_size(self) -> int:
        return self._outbound_queue_size

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    def replace(self, **changes) -> 'ServerConfig':
        """Return a copy with some values overridden (used for CLI flags)."""
        values = {
            'port': self._port,
            'server_name': self._server_name,
            'banned_phrases': self._banned_phrases,
            'host': self._host,
            'logs_dir': self._logs_dir,
            'stop_when_empty': self._stop_when_empty,
            'outbound_queue_size': self._outbound_queue_size,
            'max_line_length': self._max_line_length,
        }
        values.update({k: v for k, v in changes.items() if v is not None})
        return ServerConfig(**values)

    def __repr__(self):
        return (f"ServerConfig(port={self.port}, server_name={self.server_name!r}, "
                f"banned_phrases={sorted(self.banned_phrases)})")


def _parse_int(key: str, value: Optional[str], low: int = 1, high: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid {key} in configuration: {value!r}")
    if number < low or (high is not None and number > high):
        raise ConfigError(f"{key} out of range in configuration: {number}")
    return number


def load_config(path: str) -> ServerConfig:
    """Load a ServerConfig from a key=value file."""
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")

    values = dotenv_values(config_path, interpolate=False)

    for key in values:
        if key not in KNOWN_KEYS:
            logger.warning(f"Unknown configuration key: {key}")

    if 'port' not in values:
        raise ConfigError("Missing port in configuration")
    port = _parse_int('port', values['port'], 0, 65535)

    phrases = (values.get('bannedPhrases') or '').split(',')

    options = {}
    if values.get('host'):
        options['host'] = values['host']
    if values.get('stopWhenEmpty') is not None:
        options['stop_when_empty'] = values['stopWhenEmpty'].strip().lower() in TRUE_VALUES
    if values.get('outboundQueueSize') is not None:
        options['outbound_queue_size'] = _parse_int('outboundQueueSize', values['outboundQueueSize'])
    if values.get('maxLineLength') is not None:
        options['max_line_length'] = _parse_int('maxLineLength', values['maxLineLength'])

    config = ServerConfig(
        port=port,
        server_name=values.get('serverName') or DEFAULT_SERVER_NAME,
        banned_phrases=phrases,
        **options
    )
    logger.info(f"Server loaded with configurations: Port: {config.port}, "
                f"Server name: {config.server_name}, "
                f"Banned phrases: {sorted(config.banned_phrases)}")
    return config
