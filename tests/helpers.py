"""
Shared fakes for the chat server tests.
"""

import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from server.utils.logger import logger


class FakeSession:
    """Records every line sent to it."""

    def __init__(self, name: str):
        self.name = name
        self.lines = []

    def send(self, line: str) -> bool:
        self.lines.append(line)
        return True


class FakeHandler:
    """Stands in for a SessionHandler when testing commands."""

    def __init__(self, name: str):
        self.session = FakeSession(name)
        self.close = AsyncMock()

    @property
    def name(self):
        return self.session.name

    @property
    def lines(self):
        return self.session.lines

    def send(self, line: str) -> bool:
        return self.session.send(line)


def make_writer(peer=('127.0.0.1', 50000)):
    """Mock StreamWriter good enough for a Session that is never started."""
    writer = MagicMock()
    writer.get_extra_info.return_value = peer
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    return writer


def use_temp_logs(test_case):
    """Point the chat log at a temporary directory for the test's duration."""
    tmp = tempfile.TemporaryDirectory()
    old_dir = logger.logs_dir
    logger.configure(logs_dir=tmp.name)
    test_case.addCleanup(tmp.cleanup)
    test_case.addCleanup(logger.configure, logs_dir=str(old_dir))
    return Path(tmp.name)
