"""
Client registry module.

The registry is the server-wide table of connected sessions keyed by display
name. Every read and mutation goes through one asyncio lock, so a broadcast
never observes a half-applied registration.
"""

import asyncio
from typing import Callable, Dict, Iterable, List

from server.utils.logger import logger


class ClientRegistry:
    """Concurrency-safe mapping from unique display name to session."""

    def __init__(self):
        self.sessions: Dict[str, object] = {}  # name -> Session (insertion ordered)
        self.lock = asyncio.Lock()  # Protect shared state

    async def try_register(self, name: str, session) -> bool:
        """
        Insert ``session`` under ``name`` if the name is free.

        Returns False for blank names and names already in use. The check and
        the insertion happen under the same lock.
        """
        if name is None or not name.strip():
            return False

        async with self.lock:
            if name in self.sessions:
                return False
            self.sessions[name] = session

        logger.debug(f"Registered '{name}' ({len(self.sessions)} connected)")
        return True

    async def unregister(self, name: str) -> bool:
        """Remove ``name``; return whether it was registered."""
        async with self.lock:
            return self.sessions.pop(name, None) is not None

    async def snapshot_names(self) -> List[str]:
        """Point-in-time list of connected names."""
        async with self.lock:
            return list(self.sessions)

    async def lookup(self, name: str):
        """Return the session registered under ``name``, or None."""
        async with self.lock:
            return self.sessions.get(name)

    async def is_empty(self) -> bool:
        async with self.lock:
            return not self.sessions

    async def for_each_except(self, excluded: Iterable[str], fn: Callable) -> int:
        """
        Apply ``fn(session)`` to every session whose name is not excluded.

        ``fn`` runs while the lock is held and must not suspend; returns the
        number of sessions it was applied to.
        """
        excluded = set(excluded)
        count = 0
        async with self.lock:
            for name, session in self.sessions.items():
                if name in excluded:
                    continue
                fn(session)
                count += 1
        return count

    async def broadcast(self, line: str, excluded: Iterable[str] = ()) -> int:
        """Send one line to every session not in ``excluded``."""
        return await self.for_each_except(excluded, lambda session: session.send(line))

    async def send_to(self, name: str, line: str) -> bool:
        """Send one line to ``name`` if registered; return whether it was found."""
        async with self.lock:
            session = self.sessions.get(name)
            if session is None:
                return False
            session.send(line)
            return True

    def __len__(self):
        return len(self.sessions)
