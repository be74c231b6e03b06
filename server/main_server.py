"""
Line chat server - connection listener.

Accepts TCP connections, runs one SessionHandler per connection and
coordinates shutdown.
"""

import asyncio
from typing import Optional, Set

from common.protocol_definitions import create_shutdown_notice
from server.chat.banned_filter import BannedPhraseFilter
from server.chat.commands import CommandDispatcher
from server.chat.registry import ClientRegistry
from server.chat.session import SessionHandler
from server.utils.config import ServerConfig
from server.utils.logger import logger


class ChatServer:
    """Main server class that wires the registry, filter and commands together."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.registry = ClientRegistry()
        self.banned_filter = BannedPhraseFilter(config.banned_phrases)
        self.dispatcher = CommandDispatcher(self.registry, self.banned_filter)
        self.handlers: Set[SessionHandler] = set()

        self._server: Optional[asyncio.AbstractServer] = None
        self._stopped = asyncio.Event()
        self._stopping = False
        self._stop_task: Optional[asyncio.Task] = None

    @property
    def port(self) -> Optional[int]:
        """Port actually bound (useful when configured with port 0)."""
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    @property
    def is_serving(self) -> bool:
        return self._server is not None and self._server.is_serving()

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        if self._stopping:
            writer.close()
            await writer.wait_closed()
            return

        handler = SessionHandler(
            reader, writer, self.registry, self.banned_filter, self.dispatcher,
            on_registry_empty=self._on_registry_empty,
            max_pending=self.config.outbound_queue_size
        )
        self.handlers.add(handler)
        try:
            await handler.run()
        finally:
            self.handlers.discard(handler)

    def _on_registry_empty(self):
        if self.config.stop_when_empty and not self._stopping:
            logger.info("Last client left, stopping the server")
            self._stop_task = asyncio.create_task(self.stop())

    async def start_serving(self):
        """Bind the listening socket and start accepting connections."""
        self._server = await asyncio.start_server(
            self.handle_client,
            self.config.host,
            self.config.port,
            limit=self.config.max_line_length
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self._server.sockets)
        logger.info(f"{self.config.server_name} launched on {addr} "
                    f"({len(self.banned_filter)} banned phrase(s))")

    async def serve(self):
        """Start the server and wait until it is stopped."""
        if self._server is None:
            await self.start_serving()
        await self._stopped.wait()

    async def stop(self):
        """Stop accepting, notify and close every session. Idempotent."""
        if self._stopping:
            return
        self._stopping = True

        if self._server is not None:
            self._server.close()
            logger.info("Listening socket closed, no longer accepting connections")

        handlers = list(self.handlers)
        if handlers:
            await self.registry.broadcast(create_shutdown_notice(self.config.server_name))
            await asyncio.gather(*(handler.close() for handler in handlers))

        logger.info(f"{self.config.server_name} stopped")
        self._stopped.set()
