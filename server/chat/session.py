"""
Session handling module.

One SessionHandler runs per accepted connection: it negotiates a unique name,
then reads lines until the peer leaves. Outgoing lines go through the
Session's queue so that a slow peer never blocks the registry lock.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

from common.constants import ACCEPTED, FLUSH_TIMEOUT, OUTBOUND_QUEUE_SIZE, Commands, Replies
from common.protocol_definitions import (
    encode_line, decode_line, create_join_notice, create_leave_notice,
    create_client_list_message, create_chat_message, create_error_message
)
from server.utils.logger import logger


class SessionState(Enum):
    CONNECTING = 'connecting'
    AUTHENTICATING = 'authenticating'
    ACTIVE = 'active'
    CLOSED = 'closed'


class Session:
    """Outbound side of one connection: a name and a non-blocking send."""

    def __init__(self, writer: asyncio.StreamWriter, max_pending: int = OUTBOUND_QUEUE_SIZE):
        self.name: Optional[str] = None
        self.writer = writer
        self.addr = writer.get_extra_info('peername')
        self.max_pending = max_pending
        self._queue: asyncio.Queue = asyncio.Queue()
        self._pump_task: Optional[asyncio.Task] = None
        self._accepting = True
        self._closed = False

    @property
    def label(self) -> str:
        return self.name if self.name is not None else str(self.addr)

    def start(self):
        """Start the writer task that drains the outbound queue."""
        if self._pump_task is None:
            self._pump_task = asyncio.create_task(self._pump())

    def send(self, line: str) -> bool:
        """Queue one line for the peer. Never suspends."""
        if not self._accepting:
            return False
        if self._queue.qsize() >= self.max_pending:
            # Peer stopped reading
            logger.warning(f"Outbound queue full for {self.label}, dropping connection")
            self._accepting = False
            self.writer.transport.abort()
            return False
        self._queue.put_nowait(line)
        return True

    async def _pump(self):
        try:
            while True:
                line = await self._queue.get()
                if line is None:
                    break
                self.writer.write(encode_line(line))
                await self.writer.drain()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Write to {self.label} failed: {e}")
            self._accepting = False

    async def close(self):
        """Flush queued lines, then close the connection. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._accepting = False

        if self._pump_task is not None:
            self._queue.put_nowait(None)
            try:
                await asyncio.wait_for(self._pump_task, FLUSH_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning(f"Timed out flushing output to {self.label}")

        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Error closing connection to {self.label}: {e}")


class SessionHandler:
    """Handshake and message loop for one connection."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 registry, banned_filter, dispatcher,
                 on_registry_empty: Optional[Callable[[], None]] = None,
                 max_pending: int = OUTBOUND_QUEUE_SIZE):
        self.reader = reader
        self.registry = registry
        self.banned_filter = banned_filter
        self.dispatcher = dispatcher
        self.on_registry_empty = on_registry_empty
        self.session = Session(writer, max_pending)
        self.state = SessionState.CONNECTING

    @property
    def name(self) -> Optional[str]:
        return self.session.name

    def send(self, line: str) -> bool:
        """Reply privately to this peer."""
        return self.session.send(line)

    async def run(self):
        """Drive the connection until it closes."""
        self.session.start()
        self.state = SessionState.AUTHENTICATING
        logger.log_connection(self.session.addr)

        try:
            if await self._authenticate():
                await self._message_loop()
        except asyncio.CancelledError:
            logger.info(f"Connection cancelled for {self.session.label}")
        except (ConnectionError, OSError) as e:
            logger.info(f"Connection lost for {self.session.label}: {e}")
        finally:
            await self.close()

    async def _read_line(self) -> Optional[str]:
        """Read the next line; None means the peer is gone."""
        try:
            data = await self.reader.readline()
        except ValueError as e:
            logger.warning(f"Line too long from {self.session.label}, closing: {e}")
            return None
        if not data:
            return None
        return decode_line(data)

    async def _authenticate(self) -> bool:
        while self.state is SessionState.AUTHENTICATING:
            line = await self._read_line()
            if line is None:
                return False

            name = line.strip()
            if not name or not await self.registry.try_register(name, self.session):
                self.send(Replies.NAME_REJECTED)
                continue

            if self.state is not SessionState.AUTHENTICATING:
                # Closed while registering
                await self.registry.unregister(name)
                return False

            self.session.name = name
            self.send(ACCEPTED)
            self.state = SessionState.ACTIVE
            logger.log_login(name, self.session.addr)

            await self.registry.broadcast(create_join_notice(name), excluded={name})
            self.send(create_client_list_message(await self.registry.snapshot_names()))
            return True
        return False

    async def _message_loop(self):
        while self.state is SessionState.ACTIVE:
            line = await self._read_line()
            if line is None:
                break
            try:
                await self.handle_line(line)
            except Exception as e:
                logger.log_error(f"handling line from {self.name}", e)
                self.send(create_error_message(str(e)))

    async def handle_line(self, line: str):
        """Filter, dispatch or broadcast one line from an active session."""
        if self.banned_filter.contains(line):
            logger.log_banned(self.name, line)
            self.send(Replies.BANNED_MESSAGE)
            return

        if line.startswith(Commands.PREFIX):
            await self.dispatcher.dispatch(self, line)
            return

        count = await self.registry.broadcast(create_chat_message(self.name, line), excluded={self.name})
        logger.log_chat(self.name, line, count)

    async def close(self):
        """Unregister, announce the departure and close the connection. Idempotent."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED

        emptied = False
        name = self.session.name
        if name is not None and await self.registry.unregister(name):
            await self.registry.broadcast(create_leave_notice(name))
            logger.log_disconnect(name)
            emptied = await self.registry.is_empty()

        await self.session.close()

        if emptied and self.on_registry_empty is not None:
            self.on_registry_empty()
