"""
Chat client module.

Thin terminal client: negotiates a name, then prints every line from the
server while forwarding lines typed on stdin.
"""

import asyncio
import sys
from typing import Callable, Optional

from common.constants import ACCEPTED, DEFAULT_HOST, DEFAULT_PORT, Commands
from common.protocol_definitions import encode_line, decode_line


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 output: Callable[[str], None] = print):
        self.host = host
        self.port = port
        self.output = output
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.name: Optional[str] = None
        self.running = False

    async def connect(self):
        """Open the connection to the server."""
        self.reader, self.writer = await asyncio.open_connection(self.host, self.port)
        self.running = True

    async def send_line(self, text: str) -> bool:
        """Send one line to the server."""
        if not self.writer:
            self.output("[ERROR] Not connected to server")
            return False

        try:
            self.writer.write(encode_line(text))
            await self.writer.drain()
            return True
        except (ConnectionError, OSError) as e:
            self.output(f"[ERROR] Failed to send message: {e}")
            self.running = False
            return False

    async def read_line(self) -> Optional[str]:
        data = await self.reader.readline()
        if not data:
            return None
        return decode_line(data)

    async def login(self, name: str) -> bool:
        """Offer a name; return True once the server accepts it."""
        name = name.strip()
        if not name:
            self.output("Name cannot be empty.")
            return False

        await self.send_line(name)
        response = await self.read_line()
        if response is None:
            self.running = False
            return False
        if response == ACCEPTED:
            self.name = name
            self.output(f"Connected to server as {name}")
            return True

        self.output(response)
        return False

    async def listen(self):
        """Print server lines until the connection closes."""
        try:
            while self.running:
                line = await self.read_line()
                if line is None:
                    break
                self.output(line)
        except (ConnectionError, OSError) as e:
            self.output(f"[ERROR] Connection lost: {e}")
        finally:
            self.running = False

    async def _input(self, prompt: str = '') -> Optional[str]:
        if prompt:
            print(prompt, end='', flush=True)
        line = await asyncio.get_running_loop().run_in_executor(None, sys.stdin.readline)
        if not line:
            return None
        return line.rstrip('\n')

    async def run(self):
        """Interactive session on stdin/stdout."""
        await self.connect()
        try:
            while self.running and self.name is None:
                name = await self._input("Enter your name: ")
                if name is None:
                    return
                await self.login(name)
            if self.name is None:
                return

            listener = asyncio.create_task(self.listen())
            while self.running:
                text = await self._input()
                if text is None:
                    await self.send_line(Commands.EXIT)
                    break
                text = text.strip()
                if not text:
                    continue
                await self.send_line(text)
                if text == Commands.EXIT:
                    break
            listener.cancel()
            await asyncio.gather(listener, return_exceptions=True)
        finally:
            await self.close()

    async def close(self):
        """Close the connection."""
        self.running = False
        if self.writer is not None:
            self.writer.close()
            try:
                await self.writer.wait_closed()
            except (ConnectionError, OSError):
                pass
            self.writer = None
