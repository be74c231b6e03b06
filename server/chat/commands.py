"""
In-band command handling.

Lines starting with ``/`` are parsed here on behalf of a SessionHandler. All
replies go privately to the invoking session; delivery to others goes through
the registry.
"""

from typing import List, Optional, Tuple

from common.constants import HELP_LINES, Commands, Replies
from common.protocol_definitions import (
    split_names, create_client_list_message, create_banned_list_message,
    create_private_message, create_except_message, create_user_not_found_message
)
from server.utils.logger import logger


def parse_targets(args: str) -> Optional[Tuple[List[str], str]]:
    """
    Split ``"n1,n2 message text"`` into (names, text).

    Returns None when the name list or the message text is missing.
    """
    recipients, _, text = args.partition(' ')
    names = split_names(recipients)
    if not names or not text:
        return None
    return names, text


class CommandDispatcher:
    """Parses and executes commands for a session."""

    def __init__(self, registry, banned_filter):
        self.registry = registry
        self.banned_filter = banned_filter

    async def dispatch(self, handler, line: str):
        """Run the command in ``line`` for ``handler``."""
        command, _, args = line.partition(' ')

        if command == Commands.MSG:
            await self.handle_private_message(handler, args)
        elif command == Commands.EXCEPT:
            await self.handle_except(handler, args)
        elif command == Commands.EXIT:
            logger.info(f"Exit requested by {handler.name}")
            await handler.close()
        elif command == Commands.LIST:
            names = await self.registry.snapshot_names()
            handler.send(create_client_list_message(names))
        elif command == Commands.BANNED:
            handler.send(create_banned_list_message(self.banned_filter.phrases))
        elif command == Commands.HELP:
            for help_line in HELP_LINES:
                handler.send(help_line)
        else:
            logger.debug(f"Unknown command from {handler.name}: {command}")
            handler.send(Replies.UNKNOWN_COMMAND)

    async def handle_private_message(self, handler, args: str):
        """Deliver to each named recipient; report names that are not connected."""
        parsed = parse_targets(args)
        if parsed is None:
            handler.send(Replies.MSG_USAGE)
            return

        names, text = parsed
        line = create_private_message(handler.name, text)
        delivered = []
        for name in names:
            if await self.registry.send_to(name, line):
                delivered.append(name)
            else:
                handler.send(create_user_not_found_message(name))

        if delivered:
            logger.log_private(handler.name, delivered, text)

    async def handle_except(self, handler, args: str):
        """Broadcast to everyone except the listed names and the sender."""
        parsed = parse_targets(args)
        if parsed is None:
            handler.send(Replies.EXCEPT_USAGE)
            return

        names, text = parsed
        excluded = set(names)
        excluded.add(handler.name)
        await self.registry.broadcast(create_except_message(handler.name, names, text), excluded)
        logger.log_except(handler.name, names, text)
