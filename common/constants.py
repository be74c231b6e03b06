"""
Shared constants for the line chat service.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 1701
DEFAULT_SERVER_NAME = 'ChatServer'
DEFAULT_CONFIG_FILE = 'server_config.txt'

# Stream limits
MAX_LINE_LENGTH = 64 * 1024  # bytes per line before the peer is dropped
OUTBOUND_QUEUE_SIZE = 1000  # queued lines before a peer counts as stalled
FLUSH_TIMEOUT = 5  # seconds to flush queued lines on close

# Encoding
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'

# Logging
LOG_DIR = 'logs'
CHAT_LOG_FILE = 'chat_history.log'

# Handshake
ACCEPTED = 'ACCEPTED'


class Commands:
    """In-band command tokens (case-sensitive)."""
    EXIT = '/exit'
    LIST = '/list'
    BANNED = '/banned'
    HELP = '/help'
    MSG = '/msg'
    EXCEPT = '/except'

    PREFIX = '/'


class Replies:
    """Fixed reply texts sent privately to a single peer."""
    NAME_REJECTED = 'Name is empty or already taken. Try again.'
    BANNED_MESSAGE = 'Message contains banned phrases and will not be sent.'
    UNKNOWN_COMMAND = 'Unknown command. Type /help for the list of available commands.'
    MSG_USAGE = 'Usage: /msg [user1,user2...] [message]'
    EXCEPT_USAGE = 'Usage: /except [user1,user2,...] [message]'


HELP_LINES = (
    'Available commands:',
    '/list - Show list of connected clients.',
    '/banned - Show list of banned phrases.',
    '/msg [username1,username2] [message] - Send a private message.',
    '/except [user1,user2,...] [message] - Broadcast message excluding specified users.',
    '/help - Show available commands.',
    '/exit - Exit from chat.',
)
