"""
Protocol definitions for the line chat service.

This module defines the line format used between client and server and the
builders for every line the server emits.
"""

from typing import Iterable, List, Optional

from common.constants import ENCODING, LINE_TERMINATOR


def encode_line(text: str) -> bytes:
    """Serialize one line of text for the wire."""
    return (text + LINE_TERMINATOR).encode(ENCODING)


def decode_line(data: bytes) -> str:
    """Decode one received line, dropping the line terminator."""
    return data.decode(ENCODING, errors='replace').rstrip('\r\n')


def split_names(raw: str) -> List[str]:
    """Split a comma-separated name list, trimming and skipping empty names."""
    names = []
    for name in raw.split(','):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


def format_name_set(names: Iterable[str]) -> str:
    """Render names as a bracketed list, e.g. ``[c, d]``."""
    return '[' + ', '.join(names) + ']'


def create_join_notice(name: str) -> str:
    """Create the notice broadcast when a user joins."""
    return f"{name} has joined the chat"


def create_leave_notice(name: str) -> str:
    """Create the notice broadcast when a user leaves."""
    return f"{name} has left the chat"


def create_client_list_message(names: Iterable[str]) -> str:
    """Create the roster line."""
    return "Connected clients: " + ', '.join(names)


def create_banned_list_message(phrases: Iterable[str]) -> str:
    """Create the banned phrase listing."""
    return "Banned phrases: " + format_name_set(sorted(phrases))


def create_chat_message(sender: str, text: str) -> str:
    """Create a plain broadcast line."""
    return f"{sender}: {text}"


def create_private_message(sender: str, text: str) -> str:
    """Create a private message line."""
    return f"{sender} (private): {text}"


def create_except_message(sender: str, excluded: Iterable[str], text: str) -> str:
    """Create an exclusion broadcast line."""
    return f"{sender} (to everyone, except {format_name_set(excluded)}): {text}"


def create_user_not_found_message(name: str) -> str:
    """Create the reply for an unresolved recipient."""
    return f"User {name} not found."


def create_error_message(detail: str) -> str:
    """Create the reply for an unexpected failure while handling a line."""
    return f"Error handling message: {detail}"


def create_shutdown_notice(server_name: Optional[str]) -> str:
    """Create the notice sent to every session when the server stops."""
    return f"{server_name or 'Server'} is shutting down."
