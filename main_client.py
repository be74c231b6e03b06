#!/usr/bin/env python3
"""
Line Chat Client - Main Entry Point

Usage:
    python main_client.py [--host HOST] [--port PORT]

Type lines to chat; /help lists the commands, /exit leaves.
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from client.chat.chat_client import ChatClient
from common.constants import DEFAULT_HOST, DEFAULT_PORT


def main(argv=None):
    parser = argparse.ArgumentParser(description='Line Chat Client')
    parser.add_argument('--host', type=str, default=DEFAULT_HOST,
                        help=f'Server host (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'Server port (default: {DEFAULT_PORT})')
    args = parser.parse_args(argv)

    client = ChatClient(args.host, args.port)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        print("\n[INFO] Disconnected")
    except OSError as e:
        print(f"[ERROR] Could not connect to {args.host}:{args.port}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
