#!/usr/bin/env python3
"""
Line Chat Server - Main Entry Point

Usage:
    python main_server.py [--config server_config.txt]

Optional arguments:
    --config PATH         key=value configuration file (default: server_config.txt)
    --host HOST           Bind address (overrides the file)
    --port PORT           TCP port (overrides the file)
    --logs-dir DIR        Directory for chat_history.log (default: logs)
    --log-level LEVEL     DEBUG, INFO, WARNING or ERROR (default: INFO)
    --stop-when-empty     Stop accepting once the last client leaves
"""

import argparse
import asyncio
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from common.constants import DEFAULT_CONFIG_FILE
from server.main_server import ChatServer
from server.utils.config import ConfigError, load_config
from server.utils.logger import logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Line Chat Server')
    parser.add_argument('--config', type=str, default=DEFAULT_CONFIG_FILE,
                        help=f'Configuration file (default: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--host', type=str, default=None,
                        help='Host to bind to (overrides the configuration file)')
    parser.add_argument('--port', type=int, default=None,
                        help='TCP port (overrides the configuration file)')
    parser.add_argument('--logs-dir', type=str, default=None,
                        help='Directory for chat logs (default: logs)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')
    parser.add_argument('--stop-when-empty', action='store_true', default=None,
                        help='Stop accepting connections once the last client leaves '
                             '(legacy shutdown behaviour; off by default)')
    return parser.parse_args(argv)


async def run_server(server: ChatServer):
    try:
        await server.serve()
    finally:
        await server.stop()


def main(argv=None):
    args = parse_args(argv)
    logger.configure(log_level=getattr(logging, args.log_level))

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Server failed to start: {e}")
        return 1

    config = config.replace(
        host=args.host,
        port=args.port,
        logs_dir=args.logs_dir,
        stop_when_empty=args.stop_when_empty
    )

    logger.configure(logs_dir=config.logs_dir)
    server = ChatServer(config)
    try:
        asyncio.run(run_server(server))
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
