"""
Server package for the line chat service.

This package contains all server-side functionality including:
- Connection listener and shutdown coordination
- Session registry and message routing
- Configuration and utilities
"""
