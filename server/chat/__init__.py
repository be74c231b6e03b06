"""
Chat module for server-side messaging functionality.

Handles:
- Name registration and session routing
- Per-connection handshake and message loop
- In-band commands
- Banned phrase filtering
"""
