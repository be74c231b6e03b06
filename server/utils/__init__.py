"""
Configuration and logging utilities for the chat server.
"""
