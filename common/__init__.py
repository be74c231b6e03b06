"""
Shared definitions used by both the chat server and the terminal client.
"""
