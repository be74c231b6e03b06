"""
Client package for the line chat service.

A thin terminal client: it opens a connection, negotiates a name, sends typed
lines and prints received lines.
"""
