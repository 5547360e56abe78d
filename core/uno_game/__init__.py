"""
UNO Game Backend

Server-authoritative rooms for multiplayer UNO over Socket.IO.
"""
