"""Host and client session loops.

Public API:
    HostSession -- accept one client, decode and inject its key events
    ClientSession -- capture local key events, encode and send them
"""

from remote_keyboard.session.client import ClientSession
from remote_keyboard.session.host import HostSession, accept_one, open_listener

__all__ = ["ClientSession", "HostSession", "accept_one", "open_listener"]
