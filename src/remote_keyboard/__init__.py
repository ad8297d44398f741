"""remote_keyboard -- Replay one machine's keyboard on another.

A client captures key presses and releases from a small focus window and
streams them as 2- or 3-byte frames over a single TCP connection. The
host decodes each frame in order and injects the key into its own OS
(or into a USB HID gadget).
"""

__version__ = "0.1.0"
