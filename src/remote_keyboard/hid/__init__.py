"""USB HID keyboard gadget support.

Lets a Linux host with a USB gadget port (Raspberry Pi Zero, Pi 4, ...)
replay received key events as a physical keyboard, by writing HID
boot-keyboard reports to /dev/hidg0.
"""
