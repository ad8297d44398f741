"""Command-line interface for remote_keyboard.

Two commands share one wire protocol:

    remote-keyboard host [-p PORT]          accept a client and replay its keys
    remote-keyboard connect IP [-p PORT]    send this machine's keys to a host
"""

from __future__ import annotations

import argparse
import asyncio
import ipaddress
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="remote-keyboard",
        description="Remote controlling key presses",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/remote_keyboard.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    host_parser = subparsers.add_parser(
        "host", help="Host keyboard control, allowing your computer to be controlled",
    )
    host_parser.add_argument(
        "-p", "--port", type=int, default=None,
        help="The port to host on (default: 58008)",
    )
    host_parser.add_argument(
        "--bind", type=str, default=None,
        help="Address to listen on (default: 0.0.0.0)",
    )
    host_parser.add_argument(
        "--backend", choices=["pynput", "usb_hid"], default=None,
        help="How received keys are injected (default: pynput)",
    )

    connect_parser = subparsers.add_parser(
        "connect", help="Connect to someone else's computer",
    )
    connect_parser.add_argument(
        "ip", type=ipaddress.ip_address,
        help="The IP to connect to",
    )
    connect_parser.add_argument(
        "-p", "--port", type=int, default=None,
        help="The port to connect to (default: 58008)",
    )

    return parser.parse_args(argv)


def _build_injector(settings):
    """Create the key injector selected in the host settings."""
    if settings.host.backend == "usb_hid":
        from remote_keyboard.keyboard.usb_hid_backend import UsbHidKeyInjector
        return UsbHidKeyInjector(device_path=settings.host.usb_hid_device)
    from remote_keyboard.keyboard.pynput_backend import PynputKeyInjector
    return PynputKeyInjector()


async def _host(settings) -> None:
    from remote_keyboard.session.host import HostSession

    session = HostSession(injector=_build_injector(settings))
    report = await session.serve(settings.host.bind_address, settings.host.port)
    logger.info("Replayed %d key events from %s", report.frames, report.peer)


async def _connect(settings, ip: str) -> None:
    from remote_keyboard.input.tk_window import TkWindowInput
    from remote_keyboard.session.client import ClientSession

    source = TkWindowInput(
        title=settings.client.window_title,
        poll_interval=settings.client.poll_interval,
    )
    session = ClientSession(source=source)
    report = await session.connect(ip, settings.client.port)
    logger.info("Sent %d key events to %s", report.frames, report.peer)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the remote-keyboard CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from pydantic import ValidationError

    from remote_keyboard.config.settings import load_settings
    from remote_keyboard.input.base import InputError
    from remote_keyboard.keyboard.base import KeyInjectionError
    from remote_keyboard.protocol.codec import CodecError
    from remote_keyboard.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        if args.command == "host":
            if args.port is not None:
                settings.host.port = args.port
            if args.bind is not None:
                settings.host.bind_address = args.bind
            if args.backend is not None:
                settings.host.backend = args.backend
            asyncio.run(_host(settings))

        elif args.command == "connect":
            if args.port is not None:
                settings.client.port = args.port
            asyncio.run(_connect(settings, str(args.ip)))

    except (OSError, CodecError, KeyInjectionError, InputError, ValidationError) as e:
        logger.error("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
