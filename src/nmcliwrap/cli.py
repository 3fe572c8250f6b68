"""Command-line front end for nmcliwrap.

Examples::

    nmcliwrap connections                 # table of connection profiles
    nmcliwrap devices --json              # devices as JSON
    nmcliwrap wifi -i wlan0               # Wi-Fi networks seen by wlan0
    nmcliwrap --sudo up "My Home's Network"
    nmcliwrap edit Home                   # print the interactive command
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console

from nmcliwrap.common import DEFAULT_TIMEOUT
from nmcliwrap.display.tables import (
    build_connections_table,
    build_devices_table,
    build_wifi_table,
)
from nmcliwrap.nmcli import Nmcli
from nmcliwrap.views import by_signal

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="nmcliwrap",
        description="Structured access to NetworkManager via nmcli.",
    )
    parser.add_argument(
        "--sudo",
        action="store_true",
        help="run nmcli through sudo",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"give up on nmcli after this many seconds (default: {DEFAULT_TIMEOUT}, 0 = never)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging (commands run, failures swallowed)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("connections", "list connection profiles"),
        ("devices", "list network devices"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--json", action="store_true", dest="json_output", help="output as JSON")

    p = sub.add_parser("wifi", help="list visible Wi-Fi networks")
    p.add_argument("-i", "--interface", help="wireless interface to list from (default: all)")
    p.add_argument("--json", action="store_true", dest="json_output", help="output as JSON")

    for name, help_text in (
        ("up", "activate a connection"),
        ("down", "deactivate a connection"),
        ("delete", "delete a connection"),
        ("edit", "print the interactive editor command for a connection"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("name", help="connection name")

    p = sub.add_parser("connect", help="connect to a Wi-Fi network")
    p.add_argument("ssid")
    p.add_argument("-p", "--password", help="network passphrase")
    p.add_argument("-i", "--interface", help="wireless interface to connect on")

    sub.add_parser("monitor", help="print the connection monitor command")
    return parser.parse_args(argv)


def _setup_logging(debug: bool) -> None:
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("nmcliwrap").setLevel(logging.DEBUG)


def _report_failure(nm: Nmcli, action: str) -> int:
    """Print the diagnostic output of the last failed call; return exit code."""
    print(f"ERROR: {action} failed", file=sys.stderr)
    error = nm.last_error
    if error is not None:
        for line in error.output:
            print(f"  {line}", file=sys.stderr)
    return 1


def run(args: argparse.Namespace, nm: Nmcli, console: Console) -> int:
    """Execute the parsed command against *nm*; return the exit status."""
    if args.command == "connections":
        connections = nm.get_connections()
        if args.json_output:
            print(json.dumps([c.to_dict() for c in connections], indent=2))
        else:
            console.print(build_connections_table(connections))
        return 0

    if args.command == "devices":
        devices = nm.get_devices()
        if args.json_output:
            print(json.dumps([d.to_dict() for d in devices], indent=2))
        else:
            console.print(build_devices_table(devices))
        return 0

    if args.command == "wifi":
        networks = sorted(nm.get_wifi_networks(args.interface), key=by_signal)
        if args.json_output:
            data = [
                dict(n.to_dict(), signal_strength=n.signal_strength, signal_quality=n.signal_quality)
                for n in networks
            ]
            print(json.dumps(data, indent=2))
        elif not networks:
            print("No networks found.")
        else:
            console.print(build_wifi_table(networks))
        return 0

    if args.command in ("edit", "monitor"):
        print(nm.edit(args.name) if args.command == "edit" else nm.monitor())
        return 0

    if args.command == "connect":
        ok = nm.connect_wifi(args.ssid, args.password, args.interface)
        target = args.ssid
    else:
        action = {"up": nm.up, "down": nm.down, "delete": nm.delete}[args.command]
        ok = action(args.name)
        target = args.name

    if not ok:
        return _report_failure(nm, f"{args.command} {target!r}")
    print(f"{args.command} {target!r}: ok")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``nmcliwrap`` console script."""
    args = _parse_args(argv)
    _setup_logging(args.debug)
    nm = Nmcli(use_sudo=args.sudo, timeout=args.timeout or None)
    logger.debug("sudo=%s timeout=%s command=%s", args.sudo, args.timeout, args.command)
    sys.exit(run(args, nm, Console()))


if __name__ == "__main__":
    main()
