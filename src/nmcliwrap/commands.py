"""nmcli argument-vector construction.

Every builder returns the arguments that follow the ``nmcli`` binary as a
list of strings.  Caller-supplied values (connection names, SSIDs,
passwords, file paths) always occupy exactly one list element, and the
list is executed without a shell, so spaces, quotes and metacharacters
in a value are never interpreted.  :func:`format_command` renders an
argument vector as a shell-safe string for the interactive commands and
for log output.

Query builders request ``--mode multiline`` output for
:func:`nmcliwrap.parser.parse_multiline_output`.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping

from nmcliwrap.common import NMCLI_BINARY, SUDO_BINARY

MULTILINE = ["--mode", "multiline"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def option_args(options: Mapping[str, object] | None) -> list[str]:
    """Flatten an option mapping into ``[key, value, key, value, ...]``.

    Order follows the mapping.  Values are converted with ``str()``.
    """
    args: list[str] = []
    for key, value in (options or {}).items():
        args += [str(key), str(value)]
    return args


def full_command(
    args: list[str],
    *,
    use_sudo: bool = False,
    binary: str = NMCLI_BINARY,
) -> list[str]:
    """Prefix *args* with the nmcli binary and, if requested, ``sudo``."""
    prefix = [SUDO_BINARY] if use_sudo else []
    return prefix + [binary] + list(args)


def format_command(argv: list[str]) -> str:
    """Render *argv* as a single shell-safe command line."""
    return shlex.join(argv)


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

def con_show(name: str | None = None) -> list[str]:
    """``con show`` listing, or the details of one connection."""
    args = MULTILINE + ["con", "show"]
    if name:
        args.append(name)
    return args


def con_up(name: str) -> list[str]:
    return ["con", "up", name]


def con_down(name: str) -> list[str]:
    return ["con", "down", name]


def con_add(
    con_type: str,
    name: str,
    options: Mapping[str, object] | None = None,
) -> list[str]:
    """``con add type <type> con-name <name> [key value]...``"""
    return ["con", "add", "type", con_type, "con-name", name] + option_args(options)


def con_modify(name: str, options: Mapping[str, object] | None = None) -> list[str]:
    return ["con", "modify", name] + option_args(options)


def con_clone(source: str, new_name: str) -> list[str]:
    return ["con", "clone", source, new_name]


def con_delete(name: str) -> list[str]:
    return ["con", "delete", name]


def con_reload() -> list[str]:
    return ["con", "reload"]


def con_load(filename: str) -> list[str]:
    return ["con", "load", filename]


def con_import(con_type: str, filename: str) -> list[str]:
    return ["con", "import", "type", con_type, "file", filename]


def con_export(name: str, filename: str) -> list[str]:
    return ["con", "export", name, filename]


def con_edit(name: str) -> list[str]:
    """Interactive editor; formatted for the user, never executed."""
    return ["con", "edit", name]


def con_monitor() -> list[str]:
    """Streaming monitor; formatted for the user, never executed."""
    return ["con", "monitor"]


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

def dev_status() -> list[str]:
    return MULTILINE + ["dev", "status"]


def dev_show(device: str | None = None) -> list[str]:
    args = MULTILINE + ["dev", "show"]
    if device:
        args.append(device)
    return args


def dev_connect(device: str, connection: str | None = None) -> list[str]:
    """``dev connect <device>``.

    nmcli itself picks the profile to activate; *connection*, when given,
    is appended as a trailing argument the same way it always has been.
    """
    args = ["dev", "connect", device]
    if connection:
        args.append(connection)
    return args


def dev_disconnect(device: str) -> list[str]:
    return ["dev", "disconnect", device]


# ---------------------------------------------------------------------------
# Wi-Fi
# ---------------------------------------------------------------------------

def wifi_list(device: str | None = None) -> list[str]:
    args = MULTILINE + ["dev", "wifi", "list"]
    if device:
        args += ["ifname", device]
    return args


def wifi_connect(
    ssid: str,
    password: str | None = None,
    device: str | None = None,
) -> list[str]:
    args = ["dev", "wifi", "connect", ssid]
    if password:
        args += ["password", password]
    if device:
        args += ["ifname", device]
    return args


def wifi_hotspot(
    ssid: str | None = None,
    password: str | None = None,
    device: str | None = None,
) -> list[str]:
    """``dev wifi hotspot``; the SSID doubles as the connection name."""
    args = ["dev", "wifi", "hotspot"]
    if device:
        args += ["ifname", device]
    if ssid:
        args += ["con-name", ssid]
    if password:
        args += ["password", password]
    return args
