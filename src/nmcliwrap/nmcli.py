"""NetworkManager CLI wrapper.

:class:`Nmcli` runs ``nmcli`` through a :class:`CommandRunner`, parses
multiline output into records and wraps them in typed views.

Queries never raise: a failed invocation yields ``[]`` (or ``None`` for
single-item lookups).  Mutations return ``True``/``False``.  The raw
result of the most recent call stays available on the instance::

    nm = Nmcli(use_sudo=False)
    if not nm.up("Home"):
        print(nm.last_return_code, nm.last_output)

One instance serves one caller at a time; the ``last_*`` attributes are
overwritten by every invocation.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping

from nmcliwrap import commands
from nmcliwrap.common import (
    DEFAULT_TIMEOUT,
    NMCLI_BINARY,
    CommandFailure,
    CommandRunner,
    Record,
    SubprocessRunner,
    _minimal_env,
)
from nmcliwrap.parser import parse_multiline_output
from nmcliwrap.views import Connection, Device, WifiNetwork

logger = logging.getLogger(__name__)

_DEFAULT_RUNNER = SubprocessRunner()


class Nmcli:
    """Object-oriented front end to ``nmcli``.

    Args:
        use_sudo: Prefix every invocation with ``sudo``.  Can be changed
            later through the :attr:`use_sudo` property.
        timeout: Seconds to wait for nmcli before giving up, or ``None``
            to wait indefinitely.
        binary: Name or path of the nmcli executable.
        runner: Optional CommandRunner for subprocess calls (testing seam).
    """

    def __init__(
        self,
        use_sudo: bool = True,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        binary: str = NMCLI_BINARY,
        runner: CommandRunner | None = None,
    ) -> None:
        self._use_sudo = use_sudo
        self.timeout = timeout
        self.binary = binary
        self._runner = runner or _DEFAULT_RUNNER
        self._last_output: list[str] = []
        self._last_return_code: int | None = None
        self._last_error: CommandFailure | None = None

    # -- configuration ------------------------------------------------------

    @property
    def use_sudo(self) -> bool:
        """Whether invocations are prefixed with ``sudo``."""
        return self._use_sudo

    @use_sudo.setter
    def use_sudo(self, value: bool) -> None:
        self._use_sudo = bool(value)

    # -- last-call introspection --------------------------------------------

    @property
    def last_output(self) -> list[str]:
        """Stdout lines of the most recent invocation."""
        return list(self._last_output)

    @property
    def last_return_code(self) -> int | None:
        """Exit status of the most recent invocation.

        ``None`` if nmcli could not be started or timed out.
        """
        return self._last_return_code

    @property
    def last_error(self) -> CommandFailure | None:
        """The failure raised by the most recent invocation, if any."""
        return self._last_error

    # -- invocation ---------------------------------------------------------

    def command(self, args: list[str]) -> list[str]:
        """Return the full argv (prefix + binary + *args*) for *args*."""
        return commands.full_command(args, use_sudo=self._use_sudo, binary=self.binary)

    def execute(self, args: list[str]) -> list[str]:
        """Run nmcli with *args* and return its stdout lines.

        Raises:
            CommandFailure: nmcli exited non-zero, timed out, or could not
                be started.
        """
        cmd = self.command(args)
        logger.debug("running: %s", commands.format_command(cmd))

        try:
            result = self._runner.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=_minimal_env(),
            )
        except subprocess.TimeoutExpired:
            self._record([], None)
            raise self._fail([f"timed out after {self.timeout}s"], cmd, None)
        except (FileNotFoundError, OSError, UnicodeDecodeError) as exc:
            self._record([], None)
            raise self._fail([str(exc)], cmd, None) from exc

        lines = (result.stdout or "").splitlines()
        self._record(lines, result.returncode)

        if result.returncode != 0:
            diagnostic = lines + (result.stderr or "").splitlines()
            raise self._fail(diagnostic, cmd, result.returncode)

        self._last_error = None
        return lines

    def _record(self, lines: list[str], returncode: int | None) -> None:
        self._last_output = lines
        self._last_return_code = returncode

    def _fail(
        self,
        output: list[str],
        cmd: list[str],
        returncode: int | None,
    ) -> CommandFailure:
        error = CommandFailure(output, command=cmd, returncode=returncode)
        self._last_error = error
        return error

    def _query(self, args: list[str]) -> list[Record]:
        """Execute a multiline query; failures become an empty list."""
        try:
            return parse_multiline_output(self.execute(args))
        except CommandFailure as exc:
            logger.debug("query failed (rc=%s): %s", exc.returncode, exc)
            return []

    def _mutate(self, args: list[str]) -> bool:
        """Execute a state-changing command; failures become ``False``."""
        try:
            self.execute(args)
        except CommandFailure as exc:
            logger.debug("command failed (rc=%s): %s", exc.returncode, exc)
            return False
        return True

    def _interactive(self, args: list[str]) -> str:
        return commands.format_command(self.command(args))

    # -- connections --------------------------------------------------------

    def get_connections(self) -> list[Connection]:
        """All connection profiles as :class:`Connection` views."""
        return [Connection(data, self) for data in self._query(commands.con_show())]

    def get_connection(self, name: str) -> Connection | None:
        """A single connection, or ``None`` if nmcli does not know it."""
        records = self._query(commands.con_show(name))
        if not records:
            return None
        return Connection(records[0], self)

    def show(self, name: str | None = None) -> list[Record]:
        """Raw ``con show`` records, for all connections or one."""
        return self._query(commands.con_show(name))

    def up(self, name: str) -> bool:
        return self._mutate(commands.con_up(name))

    def down(self, name: str) -> bool:
        return self._mutate(commands.con_down(name))

    def add(
        self,
        con_type: str,
        name: str,
        options: Mapping[str, object] | None = None,
    ) -> bool:
        """Add a connection profile of *con_type* named *name*."""
        return self._mutate(commands.con_add(con_type, name, options))

    def modify(self, name: str, options: Mapping[str, object] | None = None) -> bool:
        return self._mutate(commands.con_modify(name, options))

    def clone(self, source: str, new_name: str) -> bool:
        return self._mutate(commands.con_clone(source, new_name))

    def delete(self, name: str) -> bool:
        return self._mutate(commands.con_delete(name))

    def reload(self) -> bool:
        """Make NetworkManager re-read connection files from disk."""
        return self._mutate(commands.con_reload())

    def load(self, filename: str) -> bool:
        return self._mutate(commands.con_load(filename))

    def import_connection(self, con_type: str, filename: str) -> bool:
        """Import a foreign (e.g. VPN) configuration file."""
        return self._mutate(commands.con_import(con_type, filename))

    def export(self, name: str, filename: str) -> bool:
        return self._mutate(commands.con_export(name, filename))

    def edit(self, name: str) -> str:
        """Command line for the interactive editor; not executed."""
        return self._interactive(commands.con_edit(name))

    def monitor(self) -> str:
        """Command line for ``con monitor``; not executed."""
        return self._interactive(commands.con_monitor())

    # -- devices ------------------------------------------------------------

    def get_devices_data(self) -> list[Record]:
        """Raw ``dev status`` records."""
        return self._query(commands.dev_status())

    def get_devices(self) -> list[Device]:
        return [Device(data, self) for data in self.get_devices_data()]

    def get_device(self, name: str) -> Device | None:
        """The device called *name*, or ``None``."""
        for device in self.get_devices():
            if device.name == name:
                return device
        return None

    def get_device_details(self, name: str | None = None) -> list[Record]:
        return self._query(commands.dev_show(name))

    def connect_device(self, device: str, connection: str | None = None) -> bool:
        return self._mutate(commands.dev_connect(device, connection))

    def disconnect_device(self, device: str) -> bool:
        return self._mutate(commands.dev_disconnect(device))

    # -- wifi ---------------------------------------------------------------

    def get_wifi_networks(self, device: str | None = None) -> list[WifiNetwork]:
        """Visible Wi-Fi networks, optionally as seen by one device."""
        return [
            WifiNetwork(data, self, device)
            for data in self._query(commands.wifi_list(device))
        ]

    def connect_wifi(
        self,
        ssid: str,
        password: str | None = None,
        device: str | None = None,
    ) -> bool:
        return self._mutate(commands.wifi_connect(ssid, password, device))

    def create_hotspot(
        self,
        ssid: str | None = None,
        password: str | None = None,
        device: str | None = None,
    ) -> bool:
        return self._mutate(commands.wifi_hotspot(ssid, password, device))
