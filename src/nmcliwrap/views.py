"""Typed read-only views over nmcli records.

Each view holds a private copy of one record plus a reference to the
:class:`~nmcliwrap.nmcli.Nmcli` instance that produced it.  Views are
snapshots: they change only when :meth:`refresh` is called.  Mutating
methods delegate to the wrapper using the view's own identifying field.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nmcliwrap.common import (
    Record,
    is_secured,
    parse_signal_strength,
    signal_quality,
)

if TYPE_CHECKING:
    from nmcliwrap.nmcli import Nmcli

_ACTIVE_STATES = ("activated", "connected", "active")
_CONNECTED_STATES = ("connected", "activated", "up")
_UNAVAILABLE_STATES = ("unavailable", "unmanaged")


class _RecordView:
    """Common record access shared by all views."""

    def __init__(self, data: Record, nmcli: Nmcli) -> None:
        self._data: Record = dict(data)
        self._nmcli = nmcli

    def get(self, key: str) -> str | None:
        """Raw field lookup; ``None`` when nmcli did not print *key*."""
        return self._data.get(key)

    def has(self, key: str) -> bool:
        return key in self._data

    def to_dict(self) -> Record:
        """A copy of the underlying record."""
        return dict(self._data)

    def _field(self, key: str) -> str:
        return self._data.get(key, "")

    def _replace_from(self, records: list[Record], key: str, value: str) -> bool:
        """Swap in the first record whose *key* equals *value*."""
        if not value:
            return False
        for record in records:
            if record.get(key) == value:
                self._data = dict(record)
                return True
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------

class Connection(_RecordView):
    """A NetworkManager connection profile (``nmcli con show``).

    Built either from a listing row (``NAME``, ``UUID``...) or from the
    detail record of ``con show <name>`` (``connection.id``,
    ``connection.uuid``...); the identifying fields read from both.
    """

    @property
    def name(self) -> str:
        return self._field("NAME") or self._field("connection.id")

    @property
    def uuid(self) -> str:
        return self._field("UUID") or self._field("connection.uuid")

    @property
    def type(self) -> str:
        return self._field("TYPE")

    @property
    def device(self) -> str:
        return self._field("DEVICE")

    @property
    def state(self) -> str:
        return self._field("STATE")

    @property
    def is_active(self) -> bool:
        return self.state.lower() in _ACTIVE_STATES

    def up(self) -> bool:
        return self._nmcli.up(self.name)

    def down(self) -> bool:
        return self._nmcli.down(self.name)

    def modify(self, options: dict[str, object] | None = None) -> bool:
        return self._nmcli.modify(self.name, options)

    def delete(self) -> bool:
        return self._nmcli.delete(self.name)

    def clone(self, new_name: str) -> bool:
        return self._nmcli.clone(self.name, new_name)

    def export(self, filename: str) -> bool:
        return self._nmcli.export(self.name, filename)

    def edit_command(self) -> str:
        return self._nmcli.edit(self.name)

    def show(self) -> list[Record]:
        """Full ``con show <name>`` details for this connection."""
        return self._nmcli.show(self.name)

    def reload(self) -> bool:
        """Reload all connection files, then refresh this view."""
        ok = self._nmcli.reload()
        if ok:
            self.refresh()
        return ok

    def refresh(self) -> Connection:
        """Re-read this connection from the ``con show`` listing.

        Matches on UUID when known, otherwise on NAME.  Data is left as is
        when nothing matches.
        """
        records = self._nmcli.show()
        if not self._replace_from(records, "UUID", self.uuid):
            self._replace_from(records, "NAME", self.name)
        return self

    def __str__(self) -> str:
        return (
            f"Connection[{self.name}] Type: {self.type}, "
            f"Device: {self.device}, State: {self.state}"
        )


# ---------------------------------------------------------------------------
# Device
# ---------------------------------------------------------------------------

class Device(_RecordView):
    """A network interface as reported by ``nmcli dev status``."""

    @property
    def name(self) -> str:
        return self._field("DEVICE")

    @property
    def type(self) -> str:
        return self._field("TYPE")

    @property
    def state(self) -> str:
        return self._field("STATE")

    @property
    def connection(self) -> str:
        return self._field("CONNECTION")

    @property
    def is_connected(self) -> bool:
        return self.state.lower() in _CONNECTED_STATES

    @property
    def is_available(self) -> bool:
        return self.state.lower() not in _UNAVAILABLE_STATES

    @property
    def is_wifi(self) -> bool:
        return self.type.lower() == "wifi"

    @property
    def is_ethernet(self) -> bool:
        return self.type.lower() == "ethernet"

    def connect(self, connection: str | None = None) -> bool:
        return self._nmcli.connect_device(self.name, connection)

    def disconnect(self) -> bool:
        return self._nmcli.disconnect_device(self.name)

    def details(self) -> list[Record]:
        """``nmcli dev show <device>`` records."""
        return self._nmcli.get_device_details(self.name)

    def wifi_networks(self) -> list[WifiNetwork]:
        """Networks visible from this device; empty for non-Wi-Fi devices."""
        if not self.is_wifi:
            return []
        return self._nmcli.get_wifi_networks(self.name)

    def connect_wifi(self, ssid: str, password: str | None = None) -> bool:
        if not self.is_wifi:
            return False
        return self._nmcli.connect_wifi(ssid, password, self.name)

    def create_hotspot(self, ssid: str, password: str | None = None) -> bool:
        if not self.is_wifi:
            return False
        return self._nmcli.create_hotspot(ssid, password, self.name)

    def refresh(self) -> Device:
        self._replace_from(self._nmcli.get_devices_data(), "DEVICE", self.name)
        return self

    def __str__(self) -> str:
        return (
            f"Device[{self.name}] Type: {self.type}, State: {self.state}, "
            f"Connection: {self.connection or 'None'}"
        )


# ---------------------------------------------------------------------------
# WifiNetwork
# ---------------------------------------------------------------------------

class WifiNetwork(_RecordView):
    """A Wi-Fi network from ``nmcli dev wifi list``.

    *device* is the interface that discovered the network, when known; it
    is the default interface for :meth:`connect`.
    """

    def __init__(self, data: Record, nmcli: Nmcli, device: str | None = None) -> None:
        super().__init__(data, nmcli)
        self.device = device

    @property
    def ssid(self) -> str:
        return self._field("SSID")

    @property
    def bssid(self) -> str:
        return self._field("BSSID")

    @property
    def signal(self) -> str:
        return self._field("SIGNAL")

    @property
    def security(self) -> str:
        return self._field("SECURITY")

    @property
    def mode(self) -> str:
        return self._field("MODE")

    @property
    def channel(self) -> str:
        return self._field("CHAN")

    @property
    def frequency(self) -> str:
        return self._field("FREQ")

    @property
    def rate(self) -> str:
        return self._field("RATE")

    @property
    def signal_strength(self) -> int:
        return parse_signal_strength(self.signal)

    @property
    def signal_quality(self) -> str:
        return signal_quality(self.signal_strength)

    @property
    def has_strong_signal(self) -> bool:
        return self.signal_strength >= 70

    @property
    def has_good_signal(self) -> bool:
        return self.signal_strength >= 50

    @property
    def has_weak_signal(self) -> bool:
        return self.signal_strength < 30

    @property
    def is_secured(self) -> bool:
        return is_secured(self.security)

    @property
    def is_open(self) -> bool:
        return not self.is_secured

    @property
    def is_wpa(self) -> bool:
        return "wpa" in self.security.lower()

    @property
    def is_wep(self) -> bool:
        return "wep" in self.security.lower()

    def connect(self, password: str | None = None, device: str | None = None) -> bool:
        return self._nmcli.connect_wifi(self.ssid, password, device or self.device)

    def is_connected(self) -> bool:
        """True if a connected Wi-Fi device's connection name contains the SSID.

        Runs ``nmcli dev status``.  A hidden network (empty SSID) never
        matches.
        """
        if not self.ssid:
            return False
        for device in self._nmcli.get_devices():
            if device.is_wifi and device.is_connected and self.ssid in device.connection:
                return True
        return False

    def refresh(self) -> WifiNetwork:
        """Re-scan from the same device and pick up this network's entry.

        Matches on BSSID when known, otherwise on SSID.
        """
        records = [n.to_dict() for n in self._nmcli.get_wifi_networks(self.device)]
        if not self._replace_from(records, "BSSID", self.bssid):
            self._replace_from(records, "SSID", self.ssid)
        return self

    def __str__(self) -> str:
        return (
            f"WiFi[{self.ssid}] Signal: {self.signal_strength}%, "
            f"Security: {self.security or 'Open'}, Quality: {self.signal_quality}"
        )


def by_signal(network: WifiNetwork) -> int:
    """Sort key putting the strongest network first."""
    return -network.signal_strength


def by_ssid(network: WifiNetwork) -> str:
    """Sort key ordering networks alphabetically by SSID."""
    return network.ssid
