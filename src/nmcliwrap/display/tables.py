"""Rich TUI table builders for nmcliwrap.

Builds Rich :class:`Table` objects for connection profiles, devices and
Wi-Fi scan results.  Can be used standalone to check table rendering::

    python -m nmcliwrap.display.tables          # render demo tables
"""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from nmcliwrap.common import GREEN, GREY, YELLOW, security_color, signal_color
from nmcliwrap.views import Connection, Device, WifiNetwork


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _bar_string(strength: int) -> str:
    """Build a signal-bar string like '▂▄▆█' from a 0-100 strength."""
    chars = ["▂", "▄", "▆", "█"]
    bars = 0
    for threshold in (1, 30, 50, 70):
        if strength >= threshold:
            bars += 1
    return "".join(chars[i] if i < bars else " " for i in range(4))


def _colored(text: str, color: str) -> str:
    return f"[{color}]{escape(text)}[/{color}]"


def _state_color(active: bool, available: bool = True) -> str:
    if active:
        return GREEN
    if not available:
        return GREY
    return YELLOW


def _new_table(title: str, caption: str) -> Table:
    return Table(
        title=title,
        title_style="bold cyan",
        caption=caption,
        caption_style="grey50",
        expand=True,
        show_lines=False,
        padding=(0, 1),
    )


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

def build_connections_table(
    connections: list[Connection],
    caption_override: str | None = None,
) -> Table:
    """Build a Rich Table listing connection profiles.

    Active connections are shown bold with a green state.
    """
    caption = caption_override if caption_override is not None else f"{len(connections)} connection(s)"
    table = _new_table("NetworkManager Connections", caption)
    table.add_column("#", style="grey50", width=3, justify="right")
    table.add_column("Name", style="white", min_width=12, max_width=30)
    table.add_column("UUID", style="grey50", width=36)
    table.add_column("Type", width=10)
    table.add_column("Device", width=10)
    table.add_column("State", width=12)

    for i, con in enumerate(connections, 1):
        table.add_row(
            str(i),
            escape(con.name),
            escape(con.uuid),
            escape(con.type),
            escape(con.device) if con.device and con.device != "--" else "[dim]--[/dim]",
            _colored(con.state or "--", _state_color(con.is_active)),
            style="bold" if con.is_active else "",
        )

    return table


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

def build_devices_table(devices: list[Device]) -> Table:
    """Build a Rich Table listing network devices."""
    table = _new_table("NetworkManager Devices", f"{len(devices)} device(s)")
    table.add_column("#", style="grey50", width=3, justify="right")
    table.add_column("Device", style="white", min_width=8, max_width=20)
    table.add_column("Type", width=10)
    table.add_column("State", width=14)
    table.add_column("Connection", min_width=10, max_width=30)

    for i, dev in enumerate(devices, 1):
        table.add_row(
            str(i),
            escape(dev.name),
            escape(dev.type),
            _colored(dev.state or "--", _state_color(dev.is_connected, dev.is_available)),
            escape(dev.connection) if dev.connection and dev.connection != "--" else "[dim]None[/dim]",
        )

    return table


# ---------------------------------------------------------------------------
# Wi-Fi scan table
# ---------------------------------------------------------------------------

def build_wifi_table(
    networks: list[WifiNetwork],
    caption_override: str | None = None,
) -> Table:
    """Build a Rich Table displaying visible Wi-Fi networks.

    Args:
        networks: Networks in display order (sort beforehand if needed).
        caption_override: Optional caption to use instead of the default.
    """
    caption = caption_override if caption_override is not None else f"{len(networks)} networks found"
    table = _new_table("Wi-Fi Networks", caption)
    table.add_column("#", style="grey50", width=3, justify="right")
    table.add_column("SSID", style="white", min_width=15, max_width=30)
    table.add_column("BSSID", style="grey50", width=17)
    table.add_column("Ch", justify="right", width=4)
    table.add_column("Sig", justify="right", width=4)
    table.add_column("Bars", width=5)
    table.add_column("Quality", width=9)
    table.add_column("Security", min_width=8, max_width=16)

    for i, net in enumerate(networks, 1):
        ssid = escape(net.ssid) if net.ssid and net.ssid != "--" else "[dim]<hidden>[/dim]"
        strength = net.signal_strength
        sig_c = signal_color(strength)
        table.add_row(
            str(i),
            ssid,
            escape(net.bssid.upper()),
            escape(net.channel),
            f"[{sig_c}]{strength}[/{sig_c}]",
            f"[{sig_c}]{_bar_string(strength)}[/{sig_c}]",
            net.signal_quality,
            _colored(net.security if net.is_secured else "Open", security_color(net.security)),
        )

    return table


# ---------------------------------------------------------------------------
# Standalone CLI (demo)
# ---------------------------------------------------------------------------

def main() -> None:
    """Render demo tables with sample data for visual testing."""
    from rich.console import Console

    from nmcliwrap.nmcli import Nmcli

    nm = Nmcli(use_sudo=False)
    connections = [
        Connection({"NAME": "Home", "UUID": "8f2c6f1e-0000-4000-8000-000000000001",
                    "TYPE": "wifi", "DEVICE": "wlan0", "STATE": "activated"}, nm),
        Connection({"NAME": "Wired", "UUID": "8f2c6f1e-0000-4000-8000-000000000002",
                    "TYPE": "ethernet", "DEVICE": "--", "STATE": ""}, nm),
    ]
    networks = [
        WifiNetwork({"SSID": "HomeNet", "BSSID": "AA:BB:CC:DD:EE:01", "CHAN": "6",
                     "SIGNAL": "85", "SECURITY": "WPA2"}, nm),
        WifiNetwork({"SSID": "Cafe", "BSSID": "AA:BB:CC:DD:EE:02", "CHAN": "11",
                     "SIGNAL": "42", "SECURITY": "--"}, nm),
    ]
    console = Console()
    console.print(build_connections_table(connections))
    console.print(build_wifi_table(networks))


if __name__ == "__main__":
    main()
