"""Structured Python interface over NetworkManager's nmcli."""

from nmcliwrap.common import CommandFailure  # noqa: F401
from nmcliwrap.nmcli import Nmcli  # noqa: F401
from nmcliwrap.parser import parse_multiline_output  # noqa: F401
from nmcliwrap.views import Connection, Device, WifiNetwork  # noqa: F401
