"""Tests for nmcliwrap.views — typed record views and their pass-throughs.

The wrapper is replaced by a MagicMock so each test can assert exactly
which facade call a view forwards to.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from nmcliwrap.views import Connection, Device, WifiNetwork, by_signal, by_ssid


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

CONNECTION_DATA = {
    "NAME": "Test Connection",
    "UUID": "12345678-1234-1234-1234-123456789abc",
    "TYPE": "wifi",
    "DEVICE": "wlan0",
    "STATE": "activated",
}

DEVICE_DATA = {
    "DEVICE": "wlan0",
    "TYPE": "wifi",
    "STATE": "connected",
    "CONNECTION": "MyWiFi",
}

WIFI_DATA = {
    "SSID": "TestNetwork",
    "BSSID": "00:11:22:33:44:55",
    "SIGNAL": "85",
    "SECURITY": "WPA2",
    "MODE": "Infra",
    "CHAN": "6",
    "FREQ": "2437 MHz",
    "RATE": "54 Mbit/s",
}


@pytest.fixture
def nm():
    return MagicMock()


# ---------------------------------------------------------------------------
# Shared record access
# ---------------------------------------------------------------------------

class TestRecordAccess:
    def test_get_known_and_unknown_key(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        assert con.get("NAME") == "Test Connection"
        assert con.get("NONEXISTENT") is None

    def test_has(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        assert con.has("NAME") is True
        assert con.has("NONEXISTENT") is False

    def test_holds_private_copy(self, nm):
        data = dict(CONNECTION_DATA)
        con = Connection(data, nm)
        data["NAME"] = "changed"
        assert con.name == "Test Connection"

    def test_to_dict_returns_copy(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        d = con.to_dict()
        d["NAME"] = "changed"
        assert con.name == "Test Connection"

    def test_detail_record_identity_fields(self, nm):
        con = Connection({"connection.id": "Home", "connection.uuid": "1111"}, nm)
        assert con.name == "Home"
        assert con.uuid == "1111"
        con.export("home.nmconnection")
        nm.export.assert_called_once_with("Home", "home.nmconnection")

    def test_listing_fields_win_over_detail_fields(self, nm):
        con = Connection({"NAME": "Listed", "connection.id": "Detail"}, nm)
        assert con.name == "Listed"

    def test_missing_accessor_field_is_empty_string(self, nm):
        assert Connection({}, nm).uuid == ""

    def test_no_dynamic_attribute_access(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        with pytest.raises(AttributeError):
            con.NAME  # noqa: B018


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------

class TestConnection:
    def test_accessors(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        assert con.name == "Test Connection"
        assert con.uuid == "12345678-1234-1234-1234-123456789abc"
        assert con.type == "wifi"
        assert con.device == "wlan0"
        assert con.state == "activated"

    @pytest.mark.parametrize("state", ["activated", "ACTIVATED", "Connected", "active"])
    def test_is_active_case_insensitive(self, nm, state):
        assert Connection({"STATE": state}, nm).is_active is True

    @pytest.mark.parametrize("state", ["", "deactivated", "activating"])
    def test_not_active(self, nm, state):
        assert Connection({"STATE": state}, nm).is_active is False

    def test_str(self, nm):
        assert str(Connection(CONNECTION_DATA, nm)) == (
            "Connection[Test Connection] Type: wifi, Device: wlan0, State: activated"
        )

    def test_mutations_forward_name(self, nm):
        con = Connection(CONNECTION_DATA, nm)
        con.up()
        nm.up.assert_called_once_with("Test Connection")
        con.down()
        nm.down.assert_called_once_with("Test Connection")
        con.modify({"ipv4.method": "auto"})
        nm.modify.assert_called_once_with("Test Connection", {"ipv4.method": "auto"})
        con.delete()
        nm.delete.assert_called_once_with("Test Connection")
        con.clone("Copy")
        nm.clone.assert_called_once_with("Test Connection", "Copy")
        con.export("/tmp/out")
        nm.export.assert_called_once_with("Test Connection", "/tmp/out")

    def test_up_returns_facade_result(self, nm):
        nm.up.return_value = False
        assert Connection(CONNECTION_DATA, nm).up() is False

    def test_edit_command_and_show(self, nm):
        nm.edit.return_value = "nmcli con edit 'Test Connection'"
        con = Connection(CONNECTION_DATA, nm)
        assert con.edit_command() == "nmcli con edit 'Test Connection'"
        con.show()
        nm.show.assert_called_once_with("Test Connection")

    def test_refresh_replaces_data_by_uuid(self, nm):
        nm.show.return_value = [
            {"NAME": "Other", "UUID": "x"},
            dict(CONNECTION_DATA, NAME="Renamed", STATE="deactivated"),
        ]
        con = Connection(CONNECTION_DATA, nm)
        assert con.refresh() is con
        assert con.name == "Renamed"
        assert con.is_active is False
        nm.show.assert_called_once_with()

    def test_refresh_falls_back_to_name(self, nm):
        nm.show.return_value = [{"NAME": "Home", "STATE": "activated"}]
        con = Connection({"NAME": "Home", "STATE": ""}, nm)
        con.refresh()
        assert con.is_active is True

    def test_refresh_without_match_keeps_data(self, nm):
        nm.show.return_value = []
        con = Connection(CONNECTION_DATA, nm)
        con.refresh()
        assert con.to_dict() == CONNECTION_DATA

    def test_reload_refreshes_on_success(self, nm):
        nm.reload.return_value = True
        nm.show.return_value = [dict(CONNECTION_DATA, STATE="deactivated")]
        con = Connection(CONNECTION_DATA, nm)
        assert con.reload() is True
        assert con.state == "deactivated"

    def test_reload_failure_skips_refresh(self, nm):
        nm.reload.return_value = False
        con = Connection(CONNECTION_DATA, nm)
        assert con.reload() is False
        nm.show.assert_not_called()


# ---------------------------------------------------------------------------
# Device
# ---------------------------------------------------------------------------

class TestDevice:
    def test_accessors_and_predicates(self, nm):
        dev = Device(DEVICE_DATA, nm)
        assert dev.name == "wlan0"
        assert dev.type == "wifi"
        assert dev.state == "connected"
        assert dev.connection == "MyWiFi"
        assert dev.is_connected is True
        assert dev.is_available is True
        assert dev.is_wifi is True
        assert dev.is_ethernet is False

    @pytest.mark.parametrize("state, connected", [
        ("connected", True), ("ACTIVATED", True), ("Up", True),
        ("disconnected", False), ("connecting (configuring)", False),
    ])
    def test_is_connected(self, nm, state, connected):
        assert Device({"STATE": state}, nm).is_connected is connected

    @pytest.mark.parametrize("state, available", [
        ("unavailable", False), ("UNMANAGED", False), ("disconnected", True), ("", True),
    ])
    def test_is_available(self, nm, state, available):
        assert Device({"STATE": state}, nm).is_available is available

    def test_type_match_case_insensitive(self, nm):
        assert Device({"TYPE": "Ethernet"}, nm).is_ethernet is True
        assert Device({"TYPE": "WIFI"}, nm).is_wifi is True

    def test_str_without_connection(self, nm):
        dev = Device({"DEVICE": "eth0", "TYPE": "ethernet", "STATE": "unavailable"}, nm)
        assert str(dev) == "Device[eth0] Type: ethernet, State: unavailable, Connection: None"

    def test_connect_disconnect_details(self, nm):
        dev = Device(DEVICE_DATA, nm)
        dev.connect()
        nm.connect_device.assert_called_once_with("wlan0", None)
        dev.disconnect()
        nm.disconnect_device.assert_called_once_with("wlan0")
        dev.details()
        nm.get_device_details.assert_called_once_with("wlan0")

    def test_wifi_networks_on_wifi_device(self, nm):
        nm.get_wifi_networks.return_value = ["net"]
        assert Device(DEVICE_DATA, nm).wifi_networks() == ["net"]
        nm.get_wifi_networks.assert_called_once_with("wlan0")

    def test_wifi_networks_on_ethernet_device_skips_tool(self, nm):
        dev = Device({"DEVICE": "eth0", "TYPE": "ethernet"}, nm)
        assert dev.wifi_networks() == []
        nm.get_wifi_networks.assert_not_called()

    def test_connect_wifi_and_hotspot_only_for_wifi(self, nm):
        eth = Device({"DEVICE": "eth0", "TYPE": "ethernet"}, nm)
        assert eth.connect_wifi("Cafe") is False
        assert eth.create_hotspot("Spot") is False
        nm.connect_wifi.assert_not_called()
        nm.create_hotspot.assert_not_called()

        wlan = Device(DEVICE_DATA, nm)
        wlan.connect_wifi("Cafe", "pw")
        nm.connect_wifi.assert_called_once_with("Cafe", "pw", "wlan0")
        wlan.create_hotspot("Spot", "secret123")
        nm.create_hotspot.assert_called_once_with("Spot", "secret123", "wlan0")

    def test_refresh(self, nm):
        nm.get_devices_data.return_value = [
            {"DEVICE": "eth0", "STATE": "connected"},
            dict(DEVICE_DATA, STATE="disconnected"),
        ]
        dev = Device(DEVICE_DATA, nm)
        dev.refresh()
        assert dev.state == "disconnected"

    def test_refresh_without_match_keeps_data(self, nm):
        nm.get_devices_data.return_value = [{"DEVICE": "eth0"}]
        dev = Device(DEVICE_DATA, nm)
        dev.refresh()
        assert dev.to_dict() == DEVICE_DATA


# ---------------------------------------------------------------------------
# WifiNetwork
# ---------------------------------------------------------------------------

class TestWifiNetwork:
    def test_accessors(self, nm):
        net = WifiNetwork(WIFI_DATA, nm)
        assert net.ssid == "TestNetwork"
        assert net.bssid == "00:11:22:33:44:55"
        assert net.signal == "85"
        assert net.security == "WPA2"
        assert net.mode == "Infra"
        assert net.channel == "6"
        assert net.frequency == "2437 MHz"
        assert net.rate == "54 Mbit/s"

    def test_derived_values(self, nm):
        net = WifiNetwork(WIFI_DATA, nm)
        assert net.signal_strength == 85
        assert net.signal_quality == "Excellent"
        assert net.is_secured is True
        assert net.is_open is False
        assert net.is_wpa is True
        assert net.is_wep is False
        assert net.has_strong_signal is True
        assert net.has_good_signal is True
        assert net.has_weak_signal is False

    def test_unparsable_signal_is_zero(self, nm):
        net = WifiNetwork({"SIGNAL": "--"}, nm)
        assert net.signal_strength == 0
        assert net.signal_quality == "Very Weak"
        assert net.has_weak_signal is True

    @pytest.mark.parametrize("security", ["", "--", "none", "NONE"])
    def test_open_networks(self, nm, security):
        net = WifiNetwork({"SECURITY": security}, nm)
        assert net.is_secured is False
        assert net.is_open is True

    def test_wep_detection(self, nm):
        assert WifiNetwork({"SECURITY": "wep"}, nm).is_wep is True

    def test_str(self, nm):
        net = WifiNetwork({"SSID": "Cafe", "SIGNAL": "42", "SECURITY": ""}, nm)
        assert str(net) == "WiFi[Cafe] Signal: 42%, Security: Open, Quality: Weak"

    def test_connect_uses_discovering_device(self, nm):
        net = WifiNetwork(WIFI_DATA, nm, "wlan0")
        net.connect("pw")
        nm.connect_wifi.assert_called_once_with("TestNetwork", "pw", "wlan0")

    def test_connect_device_override(self, nm):
        net = WifiNetwork(WIFI_DATA, nm, "wlan0")
        net.connect(device="wlan1")
        nm.connect_wifi.assert_called_once_with("TestNetwork", None, "wlan1")

    def test_is_connected_matches_connected_wifi_device(self, nm):
        nm.get_devices.return_value = [
            Device({"DEVICE": "eth0", "TYPE": "ethernet", "STATE": "connected",
                    "CONNECTION": "TestNetwork"}, nm),
            Device({"DEVICE": "wlan0", "TYPE": "wifi", "STATE": "connected",
                    "CONNECTION": "TestNetwork 1"}, nm),
        ]
        assert WifiNetwork(WIFI_DATA, nm).is_connected() is True

    def test_is_connected_false_when_disconnected(self, nm):
        nm.get_devices.return_value = [
            Device({"DEVICE": "wlan0", "TYPE": "wifi", "STATE": "disconnected",
                    "CONNECTION": "TestNetwork"}, nm),
        ]
        assert WifiNetwork(WIFI_DATA, nm).is_connected() is False

    def test_hidden_network_never_connected(self, nm):
        assert WifiNetwork({"SSID": ""}, nm).is_connected() is False
        nm.get_devices.assert_not_called()

    def test_refresh_matches_bssid(self, nm):
        fresh = WifiNetwork(dict(WIFI_DATA, SIGNAL="40"), nm, "wlan0")
        nm.get_wifi_networks.return_value = [fresh]
        net = WifiNetwork(WIFI_DATA, nm, "wlan0")
        net.refresh()
        assert net.signal_strength == 40
        nm.get_wifi_networks.assert_called_once_with("wlan0")

    def test_refresh_without_match_keeps_data(self, nm):
        nm.get_wifi_networks.return_value = []
        net = WifiNetwork(WIFI_DATA, nm)
        net.refresh()
        assert net.signal_strength == 85

    def test_sort_keys(self, nm):
        nets = [
            WifiNetwork({"SSID": "b", "SIGNAL": "20"}, nm),
            WifiNetwork({"SSID": "a", "SIGNAL": "90"}, nm),
            WifiNetwork({"SSID": "c", "SIGNAL": "55"}, nm),
        ]
        assert [n.ssid for n in sorted(nets, key=by_signal)] == ["a", "c", "b"]
        assert [n.ssid for n in sorted(nets, key=by_ssid)] == ["a", "b", "c"]
