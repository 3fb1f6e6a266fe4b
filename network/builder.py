"""
Per-interface netplan fragments.

Every builder is pure: callers pass already-validated values and get back a
Fragment. Address validation happens before any of these are called.
"""
from __future__ import annotations
from network.model import ETHERNETS, WIFIS, Fragment, InterfaceKind


def _dhcp_entry(priority: int) -> dict:
    return {
        "dhcp4": True,
        "dhcp4-overrides": {"route-metric": priority},
    }


def _manual_entry(address: str, gateway: str, dns: str) -> dict:
    return {
        "dhcp4": False,
        "addresses": [address],
        "gateway4": gateway,
        "nameservers": {"addresses": [dns]},
    }


def _access_points(ssid: str, passphrase: str) -> dict:
    return {ssid: {"password": passphrase}}


def build_ethernet_auto(priority: int, device: str = "eth0") -> Fragment:
    return Fragment(
        kind=InterfaceKind.ETHERNET,
        device=device,
        section=ETHERNETS,
        entry=_dhcp_entry(priority),
    )


def build_ethernet_manual(
    address: str, gateway: str, dns: str, device: str = "eth0"
) -> Fragment:
    return Fragment(
        kind=InterfaceKind.ETHERNET,
        device=device,
        section=ETHERNETS,
        entry=_manual_entry(address, gateway, dns),
    )


def build_wifi_auto(
    priority: int, ssid: str, passphrase: str, device: str = "wlan0"
) -> Fragment:
    entry = _dhcp_entry(priority)
    entry["access-points"] = _access_points(ssid, passphrase)
    entry["optional"] = True   # boot must not wait for the AP
    return Fragment(kind=InterfaceKind.WIFI, device=device, section=WIFIS, entry=entry)


def build_wifi_manual(
    address: str,
    gateway: str,
    dns: str,
    ssid: str,
    passphrase: str,
    device: str = "wlan0",
) -> Fragment:
    entry = _manual_entry(address, gateway, dns)
    entry["access-points"] = _access_points(ssid, passphrase)
    entry["optional"] = True
    return Fragment(kind=InterfaceKind.WIFI, device=device, section=WIFIS, entry=entry)


def build_cellular_auto(priority: int, device: str = "usb0") -> Fragment:
    # The modem shows up as a USB ethernet gadget, hence the ethernets section.
    return Fragment(
        kind=InterfaceKind.CELLULAR,
        device=device,
        section=ETHERNETS,
        entry=_dhcp_entry(priority),
    )
