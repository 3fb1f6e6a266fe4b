import pytest
from dataclasses import replace
from network.assembler import NetworkDocumentAssembler, assemble
from network.model import (
    AddressingMode, AssemblyError, ErrorKind, InterfaceKind, InterfaceSelection,
)
from network.netplan import serialize

ETH, WIFI, CELL = InterfaceKind.ETHERNET, InterfaceKind.WIFI, InterfaceKind.CELLULAR


def _ethernet_manual(**kw):
    fields = dict(
        kind=ETH, enabled=True, mode=AddressingMode.MANUAL,
        address="10.0.0.5/24", gateway="10.0.0.1", dns="1.1.1.1",
    )
    fields.update(kw)
    return InterfaceSelection(**fields)


def test_empty_selection_gives_version_only_document():
    doc = assemble([])
    assert doc.to_dict() == {"network": {"version": 2}}

def test_disabled_interfaces_are_ignored():
    doc = assemble([InterfaceSelection(kind=ETH, enabled=False, address="garbage")])
    assert doc.devices == []

def test_ethernet_auto(ethernet_auto):
    doc = assemble([ethernet_auto])
    eth = doc.to_dict()["network"]["ethernets"]["eth0"]
    assert eth == {"dhcp4": True, "dhcp4-overrides": {"route-metric": 100}}

def test_cellular_alone_gets_its_own_ethernets_section(cellular):
    net = assemble([cellular]).to_dict()["network"]
    assert list(net["ethernets"]) == ["usb0"]
    assert "wifis" not in net

def test_ethernet_and_cellular_are_siblings(ethernet_auto, cellular):
    net = assemble([cellular, ethernet_auto]).to_dict()["network"]
    ethernets = net["ethernets"]
    assert set(ethernets) == {"eth0", "usb0"}
    assert ethernets["eth0"]["dhcp4"] is True
    assert ethernets["eth0"]["dhcp4-overrides"]["route-metric"] == 100
    assert ethernets["usb0"]["dhcp4"] is True
    assert ethernets["usb0"]["dhcp4-overrides"]["route-metric"] == 200
    assert set(net) == {"version", "ethernets"}

def test_manual_ethernet_keeps_static_mode_beside_cellular(cellular):
    doc = assemble([_ethernet_manual(), cellular])
    eth = doc.fragment("eth0")
    usb = doc.fragment("usb0")
    assert eth.dhcp4 is False
    assert eth.entry["addresses"] == ("10.0.0.5/24",)
    assert usb.dhcp4 is True
    assert usb.route_metric == 200
    assert doc.devices == ["eth0", "usb0"]

def test_wifi_is_independent_of_ethernet_cellular_rule(ethernet_auto, wifi_manual, cellular):
    net = assemble([ethernet_auto, wifi_manual, cellular]).to_dict()["network"]
    assert set(net["ethernets"]) == {"eth0", "usb0"}
    assert set(net["wifis"]) == {"wlan0"}

def test_wifi_manual_end_to_end(wifi_manual):
    wlan = assemble([wifi_manual]).to_dict()["network"]["wifis"]["wlan0"]
    assert wlan["dhcp4"] is False
    assert wlan["addresses"] == ["192.168.0.50/24"]
    assert wlan["gateway4"] == "192.168.0.1"
    assert wlan["nameservers"]["addresses"] == ["8.8.8.8"]
    assert wlan["access-points"]["home"]["password"] == "secret"
    assert wlan["optional"] is True

def test_invalid_wifi_address_aborts_whole_document(ethernet_auto, wifi_manual):
    bad_wifi = replace(wifi_manual, address="192.168.0.500/24")
    with pytest.raises(AssemblyError) as exc:
        assemble([ethernet_auto, bad_wifi])
    err = exc.value
    assert err.fields == ["wifi.address"]
    assert err.errors[0].error is ErrorKind.INVALID_ADDRESS_FORMAT
    assert err.for_kind(ETH) == []

def test_errors_are_aggregated_across_interfaces(wifi_manual):
    bad_eth = _ethernet_manual(gateway="10.0.0.1/24", dns="dns")
    bad_wifi = replace(wifi_manual, address="192.168.0.50")
    with pytest.raises(AssemblyError) as exc:
        assemble([bad_wifi, bad_eth])
    # reported in evaluation order: Ethernet first
    assert exc.value.fields == ["ethernet.gateway", "ethernet.dns", "wifi.address"]

def test_missing_manual_fields_are_incomplete():
    with pytest.raises(AssemblyError) as exc:
        assemble([_ethernet_manual(address=None, dns="")])
    errs = {e.key: e.error for e in exc.value.errors}
    assert errs == {
        "ethernet.address": ErrorKind.INCOMPLETE_SELECTION,
        "ethernet.dns": ErrorKind.INCOMPLETE_SELECTION,
    }

def test_auto_mode_requires_priority():
    with pytest.raises(AssemblyError) as exc:
        assemble([InterfaceSelection(kind=CELL, enabled=True)])
    assert exc.value.fields == ["cellular.priority"]
    assert exc.value.has(ErrorKind.INCOMPLETE_SELECTION)

def test_manual_mode_does_not_require_priority():
    doc = assemble([_ethernet_manual(priority=None)])
    assert doc.devices == ["eth0"]

def test_duplicate_priorities_conflict(ethernet_auto):
    cell = InterfaceSelection(kind=CELL, enabled=True, priority=100)
    with pytest.raises(AssemblyError) as exc:
        assemble([ethernet_auto, cell])
    assert exc.value.fields == ["ethernet.priority", "cellular.priority"]
    assert all(e.error is ErrorKind.PRIORITY_CONFLICT for e in exc.value.errors)

def test_three_way_priority_clash_names_both_other_interfaces(ethernet_auto):
    wifi = InterfaceSelection(kind=WIFI, enabled=True, priority=100, ssid="home", passphrase="pw")
    cell = InterfaceSelection(kind=CELL, enabled=True, priority=100)
    with pytest.raises(AssemblyError) as exc:
        assemble([ethernet_auto, wifi, cell])
    messages = {e.key: e.message for e in exc.value.errors}
    assert "Ethernet" in messages["wifi.priority"]
    assert "Cellular" in messages["wifi.priority"]
    assert "Ethernet" in messages["cellular.priority"]
    assert "WiFi" in messages["cellular.priority"]

def test_duplicate_priority_on_disabled_interface_is_fine(ethernet_auto):
    cell = InterfaceSelection(kind=CELL, enabled=False, priority=100)
    assert assemble([ethernet_auto, cell]).devices == ["eth0"]

def test_wifi_requires_access_point_credentials():
    wifi = InterfaceSelection(kind=WIFI, enabled=True, priority=300)
    with pytest.raises(AssemblyError) as exc:
        assemble([wifi])
    assert exc.value.fields == ["wifi.ssid", "wifi.passphrase"]

def test_cellular_manual_mode_is_rejected():
    cell = InterfaceSelection(kind=CELL, enabled=True, priority=100, mode=AddressingMode.MANUAL)
    with pytest.raises(AssemblyError) as exc:
        assemble([cell])
    assert exc.value.fields == ["cellular.mode"]

def test_duplicate_kinds_raise_value_error(ethernet_auto):
    with pytest.raises(ValueError):
        assemble([ethernet_auto, ethernet_auto])

def test_custom_device_names(ethernet_auto, cellular):
    asm = NetworkDocumentAssembler(device_names={ETH: "enp1s0", CELL: "wwan0"})
    assert asm.assemble([ethernet_auto, cellular]).devices == ["enp1s0", "wwan0"]

def test_device_names_must_be_unique():
    with pytest.raises(ValueError):
        NetworkDocumentAssembler(device_names={CELL: "eth0"})

def test_assemble_twice_is_byte_identical(ethernet_auto, wifi_manual, cellular):
    sels = [ethernet_auto, wifi_manual, cellular]
    assert serialize(assemble(sels)) == serialize(assemble(sels))

def test_assembly_error_message_lists_fields(wifi_manual):
    with pytest.raises(AssemblyError) as exc:
        assemble([replace(wifi_manual, dns="8.8.8")])
    assert "WiFi dns" in str(exc.value)
