"""
Turns a submitted selection set into a NetworkDocument.

Validation runs over every enabled interface before any fragment is built,
so a failure anywhere leaves no partial document behind.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional
from network import builder
from network.model import (
    DEFAULT_DEVICE_NAMES,
    NETPLAN_VERSION,
    AddressingMode,
    AssemblyError,
    ErrorKind,
    FieldError,
    Fragment,
    InterfaceKind,
    InterfaceSelection,
    NetworkDocument,
)
from network.priority import find_conflicts
from validators import validate_address, validate_dns, validate_gateway
from logger import log

_MANUAL_FIELDS = (
    ("address", "IP address", validate_address),
    ("gateway", "Default gateway", validate_gateway),
    ("dns", "DNS server", validate_dns),
)


class NetworkDocumentAssembler:
    def __init__(self, device_names: Optional[Mapping[InterfaceKind, str]] = None):
        names = dict(DEFAULT_DEVICE_NAMES)
        if device_names:
            names.update(device_names)
        if len(set(names.values())) != len(names):
            raise ValueError(f"Device names must be unique, got {names}")
        self.device_names: Dict[InterfaceKind, str] = names

    # -- Public ------------------------------------------------------------

    def assemble(self, selections: Iterable[InterfaceSelection]) -> NetworkDocument:
        """
        Validate and build the document for `selections`.
        Raises AssemblyError listing every offending field.
        """
        by_kind = self._index(selections)
        enabled = [by_kind[k] for k in InterfaceKind if k in by_kind and by_kind[k].enabled]

        conflicts: Dict[InterfaceKind, List[InterfaceKind]] = {}
        for kind, _value, other in find_conflicts(enabled):
            conflicts.setdefault(kind, []).append(other)

        errors: List[FieldError] = []
        for sel in enabled:
            errors.extend(self._check(sel, conflicts.get(sel.kind, [])))
        if errors:
            log.warning("Assembly rejected: %s", ", ".join(e.key for e in errors))
            raise AssemblyError(errors)

        fragments = {sel.kind: self._build(sel) for sel in enabled}
        doc = self._merge(fragments)
        log.info("Assembled network document with devices %s", doc.devices)
        return doc

    # -- Validation ----------------------------------------------------------

    @staticmethod
    def _index(
        selections: Iterable[InterfaceSelection],
    ) -> Dict[InterfaceKind, InterfaceSelection]:
        by_kind: Dict[InterfaceKind, InterfaceSelection] = {}
        for sel in selections:
            if sel.kind in by_kind:
                raise ValueError(f"Duplicate selection for {sel.kind.value}")
            by_kind[sel.kind] = sel
        return by_kind

    @staticmethod
    def _check(
        sel: InterfaceSelection, conflicting: List[InterfaceKind]
    ) -> List[FieldError]:
        kind = sel.kind
        errors: List[FieldError] = []

        def _err(field: str, error: ErrorKind, message: str) -> None:
            errors.append(FieldError(kind=kind, field=field, error=error, message=message))

        manual = sel.mode is AddressingMode.MANUAL
        if kind is InterfaceKind.CELLULAR and manual:
            _err("mode", ErrorKind.INCOMPLETE_SELECTION,
                 "Cellular only supports automatic addressing.")
            manual = False

        if sel.priority is None:
            if not manual:
                _err("priority", ErrorKind.INCOMPLETE_SELECTION, "Please select a priority.")
        elif conflicting:
            holders = ", ".join(k.label for k in conflicting)
            _err("priority", ErrorKind.PRIORITY_CONFLICT,
                 f"Priority {sel.priority} is also selected for {holders}.")

        if manual:
            for field, label, check in _MANUAL_FIELDS:
                value = getattr(sel, field)
                if not value:
                    _err(field, ErrorKind.INCOMPLETE_SELECTION, f"{label} is required.")
                    continue
                ok, msg = check(value)
                if not ok:
                    _err(field, ErrorKind.INVALID_ADDRESS_FORMAT, msg)

        if kind is InterfaceKind.WIFI:
            if not sel.ssid:
                _err("ssid", ErrorKind.INCOMPLETE_SELECTION, "Access point name is required.")
            if not sel.passphrase:
                _err("passphrase", ErrorKind.INCOMPLETE_SELECTION, "Password is required.")

        return errors

    # -- Construction ----------------------------------------------------------

    def _build(self, sel: InterfaceSelection) -> Fragment:
        device = self.device_names[sel.kind]
        manual = sel.mode is AddressingMode.MANUAL

        if sel.kind is InterfaceKind.ETHERNET:
            if manual:
                return builder.build_ethernet_manual(
                    sel.address, sel.gateway, sel.dns, device=device
                )
            return builder.build_ethernet_auto(sel.priority, device=device)

        if sel.kind is InterfaceKind.WIFI:
            if manual:
                return builder.build_wifi_manual(
                    sel.address, sel.gateway, sel.dns,
                    sel.ssid, sel.passphrase, device=device,
                )
            return builder.build_wifi_auto(
                sel.priority, sel.ssid, sel.passphrase, device=device
            )

        return builder.build_cellular_auto(sel.priority, device=device)

    @staticmethod
    def _merge(fragments: Dict[InterfaceKind, Fragment]) -> NetworkDocument:
        ethernet = fragments.get(InterfaceKind.ETHERNET)
        wifi = fragments.get(InterfaceKind.WIFI)
        cellular = fragments.get(InterfaceKind.CELLULAR)

        if ethernet and cellular:
            # Combined section: the modem sits beside eth0 and replaces the
            # cellular-only section it would otherwise get on its own.
            log.debug(
                "Combining %s (%s) and %s under ethernets",
                ethernet.device, "dhcp" if ethernet.dhcp4 else "static",
                cellular.device,
            )
            ethernets = (ethernet, cellular)
        elif ethernet:
            ethernets = (ethernet,)
        elif cellular:
            ethernets = (cellular,)
        else:
            ethernets = ()

        return NetworkDocument(
            version=NETPLAN_VERSION,
            ethernets=ethernets,
            wifis=(wifi,) if wifi else (),
        )


def assemble(selections: Iterable[InterfaceSelection]) -> NetworkDocument:
    return NetworkDocumentAssembler().assemble(selections)
