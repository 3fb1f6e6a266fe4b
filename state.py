from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from network.model import AddressingMode, InterfaceKind, InterfaceSelection
from network.priority import PriorityRegistry


@dataclass
class InterfaceFields:
    enabled: bool = False
    mode: AddressingMode = AddressingMode.AUTO
    address: str = ""
    gateway: str = ""
    dns: str = ""


@dataclass
class FormState:
    """Raw values as the user edits the form; snapshotted per submission."""

    interfaces: Dict[InterfaceKind, InterfaceFields] = field(
        default_factory=lambda: {k: InterfaceFields() for k in InterfaceKind}
    )
    priorities: PriorityRegistry = field(default_factory=PriorityRegistry)

    # WiFi access point
    ssid: str = ""
    passphrase: str = ""

    def __getitem__(self, kind: InterfaceKind) -> InterfaceFields:
        return self.interfaces[kind]

    def to_selections(self) -> Tuple[InterfaceSelection, ...]:
        return tuple(self._selection(kind) for kind in InterfaceKind)

    def _selection(self, kind: InterfaceKind) -> InterfaceSelection:
        f = self.interfaces[kind]
        wifi = kind is InterfaceKind.WIFI
        return InterfaceSelection(
            kind=kind,
            enabled=f.enabled,
            priority=self.priorities.get(kind),
            mode=AddressingMode.AUTO if kind is InterfaceKind.CELLULAR else f.mode,
            address=_clean(f.address),
            gateway=_clean(f.gateway),
            dns=_clean(f.dns),
            ssid=_clean(self.ssid) if wifi else None,
            # passphrases may legitimately contain spaces
            passphrase=(self.passphrase or None) if wifi else None,
        )


def _clean(value: str) -> Optional[str]:
    value = value.strip()
    return value or None
