from __future__ import annotations
from types import MappingProxyType
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

NETPLAN_VERSION = 2

ETHERNETS = "ethernets"
WIFIS = "wifis"


class InterfaceKind(Enum):
    # Declaration order is the evaluation order used by the assembler.
    ETHERNET = "ethernet"
    WIFI = "wifi"
    CELLULAR = "cellular"

    @property
    def label(self) -> str:
        return {"ethernet": "Ethernet", "wifi": "WiFi", "cellular": "Cellular"}[self.value]


class AddressingMode(Enum):
    AUTO = "auto"
    MANUAL = "manual"


DEFAULT_DEVICE_NAMES: Dict[InterfaceKind, str] = {
    InterfaceKind.ETHERNET: "eth0",
    InterfaceKind.WIFI: "wlan0",
    InterfaceKind.CELLULAR: "usb0",
}


@dataclass(frozen=True)
class InterfaceSelection:
    """Everything the user entered for one interface, as submitted."""

    kind: InterfaceKind
    enabled: bool = False
    priority: Optional[int] = None
    mode: AddressingMode = AddressingMode.AUTO
    address: Optional[str] = None   # CIDR, manual mode only
    gateway: Optional[str] = None
    dns: Optional[str] = None
    ssid: Optional[str] = None      # WiFi only
    passphrase: Optional[str] = None

    def __repr__(self) -> str:
        # keep the passphrase out of logs and tracebacks
        secret = "***" if self.passphrase else None
        return (
            f"InterfaceSelection(kind={self.kind.value}, enabled={self.enabled}, "
            f"priority={self.priority}, mode={self.mode.value}, "
            f"address={self.address!r}, gateway={self.gateway!r}, dns={self.dns!r}, "
            f"ssid={self.ssid!r}, passphrase={secret!r})"
        )


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class Fragment:
    """Netplan entry for a single device inside one document section.

    `entry` is frozen on construction: mappings become read-only proxies and
    lists become tuples. NetworkDocument.to_dict() hands back plain copies.
    """

    kind: InterfaceKind
    device: str
    section: str            # ETHERNETS | WIFIS
    entry: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entry", _freeze(self.entry))

    @property
    def dhcp4(self) -> bool:
        return bool(self.entry.get("dhcp4"))

    @property
    def route_metric(self) -> Optional[int]:
        return self.entry.get("dhcp4-overrides", {}).get("route-metric")


@dataclass(frozen=True)
class NetworkDocument:
    version: int = NETPLAN_VERSION
    ethernets: Tuple[Fragment, ...] = ()
    wifis: Tuple[Fragment, ...] = ()

    @property
    def fragments(self) -> Tuple[Fragment, ...]:
        return self.ethernets + self.wifis

    @property
    def devices(self) -> List[str]:
        return [f.device for f in self.fragments]

    def fragment(self, device: str) -> Optional[Fragment]:
        for f in self.fragments:
            if f.device == device:
                return f
        return None

    def to_dict(self) -> dict:
        """Return the netplan mapping; empty sections are left out."""
        network: dict = {"version": self.version}
        if self.ethernets:
            network[ETHERNETS] = {
                f.device: _thaw(f.entry) for f in self.ethernets
            }
        if self.wifis:
            network[WIFIS] = {f.device: _thaw(f.entry) for f in self.wifis}
        return {"network": network}


# -- Errors ---------------------------------------------------------------

class ErrorKind(Enum):
    INVALID_ADDRESS_FORMAT = "InvalidAddressFormat"
    PRIORITY_CONFLICT = "PriorityConflict"
    INCOMPLETE_SELECTION = "IncompleteSelection"


@dataclass(frozen=True)
class FieldError:
    kind: InterfaceKind
    field: str              # "address" | "gateway" | "dns" | "priority" | ...
    error: ErrorKind
    message: str

    @property
    def key(self) -> str:
        return f"{self.kind.value}.{self.field}"

    def __str__(self) -> str:
        return f"{self.kind.label} {self.field}: {self.message}"


class AssemblyError(Exception):
    """Raised when a selection set cannot produce a document.

    Carries every offending field so the caller can mark each one.
    """

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors: Tuple[FieldError, ...] = tuple(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    @property
    def fields(self) -> List[str]:
        return [e.key for e in self.errors]

    def for_kind(self, kind: InterfaceKind) -> List[FieldError]:
        return [e for e in self.errors if e.kind is kind]

    def has(self, error: ErrorKind) -> bool:
        return any(e.error is error for e in self.errors)
