from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import yaml
from network.model import ETHERNETS, WIFIS, NetworkDocument
from logger import log

ARTIFACT_FILENAME = "50-cloud-init.yaml"
ARTIFACT_MIME_TYPE = "text/yaml"

FRAGMENT_KEY_ORDER: Tuple[str, ...] = (
    "dhcp4",
    "addresses",
    "gateway4",
    "nameservers",
    "dhcp4-overrides",
    "access-points",
    "optional",
)


class _NetplanDumper(yaml.SafeDumper):
    """SafeDumper that writes lists inline: `addresses: [10.0.0.5/24]`."""

    def ignore_aliases(self, data) -> bool:
        return True


def _represent_list(dumper: yaml.SafeDumper, data: list) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


_NetplanDumper.add_representer(list, _represent_list)


def _ordered_entry(entry: dict) -> dict:
    known = [k for k in FRAGMENT_KEY_ORDER if k in entry]
    extra = sorted(k for k in entry if k not in FRAGMENT_KEY_ORDER)
    return {k: entry[k] for k in known + extra}


def _canonical(doc: NetworkDocument) -> dict:
    raw = doc.to_dict()["network"]
    network: dict = {"version": raw["version"]}
    for section in (ETHERNETS, WIFIS):
        if section in raw:
            network[section] = {
                device: _ordered_entry(entry) for device, entry in raw[section].items()
            }
    return {"network": network}


# -- Serialize ---------------------------------------------------------------

def serialize(doc: NetworkDocument) -> bytes:
    """Render `doc` as netplan YAML. The document is assumed valid."""
    return yaml.dump(
        _canonical(doc),
        Dumper=_NetplanDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        encoding="utf-8",
    )


@dataclass(frozen=True)
class NetplanArtifact:
    content: bytes
    filename: str = ARTIFACT_FILENAME
    mime_type: str = ARTIFACT_MIME_TYPE

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @property
    def size(self) -> int:
        return len(self.content)


def build_artifact(doc: NetworkDocument) -> NetplanArtifact:
    return NetplanArtifact(content=serialize(doc))


# -- Export ------------------------------------------------------------------

class NetplanExporter:
    """Saves generated artifacts into a local download directory."""

    def __init__(self, output_dir: str = "."):
        self.output_dir = Path(output_dir)

    def save(self, artifact: NetplanArtifact) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / artifact.filename
        with open(path, "wb") as f:
            f.write(artifact.content)
        # may hold a WiFi passphrase
        os.chmod(path, 0o600)
        log.info("Saved %s (%d bytes) to %s", artifact.filename, artifact.size, path)
        return path
