"""
Declarative description of an installer package.

Nothing here knows about MSI tables or WiX syntax; ``wxs.render`` turns a
``Project`` into a WiX source document and ``compiler`` hands that to the
WiX toolset.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from packaging.version import Version


def make_id(name: str) -> str:
    """Turn a display name into a valid installer identifier."""
    ident = re.sub(r"[^A-Za-z0-9_.]", "_", name)
    if not re.match(r"[A-Za-z_]", ident):
        ident = "_" + ident
    return ident


@dataclass(eq=False)
class Feature:
    name: str
    enabled: bool = True
    allow_change: bool = True
    attributes: Dict[str, str] = field(default_factory=dict)
    description: str = ""

    @property
    def id(self) -> str:
        return make_id(self.name)

    @property
    def level(self) -> int:
        return 1 if self.enabled else 2


@dataclass
class File:
    """A file copied from ``source`` (relative to the source root) into its directory."""
    source: str
    feature: Optional[Feature] = None
    name: Optional[str] = None

    @property
    def install_name(self) -> str:
        return self.name or self.source.replace("/", "\\").rsplit("\\", 1)[-1]


@dataclass
class Dir:
    name: str
    entries: List[object] = field(default_factory=list)
    feature: Optional[Feature] = None
    id: Optional[str] = None


@dataclass
class Property:
    name: str
    value: str


@dataclass
class SetProperty:
    """Immediate action that assigns ``value`` to ``name`` in one sequence."""
    name: str
    value: str
    sequence: str  # "ui" or "execute"
    after: str
    condition: Optional[str] = None

    @property
    def action_id(self) -> str:
        return f"Set{self.name}_{self.sequence}"


@dataclass
class CustomAction:
    """DLL custom action from the WiX utility library, scheduled in the execute sequence."""
    id: str
    dll_entry: str
    after: str
    condition: str = "1"
    return_: str = "ignore"
    binary_key: str = "WixCA"
    execute: str = "immediate"


@dataclass
class ControlPanelInfo:
    manufacturer: str = ""
    url_info_about: str = ""


@dataclass
class MajorUpgrade:
    schedule: str = "afterInstallInitialize"
    downgrade_error_message: str = "A later version of [ProductName] is already installed. Setup will now exit."
    allow_same_version_upgrades: bool = False


@dataclass
class Project:
    name: str
    entries: List[object]
    guid: uuid.UUID
    version: Version
    control_panel: ControlPanelInfo = field(default_factory=ControlPanelInfo)
    license_file: Optional[str] = None
    ui: Optional[str] = "WixUI_Advanced"
    platform: str = "x64"
    package_attributes: Dict[str, str] = field(default_factory=dict)
    major_upgrade: Optional[MajorUpgrade] = field(default_factory=MajorUpgrade)
    light_options: List[str] = field(default_factory=list)
    out_file_name: Optional[str] = None
    version_token: Optional[str] = None
    language: int = 1033

    @property
    def upgrade_code(self) -> str:
        return "{" + str(self.guid).upper() + "}"

    @property
    def version_label(self) -> str:
        """The version exactly as written in the manifest, when known."""
        return self.version_token or str(self.version)

    @property
    def product_code(self) -> str:
        # Stable per version so rebuilding the same release yields the same package identity
        return "{" + str(uuid.uuid5(self.guid, self.version_label)).upper() + "}"

    @property
    def msi_version(self) -> str:
        release = list(self.version.release[:3])
        while len(release) < 3:
            release.append(0)
        return ".".join(str(part) for part in release)

    @property
    def output_stem(self) -> str:
        return self.out_file_name or f"{self.name}-{self.version_label}"
