"""The Octobuild installer package definition."""

from __future__ import annotations

import uuid
from typing import List, Optional

from packaging.version import Version

from .environment import (
    EnvironmentVariable,
    EnvVarAction,
    EnvVarPart,
    expand_environment_variables,
)
from .model import (
    ControlPanelInfo,
    CustomAction,
    Dir,
    Feature,
    File,
    MajorUpgrade,
    Project,
    Property,
    SetProperty,
)

PRODUCT_NAME = "Octobuild"
MANUFACTURER = "Artem V. Navrotskiy"
URL_INFO_ABOUT = "https://github.com/bozaro/octobuild"
UPGRADE_GUID = uuid.UUID("b4505233-6377-406b-955b-2547d86a99a7")
LICENSE_RTF = "LICENSE.rtf"

APPLICATION_FOLDER = "APPLICATIONFOLDER"
TARGET_X64 = r"target\x86_64-pc-windows-gnu\release"
TARGET_X86 = r"target\i686-pc-windows-gnu\release"


def create_features() -> tuple[Feature, Feature]:
    builder = Feature("Octobuild Builder", enabled=True, allow_change=False,
                      attributes={"AllowAdvertise": "no"})
    msbuild = Feature("MSBuild integration", enabled=True, allow_change=True)
    return builder, msbuild


def environment_variables(feature: Feature) -> List[EnvironmentVariable]:
    """Logical variables; each one is installed for both install scopes."""
    return [
        EnvironmentVariable(feature, "PATH", f"[{APPLICATION_FOLDER}]",
                            permanent=False, part=EnvVarPart.LAST, action=EnvVarAction.SET),
        EnvironmentVariable(feature, "OCTOBUILD", f"[{APPLICATION_FOLDER}]",
                            permanent=False, part=EnvVarPart.ALL, action=EnvVarAction.SET),
    ]


def create_project(version: Version, token: Optional[str] = None) -> Project:
    """Octobuild package for ``version``; ``token`` is the manifest spelling used in file names."""
    token = token or str(version)
    builder, msbuild = create_features()

    tree = [
        File(rf"{TARGET_X64}\xgConsole.exe", feature=builder),
        File("LICENSE", feature=builder),
        Dir("msbuild", feature=msbuild, entries=[
            File(rf"{TARGET_X64}\octobuild.dll", name="octobuild.x64.dll"),
            File(rf"{TARGET_X86}\octobuild.dll", name="octobuild.x86.dll"),
            File(r"wixcs\octobuild.targets"),
        ]),
    ]

    entries: List[object] = [
        Property("ApplicationFolderName", PRODUCT_NAME),
        Property("WixAppFolder", "WixPerMachineFolder"),
        Dir(PRODUCT_NAME, tree, id=APPLICATION_FOLDER),
    ]
    entries += expand_environment_variables(environment_variables(builder))

    # WixUI_Advanced defaults the per-machine folder to "Program Files (x86)" on x64
    for sequence in ("ui", "execute"):
        entries.append(SetProperty("WixPerMachineFolder", "[ProgramFiles64Folder][ApplicationFolderName]",
                                   sequence=sequence, after="WixSetDefaultPerMachineFolder"))
    entries.append(CustomAction("BroadcastSettingChange", dll_entry="WixBroadcastEnvironmentChange",
                                after="InstallFinalize", condition="1", return_="ignore"))

    return Project(
        name=PRODUCT_NAME,
        entries=entries,
        guid=UPGRADE_GUID,
        version=version,
        control_panel=ControlPanelInfo(manufacturer=MANUFACTURER, url_info_about=URL_INFO_ABOUT),
        license_file=LICENSE_RTF,
        ui="WixUI_Advanced",
        platform="x64",
        package_attributes={"InstallPrivileges": "elevated", "InstallScope": "perMachine"},
        major_upgrade=MajorUpgrade(),
        light_options=["-sval"],
        out_file_name=f"octobuild-{token}",
        version_token=token,
    )
